# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for everything else. Only the names below are read.
"""

# Example: accept duplicate ids (legacy behaviour)
# ALLOW_DUPLICATE_IDS = True

# Example: never write the snapshot on exit
# AUTOSAVE = False

# Example: run without the console
# CONSOLE_ENABLED = False
