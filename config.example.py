# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKTREE_APP_NAME": "App display name (default: task-tree).",
    "TASKTREE_LOG_LEVEL": "Console logging level (default: INFO).",
    # Connectors
    "TASKTREE_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    # Tree behaviour
    "TASKTREE_ALLOW_DUPLICATE_IDS": (
        "Accept an id that is already in the tree (default: false). "
        "Later duplicates are shadowed by the first one for /find."
    ),
    "TASKTREE_DESCRIPTION_MAX_LEN": "Maximum description length (default: 20).",
    # Persistence
    "TASKTREE_AUTOSAVE": "Snapshot the tree on exit when it changed (default: true).",
    # Paths (gitignored)
    "TASKTREE_DATA_DIR": "Local data directory, also holds task_tree.log (default: .local/task_tree).",
    "TASKTREE_TASKS_DB_PATH": "Snapshot SQLite path (default: <data_dir>/tasks.sqlite3).",
}
