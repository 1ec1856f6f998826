"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus)
- task_tree.py: unbalanced binary search tree keyed by task id
- active_report.py: collect/sort/emit pipeline for active tasks
- formatting.py: fixed-width report rows
- task_store.py: SQLite-backed snapshot of the tree
"""
