# src/task_tree/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from collections.abc import Iterable
from pathlib import Path

from .errors import TaskValidationError
from .task_models import DESCRIPTION_MAX_LEN, Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite snapshot of the task tree.

    The tree itself lives in memory; this store only keeps an ordered copy:
    - `seq` is the position in the saved sequence (the tree's pre-order),
      so re-inserting rows by `seq` rebuilds the same tree shape
    - ids are not unique here (the tree may be configured to accept duplicates)

    Schema handling follows the usual pattern:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Each method opens its own short-lived SQLite connection.
    """

    def __init__(
        self,
        db_path: str | Path = "tasks.sqlite3",
        *,
        max_description_len: int = DESCRIPTION_MAX_LEN,
    ) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._max_description_len = max_description_len
        self._ensure_schema()
        try:
            total = self.count_tasks()
        except sqlite3.Error:
            total = -1
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    seq INTEGER PRIMARY KEY,
                    id INTEGER NOT NULL,
                    description TEXT NOT NULL,
                    time_limit INTEGER NOT NULL,
                    status TEXT NOT NULL DEFAULT 'active'
                )
                """
            )

            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("saved_at", "REAL NOT NULL DEFAULT 0")

            conn.commit()
        finally:
            conn.close()

    def _row_to_task(self, row: sqlite3.Row) -> Task:
        return Task.create(
            row["id"],
            row["description"],
            row["time_limit"],
            row["status"],
            max_description_len=self._max_description_len,
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def save_tasks(self, tasks: Iterable[Task]) -> int:
        """Replace the stored snapshot with `tasks`, keeping their order."""
        now = time.time()
        rows = [
            (seq, t.id, t.description, t.time_limit, t.status.value, now)
            for seq, t in enumerate(tasks)
        ]

        conn = self._get_conn()
        try:
            with conn:
                conn.execute("DELETE FROM tasks")
                conn.executemany(
                    """
                    INSERT INTO tasks(seq, id, description, time_limit, status, saved_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    rows,
                )
        finally:
            conn.close()

        logger.info("TaskStore saved %d tasks to %s", len(rows), self._db_path)
        return len(rows)

    def load_tasks(self) -> list[Task]:
        """Stored tasks in saved order. Rows that fail validation are skipped."""
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT * FROM tasks ORDER BY seq ASC")
            raw_rows = cur.fetchall()
        finally:
            conn.close()

        out: list[Task] = []
        for row in raw_rows:
            try:
                out.append(self._row_to_task(row))
            except TaskValidationError as e:
                logger.warning("Skipping invalid stored task seq=%s: %s", row["seq"], e)

        logger.info("TaskStore loaded %d tasks from %s", len(out), self._db_path)
        return out

    def clear(self) -> None:
        conn = self._get_conn()
        try:
            with conn:
                conn.execute("DELETE FROM tasks")
        finally:
            conn.close()
        logger.debug("TaskStore cleared %s", self._db_path)
