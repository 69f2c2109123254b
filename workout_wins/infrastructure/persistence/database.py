"""
SQLite Star Store - Durable Star Count Persistence
==================================================

Stores users and per-day star counts in a local SQLite file. Every row
carries the store's namespace so several teams can share one file.
"""

import sqlite3
import logging
from typing import Dict, List, Optional
from contextlib import contextmanager

from ...domain.errors import StoreUnavailable
from ...domain.star_store import StarStore, DEFAULT_NAMESPACE

logger = logging.getLogger(__name__)

DATABASE_FILE = "workout_wins.db"


class SQLiteStarStore(StarStore):
    """
    SQLite implementation of StarStore.

    Usage:
        store = SQLiteStarStore("workout_wins.db", namespace="T012345")
        store.init()

        store.register_user("U123", "alice")
        store.increment_star("U123", "2025-01-06")  # -> 1
    """

    def __init__(self, db_path: str = DATABASE_FILE, namespace: str = DEFAULT_NAMESPACE,
                 timeout: float = 10.0):
        super().__init__(namespace)
        self.db_path = db_path
        self._timeout = timeout

    @contextmanager
    def _get_connection(self):
        """Get database connection with context manager. Backend errors become StoreUnavailable."""
        try:
            conn = sqlite3.connect(self.db_path, timeout=self._timeout)
        except sqlite3.Error as e:
            raise StoreUnavailable(f"Cannot open star database {self.db_path}: {e}") from e

        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Star database error: {e}")
            raise StoreUnavailable(f"Star database error: {e}") from e
        finally:
            conn.close()

    def init(self):
        """Initialize database tables."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    namespace TEXT NOT NULL,
                    user_id TEXT NOT NULL,
                    display_name TEXT DEFAULT '',
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    UNIQUE(namespace, user_id)
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS stars (
                    namespace TEXT NOT NULL,
                    user_id TEXT NOT NULL,
                    day_key TEXT NOT NULL,
                    count INTEGER NOT NULL DEFAULT 0,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    PRIMARY KEY (namespace, user_id, day_key)
                )
            """)

            logger.info(f"Star database initialized: {self.db_path} (namespace '{self.namespace}')")

    # ── Users ──────────────────────────────────────────────────────

    def register_user(self, user_id: str, display_name: Optional[str] = None) -> None:
        if not user_id:
            return

        with self._get_connection() as conn:
            conn.execute(
                "INSERT OR IGNORE INTO users (namespace, user_id) VALUES (?, ?)",
                (self.namespace, user_id)
            )
            if display_name:
                conn.execute(
                    "UPDATE users SET display_name = ? WHERE namespace = ? AND user_id = ?",
                    (display_name, self.namespace, user_id)
                )

    def list_users(self) -> List[str]:
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT user_id FROM users WHERE namespace = ? ORDER BY id",
                (self.namespace,)
            ).fetchall()
            return [row["user_id"] for row in rows]

    def get_display_names(self) -> Dict[str, str]:
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT user_id, display_name FROM users WHERE namespace = ? AND display_name != ''",
                (self.namespace,)
            ).fetchall()
            return {row["user_id"]: row["display_name"] for row in rows}

    # ── Stars ──────────────────────────────────────────────────────

    def increment_star(self, user_id: str, day_key: str) -> int:
        # The upsert takes the write lock, so the read below sees our own
        # increment and nobody else's until commit.
        with self._get_connection() as conn:
            conn.execute(
                """INSERT INTO stars (namespace, user_id, day_key, count)
                   VALUES (?, ?, ?, 1)
                   ON CONFLICT(namespace, user_id, day_key)
                   DO UPDATE SET count = count + 1, updated_at = CURRENT_TIMESTAMP""",
                (self.namespace, user_id, day_key)
            )
            row = conn.execute(
                "SELECT count FROM stars WHERE namespace = ? AND user_id = ? AND day_key = ?",
                (self.namespace, user_id, day_key)
            ).fetchone()
            return row["count"]

    def get_user_day_counts(self, user_id: str) -> Dict[str, int]:
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT day_key, count FROM stars WHERE namespace = ? AND user_id = ? AND count > 0",
                (self.namespace, user_id)
            ).fetchall()
            return {row["day_key"]: row["count"] for row in rows}


def init_database(db_path: str = DATABASE_FILE, namespace: str = DEFAULT_NAMESPACE) -> SQLiteStarStore:
    """Create the tables if needed and return a ready store."""
    store = SQLiteStarStore(db_path, namespace=namespace)
    store.init()
    return store
