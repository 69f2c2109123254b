"""
In-Memory Star Store
====================

Process-local StarStore backend. Data is lost on restart.
"""

import logging
import threading
from typing import Dict, List, Optional

from ...domain.star_store import StarStore, DEFAULT_NAMESPACE

logger = logging.getLogger(__name__)


class InMemoryStarStore(StarStore):
    """
    Process-local store backed by dicts.
    Data is lost on restart; use for tests and local development.
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE):
        super().__init__(namespace)
        self._lock = threading.Lock()
        # dicts preserve insertion order, which list_users() relies on
        self._users: Dict[str, Optional[str]] = {}
        self._counts: Dict[str, Dict[str, int]] = {}

    def register_user(self, user_id: str, display_name: Optional[str] = None) -> None:
        if not user_id:
            return
        with self._lock:
            if user_id not in self._users:
                self._users[user_id] = None
                logger.debug(f"[{self.namespace}] registered user {user_id}")
            if display_name:
                self._users[user_id] = display_name

    def increment_star(self, user_id: str, day_key: str) -> int:
        with self._lock:
            days = self._counts.setdefault(user_id, {})
            days[day_key] = days.get(day_key, 0) + 1
            return days[day_key]

    def get_user_day_counts(self, user_id: str) -> Dict[str, int]:
        with self._lock:
            return dict(self._counts.get(user_id, {}))

    def list_users(self) -> List[str]:
        with self._lock:
            return list(self._users)

    def get_display_names(self) -> Dict[str, str]:
        with self._lock:
            return {uid: name for uid, name in self._users.items() if name}
