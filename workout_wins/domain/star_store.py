"""
Star Store - Abstraction Over the Star Count Backend
=====================================================

Owns every StarCount and User record. The recording workflow is the only
writer; aggregation and rendering only read.

ARCHITECTURAL DECISION:
- One interface, several backends (in-memory for tests, SQLite for
  production), chosen by configuration
- increment_star() must be atomic per (user, day): the backend performs the
  increment, the caller never reads then writes
- Every store is bound to a namespace; records in one namespace are
  invisible to another

USAGE:
    store = InMemoryStarStore()
    store.register_user("U123", "alice")
    store.increment_star("U123", "2025-01-06")  # -> 1
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "workout"


class StarStore(ABC):
    """
    Interface for star count persistence.
    Implement this interface to add new storage backends.
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE):
        self.namespace = namespace

    @abstractmethod
    def register_user(self, user_id: str, display_name: Optional[str] = None) -> None:
        """
        Add user_id to the known users if absent.
        A non-empty display_name overwrites the stored one (last write wins).
        Empty user ids are ignored.
        """
        ...

    @abstractmethod
    def increment_star(self, user_id: str, day_key: str) -> int:
        """Atomically add one star for (user_id, day_key). Returns the new count."""
        ...

    @abstractmethod
    def get_user_day_counts(self, user_id: str) -> Dict[str, int]:
        """Full history for a user. Days without stars are absent."""
        ...

    @abstractmethod
    def list_users(self) -> List[str]:
        """Known user ids, in first-registration order."""
        ...

    @abstractmethod
    def get_display_names(self) -> Dict[str, str]:
        """Map of user id to the last known display name."""
        ...

    def close(self) -> None:
        """Release backend resources."""
        pass
