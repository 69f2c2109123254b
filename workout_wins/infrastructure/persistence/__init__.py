import logging

from ..config import Settings
from ...domain.star_store import StarStore, DEFAULT_NAMESPACE
from .memory_store import InMemoryStarStore
from .database import SQLiteStarStore, init_database

logger = logging.getLogger(__name__)


def create_store(settings: Settings) -> StarStore:
    """Build the star store selected by STAR_STORE_BACKEND."""
    backend = settings.store.backend
    namespace = settings.store.namespace

    if backend == "memory":
        logger.info(f"Using in-memory star store (namespace '{namespace}')")
        return InMemoryStarStore(namespace=namespace)

    if backend == "sqlite":
        return init_database(settings.store.database_file, namespace=namespace)

    raise ValueError(f"Unknown star store backend: {backend}")


__all__ = [
    "StarStore",
    "InMemoryStarStore",
    "SQLiteStarStore",
    "DEFAULT_NAMESPACE",
    "create_store",
    "init_database",
]
