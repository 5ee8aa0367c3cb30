import logging
import threading
from typing import Callable, Dict, Generic, List, Optional, Tuple, TypeVar

from fastapi import Request

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ------------------------------------------------------------------------------
# IN-MEMORY STORE
# ------------------------------------------------------------------------------
class StringStore(Generic[T]):
    """Thread-safe, insertion-ordered mapping from digest to record.

    Lives for the lifetime of the application; nothing is persisted.
    """

    def __init__(self):
        self._records: Dict[str, T] = {}
        self._lock = threading.Lock()

    def insert_if_absent(self, key: str, factory: Callable[[], T]) -> Tuple[T, bool]:
        """Insert ``factory()`` under ``key`` unless the key is taken.

        The existence check and the insert happen under one lock, and
        ``factory`` is only called when the key is absent. Returns the
        stored record and whether it was created by this call.
        """
        with self._lock:
            existing = self._records.get(key)
            if existing is not None:
                return existing, False
            record = factory()
            self._records[key] = record
            return record, True

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            return self._records.get(key)

    def remove(self, key: str) -> bool:
        with self._lock:
            return self._records.pop(key, None) is not None

    def values(self) -> List[T]:
        """Snapshot of all records in insertion order"""
        with self._lock:
            return list(self._records.values())

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._records


# ------------------------------------------------------------------------------
# STORE DEPENDENCY
# ------------------------------------------------------------------------------
def get_store(request: Request) -> StringStore:
    """Dependency to provide the application's store."""
    return request.app.state.store


# ------------------------------------------------------------------------------
# LIFECYCLE
# ------------------------------------------------------------------------------
def init_store() -> StringStore:
    """Create an empty store (runs once on startup)."""
    store = StringStore()
    logger.info("In-memory string store initialized")
    return store


def close_store(store: StringStore) -> None:
    """Drop every record (runs once on shutdown)."""
    count = len(store)
    store.clear()
    logger.info(f"In-memory string store closed, {count} record(s) discarded")
