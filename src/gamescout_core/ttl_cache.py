import logging
import threading
import time
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class TTLCache:
    """
    In-process key -> (value, expiry) store shared by every caller of a client.

    An entry is only returned while its expiry is strictly in the future.
    Expired entries are not evicted; they are ignored and replaced by the next set().
    There is no size bound, so memory grows with the number of distinct keys.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def try_get(self, key: str) -> tuple[Any, bool]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry[0] > self._clock():
                logger.debug(f"Cache hit: {key}")
                return entry[1], True
        logger.debug(f"Cache miss: {key}")
        return None, False

    def set(self, key: str, value: Any, ttl: float) -> None:
        """Inserts or replaces the entry; ttl is in seconds."""
        with self._lock:
            self._entries[key] = (self._clock() + ttl, value)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
