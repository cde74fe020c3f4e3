import logging
import threading
import time
from collections.abc import Callable

import aiohttp

from gamescout_core.network import ensure_success, fetch, read_json

logger = logging.getLogger(__name__)

STORES_TTL = 24 * 60 * 60  # 24 hours


class StoreDirectory:
    """
    Maps the price service's opaque store ids to display names.

    The whole map is swapped in one assignment on refresh, so readers see
    either the previous complete map or the new one, never a mix.
    """

    SERVICE = "CheapShark"

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str,
        ttl: float = STORES_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.ttl = ttl
        self._clock = clock
        self._names: dict[str, str] = {}
        self._expires_at = 0.0
        self._lock = threading.Lock()

    def is_fresh(self) -> bool:
        with self._lock:
            return bool(self._names) and self._expires_at > self._clock()

    async def ensure_fresh(self) -> None:
        if self.is_fresh():
            return

        resp = await fetch(self.session, f"{self.base_url}/stores")
        ensure_success(resp, self.SERVICE)
        raw = read_json(resp, self.SERVICE)

        names = {}
        for store in raw if isinstance(raw, list) else []:
            if not isinstance(store, dict) or not _is_active(store.get("isActive")):
                continue
            store_id = str(store.get("storeID") or "").strip()
            store_name = str(store.get("storeName") or "").strip()
            if store_id and store_name:
                names[store_id] = store_name

        with self._lock:
            self._names = names
            self._expires_at = self._clock() + self.ttl
        logger.info(f"Store directory refreshed with {len(names)} active stores")

    def resolve(self, store_id: str) -> str:
        with self._lock:
            name = self._names.get(store_id)
        return name or f"Store {store_id}"


def _is_active(value) -> bool:
    try:
        return int(value) == 1
    except (TypeError, ValueError):
        return False
