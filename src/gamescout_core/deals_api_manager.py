import logging
from typing import Any

import aiohttp

from gamescout_core.exceptions import ConfigurationError
from gamescout_core.models import Deal
from gamescout_core.network import ensure_success, fetch, read_json
from gamescout_core.parsing import compute_savings, parse_price
from gamescout_core.store_directory import StoreDirectory
from gamescout_core.ttl_cache import TTLCache

logger = logging.getLogger(__name__)

DEALS_TTL = 5 * 60
TITLE_SEARCH_LIMIT = 5
TOP_DEALS_PAGE_SIZE = 120
REDIRECT_URL = "https://www.cheapshark.com/redirect?dealID={deal_id}"


class DealsAPIManager:
    """
    Client for the price-comparison service (CheapShark-compatible API).

    Store names come from the StoreDirectory; normalized deal lists are
    cached in the shared TTLCache.
    """

    SERVICE = "CheapShark"

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str,
        cache: TTLCache,
        stores: StoreDirectory | None = None,
    ):
        if not base_url or not base_url.strip():
            raise ConfigurationError("Deals base URL")
        self.session = session
        self.base_url = base_url.strip().rstrip("/")
        self.cache = cache
        self.stores = stores or StoreDirectory(session, self.base_url)

    async def get_deals_by_title(self, title: str | None) -> list[Deal]:
        """
        All current offers for one title, best offer per store,
        sorted by savings (highest first) then price (lowest first).
        """
        if not title or not title.strip():
            return []

        await self.stores.ensure_fresh()

        cache_key = "game:" + title.strip().casefold()
        cached, found = self.cache.try_get(cache_key)
        if found:
            return list(cached)

        game_id = await self._resolve_game_id(title.strip())
        if not game_id:
            logger.info(f"No price listing found for '{title.strip()}'")
            self.cache.set(cache_key, (), DEALS_TTL)
            return []

        resp = await fetch(self.session, f"{self.base_url}/games", {"id": game_id})
        ensure_success(resp, self.SERVICE)
        data = read_json(resp, self.SERVICE)
        if not isinstance(data, dict):
            data = {}

        info = data.get("info") if isinstance(data.get("info"), dict) else {}
        thumb = info.get("thumb") or None
        raw_deals = data.get("deals") if isinstance(data.get("deals"), list) else []

        deals = []
        for raw in raw_deals:
            if not isinstance(raw, dict):
                continue
            deal = self._build_deal(raw, price_field="price", normal_field="retailPrice", image=thumb)
            if deal:
                deals.append(deal)

        deals = best_per_store(deals)
        deals.sort(key=lambda d: (-d.savings, d.price))

        self.cache.set(cache_key, tuple(deals), DEALS_TTL)
        return deals

    async def get_top_deals(self) -> list[Deal]:
        """Top-rated deals feed, best offer per title, cheapest first."""
        await self.stores.ensure_fresh()

        params = {"pageSize": str(TOP_DEALS_PAGE_SIZE), "sortBy": "DealRating"}
        cache_key = f"deals?pageSize={TOP_DEALS_PAGE_SIZE}&sortBy=DealRating"
        cached, found = self.cache.try_get(cache_key)
        if found:
            return list(cached)

        resp = await fetch(self.session, f"{self.base_url}/deals", params)
        ensure_success(resp, self.SERVICE)
        raw_deals = read_json(resp, self.SERVICE)

        deals = []
        for raw in raw_deals if isinstance(raw_deals, list) else []:
            if not isinstance(raw, dict) or not _text(raw.get("title")):
                continue
            deal = self._build_deal(
                raw,
                price_field="salePrice",
                normal_field="normalPrice",
                image=raw.get("thumb") or None,
                title=_text(raw.get("title")),
            )
            if deal:
                deals.append(deal)

        deals = best_per_title(deals)
        deals.sort(key=lambda d: d.price)

        self.cache.set(cache_key, tuple(deals), DEALS_TTL)
        logger.debug(f"Top deals feed: {len(raw_deals) if isinstance(raw_deals, list) else 0} raw -> {len(deals)} titles")
        return deals

    async def _resolve_game_id(self, title: str) -> str | None:
        params = {"title": title, "limit": str(TITLE_SEARCH_LIMIT), "exact": "1"}
        resp = await fetch(self.session, f"{self.base_url}/games", params)
        ensure_success(resp, self.SERVICE)
        found = read_json(resp, self.SERVICE)
        if not isinstance(found, list) or not found or not isinstance(found[0], dict):
            return None
        return _text(found[0].get("gameID")) or None

    def _build_deal(
        self,
        raw: dict[str, Any],
        price_field: str,
        normal_field: str,
        image: str | None,
        title: str | None = None,
    ) -> Deal | None:
        store_id = _text(raw.get("storeID"))
        deal_id = _text(raw.get("dealID"))
        if not store_id or not deal_id:
            return None

        price = parse_price(raw.get(price_field))
        normal_price = parse_price(raw.get(normal_field))
        return Deal(
            store=self.stores.resolve(store_id),
            price=price,
            normal_price=normal_price,
            savings=compute_savings(price, normal_price),
            url=REDIRECT_URL.format(deal_id=deal_id),
            image=image,
            title=title,
            store_id=store_id,
        )


def best_per_store(deals: list[Deal]) -> list[Deal]:
    """Keeps the lowest-priced deal for each store id, in first-seen store order."""
    best: dict[str, Deal] = {}
    for deal in deals:
        current = best.get(deal.store_id)
        if current is None or deal.price < current.price:
            best[deal.store_id] = deal
    return list(best.values())


def best_per_title(deals: list[Deal]) -> list[Deal]:
    """Keeps the lowest-priced deal for each title, compared case-insensitively."""
    best: dict[str, Deal] = {}
    for deal in deals:
        key = (deal.title or "").casefold()
        current = best.get(key)
        if current is None or deal.price < current.price:
            best[key] = deal
    return list(best.values())


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()
