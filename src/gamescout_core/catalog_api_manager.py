import logging
from collections.abc import Iterable
from typing import Any
from urllib.parse import urlencode

import aiohttp

from gamescout_core.exceptions import ConfigurationError
from gamescout_core.models import GameDetails, GameSummary, SearchResult, SortBy
from gamescout_core.network import ensure_success, fetch, read_json
from gamescout_core.parsing import flatten_names, parse_date, parse_int, strip_html
from gamescout_core.ttl_cache import TTLCache

logger = logging.getLogger(__name__)

SEARCH_TTL = 5 * 60
DETAILS_TTL = 30 * 60

ORDERING = {
    SortBy.NAME: "name",
    SortBy.METACRITIC: "-metacritic",
    SortBy.RELEASE_DATE: "-released",
    SortBy.RATING: "-rating",
}


class CatalogAPIManager:
    """
    Client for the game metadata catalog (RAWG-compatible API).
    Search pages and detail records are cached in the shared TTLCache.
    """

    SERVICE = "RAWG"

    def __init__(self, session: aiohttp.ClientSession, base_url: str, cache: TTLCache, api_key: str = ""):
        if not base_url or not base_url.strip():
            raise ConfigurationError("Catalog base URL")
        self.session = session
        self.base_url = base_url.strip().rstrip("/")
        self.cache = cache
        self.api_key = api_key or ""

    def build_search_query(
        self,
        query: str | None,
        platforms: Iterable[str] | None = None,
        genres: Iterable[str] | None = None,
        page: int = 1,
        page_size: int = 20,
        sort: SortBy | None = None,
    ) -> list[tuple[str, str]]:
        """Canonical, ordered parameter list for a search. Its encoded form is the cache key."""
        params = [("page", str(page)), ("page_size", str(page_size))]

        if query and query.strip():
            params.append(("search", query))
            params.append(("search_precise", "true"))
            params.append(("exclude_additions", "true"))
            params.append(("search_exact", "true"))

        platform_filter = ",".join(p for p in platforms or [] if p)
        if platform_filter:
            params.append(("platforms", platform_filter))
        genre_filter = ",".join(g for g in genres or [] if g)
        if genre_filter:
            params.append(("genres", genre_filter))

        ordering = ORDERING.get(sort) if sort else None
        if ordering:
            params.append(("ordering", ordering))
        if self.api_key:
            params.append(("key", self.api_key))
        return params

    async def search(
        self,
        query: str | None,
        platforms: Iterable[str] | None = None,
        genres: Iterable[str] | None = None,
        page: int = 1,
        page_size: int = 20,
        sort: SortBy | None = None,
    ) -> SearchResult:
        params = self.build_search_query(query, platforms, genres, page, page_size, sort)
        cache_key = "games?" + urlencode(params)

        cached, found = self.cache.try_get(cache_key)
        if found:
            return cached

        resp = await fetch(self.session, f"{self.base_url}/games", params)
        ensure_success(resp, self.SERVICE)
        data = read_json(resp, self.SERVICE)
        if not isinstance(data, dict):
            data = {}

        results = data.get("results")
        items = tuple(
            self._parse_summary(raw) for raw in (results if isinstance(results, list) else []) if isinstance(raw, dict)
        )
        result = SearchResult(items=items, total=parse_int(data.get("count")) or 0)

        self.cache.set(cache_key, result, SEARCH_TTL)
        logger.debug(f"Catalog search page {page} returned {len(items)} of {result.total} games")
        return result

    async def get_details(self, game_id: int) -> GameDetails | None:
        """
        Fetches the detail record and its screenshots. Both requests must succeed.
        Returns None when the catalog does not know the id.
        """
        cache_key = f"details:{game_id}"
        cached, found = self.cache.try_get(cache_key)
        if found:
            return cached

        params = [("key", self.api_key)] if self.api_key else None

        resp = await fetch(self.session, f"{self.base_url}/games/{game_id}", params)
        if resp.status == 404:
            logger.info(f"Game {game_id} not found in catalog")
            return None
        ensure_success(resp, self.SERVICE)
        raw = read_json(resp, self.SERVICE)
        if not isinstance(raw, dict):
            return None

        shots_resp = await fetch(self.session, f"{self.base_url}/games/{game_id}/screenshots", params)
        ensure_success(shots_resp, self.SERVICE)
        shots = read_json(shots_resp, self.SERVICE)

        details = self._parse_details(raw, shots, game_id)
        self.cache.set(cache_key, details, DETAILS_TTL)
        return details

    def _parse_summary(self, raw: dict[str, Any]) -> GameSummary:
        return GameSummary(
            id=parse_int(raw.get("id")) or 0,
            name=raw.get("name") or "",
            metacritic=parse_int(raw.get("metacritic")),
            released=parse_date(raw.get("released")),
            platforms=flatten_names(raw.get("platforms"), wrapper="platform"),
            genres=flatten_names(raw.get("genres")),
            image=raw.get("background_image") or None,
        )

    def _parse_details(self, raw: dict[str, Any], shots: Any, game_id: int) -> GameDetails:
        description_raw = raw.get("description_raw")
        if isinstance(description_raw, str) and description_raw.strip():
            description = description_raw
        else:
            description = strip_html(raw.get("description") if isinstance(raw.get("description"), str) else None)

        screenshots = []
        results = shots.get("results") if isinstance(shots, dict) else None
        for shot in results if isinstance(results, list) else []:
            image = shot.get("image") if isinstance(shot, dict) else None
            if isinstance(image, str) and image.strip():
                screenshots.append(image)

        return GameDetails(
            id=parse_int(raw.get("id")) or game_id,
            name=raw.get("name") or "",
            description=description,
            screenshots=tuple(screenshots),
            platforms=flatten_names(raw.get("platforms"), wrapper="platform"),
            genres=flatten_names(raw.get("genres")),
            metacritic=parse_int(raw.get("metacritic")),
        )
