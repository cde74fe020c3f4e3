import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any

import aiohttp

from gamescout_core.exceptions import NetworkUnavailable, UpstreamProtocolError

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": "GameScout/1.0",
    "Accept": "application/json",
}

Params = list[tuple[str, str]] | dict[str, str] | None


@dataclass(frozen=True)
class UpstreamResponse:
    """Status and body of a completed GET, read fully before the connection is released."""

    url: str
    status: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        return json.loads(self.text)


async def fetch(session: aiohttp.ClientSession, url: str, params: Params = None) -> UpstreamResponse:
    """
    Issues a single GET and returns the raw response.

    Every transport-level failure is collapsed into NetworkUnavailable.
    Non-2xx statuses are returned as-is; the caller decides what they mean.
    """
    try:
        async with session.get(url, params=params, headers=HEADERS) as resp:
            text = await resp.text()
            return UpstreamResponse(url=url, status=resp.status, text=text)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.warning(f"Transport failure for {url}: {type(e).__name__}")
        raise NetworkUnavailable(url, e) from e


def ensure_success(resp: UpstreamResponse, service: str) -> None:
    if not resp.ok:
        logger.warning(f"{service} returned {resp.status} for {resp.url}")
        raise UpstreamProtocolError(service, resp.status, resp.url)


def read_json(resp: UpstreamResponse, service: str) -> Any:
    """Parses the body as JSON; an unreadable body is a protocol error."""
    try:
        return resp.json()
    except ValueError as e:
        raise UpstreamProtocolError(service, resp.status, resp.url, "Body is not valid JSON") from e
