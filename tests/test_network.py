import asyncio

import aiohttp
import pytest

from gamescout_core.exceptions import NetworkUnavailable, UpstreamProtocolError
from gamescout_core.network import ensure_success, fetch, read_json

URL = "https://api.example.com/games"


@pytest.mark.asyncio
async def test_fetch_returns_raw_response(session):
    session.add(URL, {"count": 1})
    resp = await fetch(session, URL, {"page": "1"})

    assert resp.status == 200
    assert resp.ok
    assert resp.json() == {"count": 1}
    assert session.calls == [(URL, {"page": "1"})]


@pytest.mark.asyncio
async def test_fetch_does_not_translate_http_errors(session):
    session.add(URL, {"detail": "Server error"}, status=502)
    resp = await fetch(session, URL)

    assert resp.status == 502
    assert not resp.ok


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        aiohttp.ClientConnectionError("Connection refused"),
        aiohttp.ServerDisconnectedError(),
        asyncio.TimeoutError(),
    ],
)
async def test_fetch_translates_transport_failures(session, error):
    session.add(URL, error=error)

    with pytest.raises(NetworkUnavailable) as exc_info:
        await fetch(session, URL)

    assert exc_info.value.url == URL
    assert exc_info.value.original_error is error
    assert exc_info.value.__cause__ is error


@pytest.mark.asyncio
async def test_ensure_success_raises_protocol_error(session):
    session.add(URL, "nope", status=403)
    resp = await fetch(session, URL)

    with pytest.raises(UpstreamProtocolError) as exc_info:
        ensure_success(resp, "RAWG")
    assert exc_info.value.status_code == 403
    assert exc_info.value.service == "RAWG"


@pytest.mark.asyncio
async def test_read_json_rejects_garbage(session):
    session.add(URL, "<html>maintenance</html>")
    resp = await fetch(session, URL)

    with pytest.raises(UpstreamProtocolError):
        read_json(resp, "RAWG")
