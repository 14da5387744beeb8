"""Tests for BirdeyeClient request handling (HTTP mocked)."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from src.parsers.birdeye import client as birdeye_client
from src.parsers.birdeye.client import BirdeyeApiError, BirdeyeClient


def _response(status_code: int, payload: dict | None = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.json = lambda: payload or {}
    if status_code >= 400:
        request = httpx.Request("GET", "https://public-api.birdeye.so/x")
        resp.raise_for_status.side_effect = httpx.HTTPStatusError(
            "error", request=request, response=httpx.Response(status_code, request=request)
        )
    else:
        resp.raise_for_status.return_value = None
    return resp


@pytest.fixture
def no_retry_delay():
    with patch.object(birdeye_client, "RETRY_DELAYS", [0.0, 0.0]):
        yield


@pytest.mark.asyncio
async def test_get_token_overview_unwraps_data():
    client = BirdeyeClient("key", max_rps=1000)
    payload = {"success": True, "data": {"address": "M", "symbol": "TST", "price": 0.5}}
    with patch.object(client, "_client") as mock_http:
        mock_http.request = AsyncMock(return_value=_response(200, payload))
        overview = await client.get_token_overview("M")

    assert overview.symbol == "TST"
    assert float(overview.price) == 0.5
    mock_http.request.assert_awaited_once_with(
        "GET", "/defi/token_overview", params={"address": "M"}
    )
    await client.close()


@pytest.mark.asyncio
async def test_unsuccessful_payload_raises():
    client = BirdeyeClient("key", max_rps=1000)
    payload = {"success": False, "message": "address not found"}
    with patch.object(client, "_client") as mock_http:
        mock_http.request = AsyncMock(return_value=_response(200, payload))
        with pytest.raises(BirdeyeApiError, match="address not found"):
            await client.get_token_overview("M")


@pytest.mark.asyncio
async def test_unauthorized_raises_without_retry():
    client = BirdeyeClient("bad", max_rps=1000)
    with patch.object(client, "_client") as mock_http:
        mock_http.request = AsyncMock(return_value=_response(401))
        with pytest.raises(BirdeyeApiError, match="401"):
            await client.get_token_security("M")
    assert mock_http.request.await_count == 1


@pytest.mark.asyncio
async def test_rate_limited_retries_then_succeeds(no_retry_delay):
    client = BirdeyeClient("key", max_rps=1000)
    ok = _response(200, {"success": True, "data": {"mintAuthority": None}})
    with patch.object(client, "_client") as mock_http:
        mock_http.request = AsyncMock(side_effect=[_response(429), ok])
        security = await client.get_token_security("M")
    assert security.is_mintable is False
    assert mock_http.request.await_count == 2


@pytest.mark.asyncio
async def test_timeout_exhausts_retries(no_retry_delay):
    client = BirdeyeClient("key", max_rps=1000)
    with patch.object(client, "_client") as mock_http:
        mock_http.request = AsyncMock(side_effect=httpx.ReadTimeout("slow"))
        with pytest.raises(BirdeyeApiError, match="after 3 attempts"):
            await client.get_token_overview("M")
    assert mock_http.request.await_count == 3


@pytest.mark.asyncio
async def test_not_found_status_raises():
    client = BirdeyeClient("key", max_rps=1000)
    with patch.object(client, "_client") as mock_http:
        mock_http.request = AsyncMock(return_value=_response(404))
        with pytest.raises(BirdeyeApiError, match="HTTP 404"):
            await client.get_token_metadata("M")


@pytest.mark.asyncio
async def test_get_token_holders_skips_malformed_items():
    client = BirdeyeClient("key", max_rps=1000)
    payload = {
        "success": True,
        "data": {
            "items": [
                {"owner": "A", "ui_amount": 100},
                {"ui_amount": 50},  # no owner
                {"owner": "B", "ui_amount": 25},
            ]
        },
    }
    with patch.object(client, "_client") as mock_http:
        mock_http.request = AsyncMock(return_value=_response(200, payload))
        holders = await client.get_token_holders("M", limit=3)

    assert [h.owner for h in holders] == ["A", "B"]
    _, kwargs = mock_http.request.call_args
    assert kwargs["params"] == {"address": "M", "limit": 3, "offset": 0}
