"""Tests for the httpx-backed transport."""

from __future__ import annotations

import httpx
import pytest

from graphpaper import TransportError
from graphpaper.core.transport import HttpTransport

URL = "https://charts.example.test/points.json"


def _transport(handler) -> HttpTransport:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpTransport(client=client)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class TestResponses:
    @pytest.mark.asyncio
    async def test_json_content_type_is_decoded(self):
        transport = _transport(lambda request: httpx.Response(200, json=[{"x": 1}]))
        assert await transport.get(URL) == [{"x": 1}]

    @pytest.mark.asyncio
    async def test_other_content_is_text(self):
        transport = _transport(lambda request: httpx.Response(200, text='[{"x": 1}]'))
        body = await transport.get(URL)
        assert body == '[{"x": 1}]'

    @pytest.mark.asyncio
    async def test_non_200_raises(self):
        transport = _transport(lambda request: httpx.Response(404, text="missing"))
        with pytest.raises(TransportError, match="404") as exc_info:
            await transport.get(URL)
        assert exc_info.value.status_code == 404
        assert exc_info.value.url == URL

    @pytest.mark.asyncio
    async def test_other_success_codes_also_raise(self):
        transport = _transport(lambda request: httpx.Response(204))
        with pytest.raises(TransportError):
            await transport.get(URL)

    @pytest.mark.asyncio
    async def test_connection_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError, match="connection refused") as exc_info:
            await _transport(handler).get(URL)
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_malformed_json_raises(self):
        transport = _transport(lambda request: httpx.Response(
            200, content=b"{not json", headers={"content-type": "application/json"},
        ))
        with pytest.raises(TransportError, match="Malformed JSON"):
            await transport.get(URL)


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------

class TestPayloads:
    @pytest.mark.asyncio
    async def test_get_mapping_goes_in_query(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        await _transport(handler).get(URL, {"series": "a", "limit": 5})
        assert seen[0].method == "GET"
        assert seen[0].url.params["series"] == "a"
        assert seen[0].url.params["limit"] == "5"

    @pytest.mark.asyncio
    async def test_get_query_string(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        await _transport(handler).request("get", URL, "a=1&b=2")
        assert dict(seen[0].url.params) == {"a": "1", "b": "2"}

    @pytest.mark.asyncio
    async def test_post_string_is_form_body(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        await _transport(handler).post(URL, "a=1&b=2")
        assert seen[0].method == "POST"
        assert seen[0].content == b"a=1&b=2"
        assert seen[0].headers["content-type"] == "application/x-www-form-urlencoded"

    @pytest.mark.asyncio
    async def test_post_mapping_is_form_encoded(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        await _transport(handler).post(URL, {"a": "1"})
        assert seen[0].content == b"a=1"

    @pytest.mark.asyncio
    async def test_no_payload(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        await _transport(handler).get(URL)
        assert seen[0].url.query == b""
