"""Tests for data source normalization, response parsing and fetching."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from graphpaper import AttributeStore, RemoteSource, TransportError
from graphpaper.core.pipeline import DataPipeline
from graphpaper.surface.scene import SceneSurface


@pytest.fixture
def transport():
    transport = MagicMock()
    transport.request = AsyncMock(return_value='[{"x": 1, "y": 2}, {"x": 3, "y": 4}]')
    return transport


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

class TestNormalize:
    def test_inline_records_pass_through(self):
        records = [{"x": 1}]
        assert DataPipeline.normalize(records) is records

    def test_string_is_url_shorthand(self):
        assert DataPipeline.normalize("/points.json") == RemoteSource(url="/points.json")

    def test_mapping_becomes_remote_source(self):
        source = DataPipeline.normalize({"url": "/p", "method": "POST", "data": "a=1"})
        assert source.url == "/p"
        assert source.method == "POST"
        assert source.data == "a=1"

    def test_remote_source_kept(self):
        source = RemoteSource(url="/p")
        assert DataPipeline.normalize(source) is source

    def test_unsupported_source(self):
        with pytest.raises(TypeError):
            DataPipeline.normalize(42)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class TestParse:
    def test_json_text(self):
        assert DataPipeline.parse('[{"a": 1}]') == [{"a": 1}]

    def test_json_bytes(self):
        assert DataPipeline.parse(b'[{"a": 1}]') == [{"a": 1}]

    def test_structured_body_is_copied(self):
        body = [{"a": 1}]
        records = DataPipeline.parse(body)
        assert records == body
        assert records[0] is not body[0]

    def test_invalid_json(self):
        with pytest.raises(TransportError, match="not JSON") as exc_info:
            DataPipeline.parse("<html>", url="/p")
        assert exc_info.value.url == "/p"

    @pytest.mark.parametrize("body", [{"a": 1}, '{"a": 1}', [1, 2], None])
    def test_non_record_bodies(self, body):
        with pytest.raises(TransportError, match="list of records"):
            DataPipeline.parse(body)


# ---------------------------------------------------------------------------
# Fetching
# ---------------------------------------------------------------------------

class TestFetch:
    @pytest.mark.asyncio
    async def test_fetch_uses_source_method_and_payload(self, transport):
        pipeline = DataPipeline(transport)
        records = await pipeline.fetch(RemoteSource(url="/p", method="POST", data={"q": "x"}))
        transport.request.assert_awaited_once_with("POST", "/p", {"q": "x"})
        assert records == [{"x": 1, "y": 2}, {"x": 3, "y": 4}]

    @pytest.mark.asyncio
    async def test_fetch_propagates_transport_errors(self, transport):
        transport.request.side_effect = TransportError("Request failed: 404", status_code=404)
        with pytest.raises(TransportError):
            await DataPipeline(transport).fetch(RemoteSource(url="/missing"))


# ---------------------------------------------------------------------------
# Placeholder
# ---------------------------------------------------------------------------

class TestPlaceholder:
    def test_placeholder_centred(self):
        surface = SceneSurface(300, 200)
        attributes = AttributeStore()
        attributes.set("loadingText", "Hold on")
        text = DataPipeline.show_placeholder(surface, attributes, 300, 200)
        assert text.get("text") == "Hold on"
        assert (text.get("x"), text.get("y")) == (150, 100)
        assert text.get("font-family") == "Arial"

    def test_placeholder_disabled(self):
        surface = SceneSurface(300, 200)
        attributes = AttributeStore()
        attributes.set("ajaxLoading", False)
        assert DataPipeline.show_placeholder(surface, attributes, 300, 200) is None
        assert surface.find() == []
