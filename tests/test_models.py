"""Tests for the chart description models."""

from __future__ import annotations

import pytest

from graphpaper import ChartSpec, ChartType, ConfigurationError, LineMode, RemoteSource


class TestChartSpec:
    def test_minimal(self):
        spec = ChartSpec.parse({"type": "bar"})
        assert spec.type is ChartType.BAR
        assert spec.title == ""
        assert spec.data == []
        assert spec.line is LineMode.STRAIGHT
        assert spec.is_inline

    def test_camel_case_aliases(self):
        spec = ChartSpec.parse({"type": "pie", "dataName": "label", "dataData": "value"})
        assert spec.data_name == "label"
        assert spec.data_data == "value"

    def test_snake_case_names(self):
        spec = ChartSpec.parse({"type": "pie", "data_name": "label"})
        assert spec.data_name == "label"

    def test_best_fit_mode(self):
        assert ChartSpec.parse({"type": "line", "line": "best fit"}).line is LineMode.BEST_FIT

    def test_string_data_is_kept_as_url(self):
        spec = ChartSpec.parse({"type": "bar", "data": "/points.json"})
        assert spec.data == "/points.json"
        assert not spec.is_inline

    def test_mapping_data_is_remote_source(self):
        spec = ChartSpec.parse({"type": "bar", "data": {"url": "/p", "method": "POST"}})
        assert spec.data == RemoteSource(url="/p", method="POST")

    def test_parse_passes_specs_through(self):
        spec = ChartSpec.parse({"type": "bar"})
        assert ChartSpec.parse(spec) is spec

    @pytest.mark.parametrize("raw", [
        {"type": "donut"},
        {},
        {"type": "line", "line": "wiggly"},
        {"type": "bar", "data": 42},
    ])
    def test_invalid_descriptions(self, raw):
        with pytest.raises(ConfigurationError, match="Invalid chart description"):
            ChartSpec.parse(raw)

    def test_with_data_copies(self):
        spec = ChartSpec.parse({"type": "bar", "title": "T", "data": "/p"})
        resolved = spec.with_data([{"x": 1}])
        assert resolved.data == [{"x": 1}]
        assert resolved.title == "T"
        assert spec.data == "/p"
