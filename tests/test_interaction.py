"""Tests for hover bindings, the crosshair and listener bookkeeping."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from graphpaper import DOCUMENT, HostElement, PointerEvent, VirtualTimer, create_chart

SCATTER = {
    "type": "scatter",
    "x": "x",
    "y": "y",
    "data": [{"x": 1, "y": 2}, {"x": 2, "y": 3}],
}


@pytest.fixture
def element():
    return HostElement(offset_left=100, offset_top=50)


@pytest.fixture
def chart(element):
    chart = create_chart(element, 300, 200, timer=VirtualTimer())
    chart.attr("showGrid", True)
    return chart


def _move(chart, x, y, tag="svg"):
    chart.events.dispatch(chart.element, "mousemove", PointerEvent(offset_x=x, offset_y=y, target_tag=tag))


def _page_move(chart, x, y):
    chart.events.dispatch(DOCUMENT, "mousemove", PointerEvent(page_x=x, page_y=y))


# ---------------------------------------------------------------------------
# Listener bookkeeping
# ---------------------------------------------------------------------------

class TestListeners:
    def test_crosshair_registers_element_and_page_listeners(self, chart, element):
        chart.draw(SCATTER)
        assert len(chart.events.listeners(element, "mousemove")) == 1
        assert len(chart.events.listeners(DOCUMENT, "mousemove")) == 1
        assert [h.target for h in chart.interaction.handles] == [element, DOCUMENT]

    def test_redraw_does_not_accumulate_listeners(self, chart, element):
        chart.draw(SCATTER)
        for _ in range(3):
            chart.redraw()
        assert len(chart.events.listeners(element, "mousemove")) == 1
        assert len(chart.events.listeners(DOCUMENT, "mousemove")) == 1

    def test_no_crosshair_without_grid(self, element):
        chart = create_chart(element, 300, 200, timer=VirtualTimer())
        chart.draw(SCATTER)
        assert chart.interaction.crosshair is None
        assert chart.events.listeners(element, "mousemove") == []

    def test_clear_detaches(self, chart, element):
        chart.draw(SCATTER)
        chart.clear()
        assert chart.events.listeners(element, "mousemove") == []
        assert chart.events.listeners(DOCUMENT, "mousemove") == []
        assert chart.interaction.handles == []

    def test_user_listeners_survive_redraw(self, chart, element):
        handler = MagicMock()
        chart.on("click", handler)
        chart.draw(SCATTER)
        chart.redraw()
        assert chart.events.dispatch(element, "click", PointerEvent()) == 1
        handler.assert_called_once()

        chart.off("click", handler)
        assert chart.events.listeners(element, "click") == []


# ---------------------------------------------------------------------------
# Crosshair
# ---------------------------------------------------------------------------

class TestCrosshair:
    def test_hidden_until_pointer_moves(self, chart):
        chart.draw(SCATTER)
        crosshair = chart.interaction.crosshair
        assert crosshair.horizontal.visible is False
        assert crosshair.vertical.visible is False

    def test_follows_pointer(self, chart):
        chart.draw(SCATTER)
        _move(chart, 50, 20)
        crosshair = chart.interaction.crosshair
        assert crosshair.horizontal.get("d") == "M0 20L300 20"
        assert crosshair.vertical.get("d") == "M50 0L50 200"
        assert crosshair.horizontal.visible and crosshair.vertical.visible
        assert chart.surface.shapes[0] in (crosshair.horizontal, crosshair.vertical)

    def test_styled_from_grid_attributes(self, element):
        chart = create_chart(element, 300, 200, timer=VirtualTimer())
        chart.attr({"showGrid": True, "gridLineColor": "teal", "gridLineWidth": 2})
        chart.draw(SCATTER)
        line = chart.interaction.crosshair.vertical
        assert line.get("stroke") == "teal"
        assert line.get("stroke-width") == 2
        assert line.get("opacity") == 0.8

    def test_hidden_over_text_labels(self, chart):
        chart.draw(SCATTER)
        _move(chart, 50, 20)
        _move(chart, 60, 30, tag="tspan")
        crosshair = chart.interaction.crosshair
        assert not crosshair.horizontal.visible
        assert not crosshair.active

    def test_hidden_when_pointer_leaves_element(self, chart):
        chart.draw(SCATTER)
        _move(chart, 50, 20)

        _page_move(chart, 150, 100)  # inside 100..400 x 50..250
        assert chart.interaction.crosshair.active

        _page_move(chart, 450, 100)
        assert not chart.interaction.crosshair.active
        assert not chart.interaction.crosshair.vertical.visible

    def test_client_size_overrides_chart_size(self, chart, element):
        element.client_width = 50
        chart.draw(SCATTER)
        _move(chart, 10, 10)
        _page_move(chart, 200, 100)
        assert not chart.interaction.crosshair.active


# ---------------------------------------------------------------------------
# Cursor
# ---------------------------------------------------------------------------

class TestCursor:
    def test_grid_hides_default_cursor(self, chart, element):
        chart.draw(SCATTER)
        assert element.style["cursor"] == "none"

    def test_default_cursor_without_grid(self, element):
        chart = create_chart(element, 300, 200, timer=VirtualTimer())
        chart.draw(SCATTER)
        assert element.style["cursor"] == "default"

    def test_custom_cursor_kept_with_grid(self, chart, element):
        chart.attr("cursor", "crosshair")
        chart.draw(SCATTER)
        assert element.style["cursor"] == "crosshair"
