"""Hover highlighting and the grid crosshair.

Hover handlers live on the shapes themselves and die with them. The
crosshair listens on the chart element and on the page, so its
listeners are tracked as ``ListenerHandle``s in registration order and
removed by ``detach`` before the next draw cycle attaches new ones.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Mapping, Sequence

from ..surface.base import ShapeHandle
from ..surface.paths import fmt
from .events import DOCUMENT, Handler, ListenerHandle, PointerEvent

if TYPE_CHECKING:
    from .chart import Chart

logger = logging.getLogger(__name__)

# Tag reported for pointer events over text labels
TEXT_LABEL_TAG = "tspan"


class InteractionController:
    """Per-chart owner of hover bindings and crosshair listeners."""

    def __init__(self, chart: Chart) -> None:
        self.chart = chart
        self.crosshair: Crosshair | None = None
        self._handles: list[ListenerHandle] = []

    @property
    def handles(self) -> list[ListenerHandle]:
        return list(self._handles)

    # -- hover -----------------------------------------------------------

    def bind_hover(
        self,
        shape: ShapeHandle,
        *,
        base: Mapping[str, Any],
        highlight: Callable[[], Any],
        keys: Sequence[str],
        hover_text: Callable[[], Any],
    ) -> None:
        """Highlight *shape* on pointer enter and restore *base* on leave.

        *highlight* resolves the hover colour lazily; a falsy result
        leaves the shape's colours alone. The title always switches to
        *hover_text* while the pointer is over the shape.
        """
        restore = dict(base)

        def on_enter() -> None:
            colour = highlight()
            if colour:
                shape.attr({key: colour for key in keys})
            self.chart.set_text(str(hover_text()))

        def on_exit() -> None:
            shape.attr(restore)
            self.chart.set_text(self.chart.title)

        shape.hover(on_enter, on_exit)

    # -- crosshair -------------------------------------------------------

    def listen(self, target: Any, event: str, handler: Handler) -> ListenerHandle:
        handle = ListenerHandle(target, event, handler)
        self.chart.events.add_listener(target, event, handler)
        self._handles.append(handle)
        return handle

    def attach_crosshair(self) -> Crosshair:
        """Create the guide lines and start tracking the pointer."""
        if self.crosshair is not None:
            self.detach()
        crosshair = Crosshair(self.chart)
        self.listen(self.chart.element, "mousemove", crosshair.on_move)
        self.listen(DOCUMENT, "mousemove", crosshair.on_page_move)
        self.crosshair = crosshair
        return crosshair

    def detach(self) -> int:
        """Remove every tracked listener; return how many were removed."""
        removed = len(self._handles)
        for handle in self._handles:
            self.chart.events.remove_listener(handle.target, handle.event, handle.handler)
        self._handles.clear()
        self.crosshair = None
        if removed:
            logger.debug("Detached %d listeners", removed)
        return removed


class Crosshair:
    """Two guide lines following the pointer across the draw area."""

    def __init__(self, chart: Chart) -> None:
        self.chart = chart
        surface = chart.surface
        style = {
            "opacity": chart.attributes.get("gridLineOpacity"),
            "stroke-width": chart.attributes.get("gridLineWidth"),
            "stroke": chart.attributes.get("gridLineColor"),
        }
        self.horizontal = surface.path("M0 0L0 0").to_back().hide().attr(style)
        self.vertical = surface.path("M0 0L0 0").to_back().hide().attr(style)
        self.active = False

    def on_move(self, event: PointerEvent) -> None:
        if event.target_tag == TEXT_LABEL_TAG:
            self._deactivate()
            return

        width, height = self.chart.width, self.chart.height
        x, y = fmt(event.offset_x), fmt(event.offset_y)
        self.horizontal.attr("d", f"M0 {y}L{fmt(width)} {y}")
        self.vertical.attr("d", f"M{x} 0L{x} {fmt(height)}")

        if not self.active:
            self.horizontal.show().to_back()
            self.vertical.show().to_back()
            self.active = True

    def on_page_move(self, event: PointerEvent) -> None:
        if self.active and not self._inside(event.page_x, event.page_y):
            self._deactivate()

    def _inside(self, page_x: float, page_y: float) -> bool:
        element = self.chart.element
        width = element.client_width or self.chart.width
        height = element.client_height or self.chart.height
        return (
            element.offset_left <= page_x <= element.offset_left + width
            and element.offset_top <= page_y <= element.offset_top + height
        )

    def _deactivate(self) -> None:
        self.active = False
        self.horizontal.hide()
        self.vertical.hide()
