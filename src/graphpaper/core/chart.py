"""Top-level chart controller.

Usage::

    from graphpaper import HostElement, create_chart

    chart = create_chart(HostElement(), 500, 400)
    chart.attr({"pointOpacity": 0.9, "lineWidth": 2})
    chart.draw({
        "type": "line",
        "title": "Spoons per day",
        "x": "day",
        "y": "spoons",
        "data": [{"day": 1, "spoons": 1}, {"day": 2, "spoons": 3}],
    })

A chart is Empty until its first draw, AwaitingData while a remote
dataset is in flight, and Drawn once shapes exist. ``redraw`` tears
everything down and rebuilds from the stored spec, reusing records that
were already fetched.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping

from ..geometry import ChartLayout, check_reserved, engine_for
from ..surface.base import DrawingSurface, ShapeHandle
from ..surface.scene import SceneSurface
from .animation import AnimationScheduler, LoopTimer, Timer
from .attributes import AttributeStore, text_style
from .errors import ConfigurationError, TransportError
from .events import EventBus, EventRegistry, Handler, HostElement, ListenerHandle
from .interaction import InteractionController
from .models import DERIVED_FIELDS, ChartSpec, ChartState, RemoteSource
from .pipeline import DataPipeline
from .transport import HttpTransport, Transport

logger = logging.getLogger(__name__)

_MISSING = object()

# Baseline of the title caption
_TITLE_Y = 15
_TITLE_MARGIN = 10


class Chart:
    """Draws ``ChartSpec``s onto one surface and owns everything drawn.

    Parameters
    ----------
    element
        The host element; receives pointer listeners and its ``style``
        dict gets the ``cursor``.
    width, height
        Draw area in pixels.
    surface, events, transport, timer
        Collaborators. Defaults: an in-memory ``SceneSurface``, an
        ``EventRegistry``, an ``HttpTransport`` and a ``LoopTimer``.
    """

    def __init__(
        self,
        element: HostElement,
        width: float,
        height: float,
        *,
        surface: DrawingSurface | None = None,
        events: EventBus | None = None,
        transport: Transport | None = None,
        timer: Timer | None = None,
        defaults: Mapping[str, Any] | None = None,
    ) -> None:
        self.element = element
        self.width = width
        self.height = height

        self.surface = surface if surface is not None else SceneSurface(width, height)
        self.events = events if events is not None else EventRegistry()
        self.animation = AnimationScheduler(timer if timer is not None else LoopTimer())
        self.pipeline = DataPipeline(transport if transport is not None else HttpTransport())
        self.interaction = InteractionController(self)
        self.attributes = AttributeStore(defaults, on_title=self._title_changed)

        self.state = ChartState.EMPTY
        self.title = ""
        self.spec: ChartSpec | None = None
        self.source: RemoteSource | None = None
        self.layout: ChartLayout | None = None
        self.pending: asyncio.Task[None] | None = None

        self._text_node: ShapeHandle | None = None
        self._own_listeners: list[ListenerHandle] = []

    def __repr__(self) -> str:
        kind = self.spec.type.value if self.spec else None
        return f"Chart({self.width}x{self.height}, state={self.state.value}, type={kind})"

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw(self, spec: ChartSpec | Mapping[str, Any], original: RemoteSource | None = None) -> Chart:
        """Draw *spec*.

        Inline data is laid out immediately. Remote data moves the chart
        to AwaitingData and starts a fetch task on the running event loop
        (``self.pending``); when the records arrive the chart is cleared
        and ``draw`` runs again with them. *original* is the remote source
        the records came from, remembered for ``redraw``.

        Raises ``ConfigurationError`` before any shape is created when the
        description is invalid.
        """
        spec = ChartSpec.parse(spec)
        if spec.attrs:
            self.attributes.set(spec.attrs)

        engine = engine_for(spec.type)(self)
        data = self.pipeline.normalize(spec.data)
        if isinstance(data, RemoteSource):
            # Field names are known before the records are
            check_reserved(*engine.fields(spec))
            self._request(spec, data)
            return self

        if data is not spec.data:
            spec = spec.with_data(data)
        engine.validate(spec)

        self.title = spec.title
        self.set_text(spec.title)
        self.spec = spec
        self.source = original

        self.layout = engine.draw(spec)
        self._apply_cursor()
        self.state = ChartState.DRAWN
        logger.info("Drew %s chart with %d records", spec.type.value, len(spec.data))
        return self

    async def load(self, spec: ChartSpec | Mapping[str, Any]) -> Chart:
        """Draw *spec* and, for remote data, wait until it is on screen."""
        self.draw(spec)
        if self.state is ChartState.AWAITING_DATA and self.pending is not None:
            await self.pending
        return self

    def redraw(self, spec: ChartSpec | Mapping[str, Any] | None = None) -> Chart:
        """Clear everything and draw again.

        Without *spec* the stored one is reused, including records that
        were fetched for it (nothing is fetched again).
        """
        previous, source = self.spec, self.source
        self.clear()
        if spec is not None:
            return self.draw(spec)
        if previous is None:
            raise ConfigurationError("Nothing to redraw: no chart has been drawn yet")
        return self.draw(previous, original=source)

    def clear(self) -> None:
        """Remove all shapes and crosshair listeners; keep the stored spec."""
        self.surface.clear()
        self.interaction.detach()
        self._text_node = None
        self.layout = None
        if self.spec is not None and isinstance(self.spec.data, list):
            for point in self.spec.data:
                for name in DERIVED_FIELDS:
                    point.pop(name, None)
        self.state = ChartState.EMPTY

    # ------------------------------------------------------------------
    # Remote data
    # ------------------------------------------------------------------

    def _request(self, spec: ChartSpec, source: RemoteSource) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            raise ConfigurationError(
                f"Remote data ({source.url}) needs a running event loop; "
                "use 'await chart.load(spec)' instead of draw()"
            ) from exc
        self.title = spec.title
        self.set_text(spec.title)
        self.pipeline.show_placeholder(self.surface, self.attributes, self.width, self.height)
        self.state = ChartState.AWAITING_DATA
        self.pending = loop.create_task(self._resolve(spec, source))

    async def _resolve(self, spec: ChartSpec, source: RemoteSource) -> None:
        try:
            records = await self.pipeline.fetch(source)
        except TransportError as exc:
            logger.error("Could not load chart data from %s: %s", source.url, exc)
            self.state = ChartState.EMPTY
            raise

        self.clear()
        self.draw(spec.with_data(records), original=source)

    # ------------------------------------------------------------------
    # Attributes & title
    # ------------------------------------------------------------------

    def attr(self, name: str | Mapping[str, Any], value: Any = _MISSING) -> Any:
        """Get one attribute, set one, or merge a mapping.

        ``chart.attr("barColor")`` reads; ``chart.attr("barColor", "blue")``
        and ``chart.attr({...})`` write and return the chart.
        """
        if isinstance(name, Mapping):
            self.attributes.set(name)
            return self
        if value is _MISSING:
            return self.attributes.get(name)
        self.attributes.set(name, value)
        return self

    def set_text(self, text: Any) -> None:
        """Replace the title caption, placed per ``titlePosition``."""
        text = "" if text is None else str(text)
        node = self.surface.text(self.width / 2, _TITLE_Y, text)
        node.attr(text_style(self.attributes))
        node.attr("cursor", "text")

        if self._text_node is not None:
            self._text_node.remove()

        position = self.attributes.get("titlePosition")
        if position != "center":
            text_width = node.bbox()[2]
            if position == "left":
                node.attr("x", text_width / 2 + _TITLE_MARGIN)
            else:
                node.attr("x", self.width - text_width / 2 - _TITLE_MARGIN)

        node.to_front()
        self._text_node = node

    @property
    def text_node(self) -> ShapeHandle | None:
        return self._text_node

    def _title_changed(self, title: Any) -> None:
        self.title = "" if title is None else str(title)
        if self.spec is not None:
            self.spec.title = self.title
        self.set_text(self.title)

    def _apply_cursor(self) -> None:
        cursor = self.attributes.get("cursor")
        if cursor == "default" and self.attributes.get("showGrid"):
            self.element.style["cursor"] = "none"
        else:
            self.element.style["cursor"] = cursor

    # ------------------------------------------------------------------
    # Element listeners
    # ------------------------------------------------------------------

    def on(self, event: str, handler: Handler) -> Chart:
        """Listen for *event* on the chart element (kept across redraws)."""
        self.events.add_listener(self.element, event, handler)
        self._own_listeners.append(ListenerHandle(self.element, event, handler))
        return self

    def off(self, event: str, handler: Handler) -> Chart:
        for handle in [h for h in self._own_listeners if h.event == event and h.handler == handler]:
            self.events.remove_listener(handle.target, handle.event, handle.handler)
            self._own_listeners.remove(handle)
        return self


def create_chart(element: HostElement, width: float, height: float, **collaborators: Any) -> Chart:
    """Turn *element* into a ``width`` × ``height`` chart."""
    return Chart(element, width, height, **collaborators)
