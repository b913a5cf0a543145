"""Event collaborator: listener registration over host elements.

The chart only ever calls ``add_listener`` / ``remove_listener``. Hosts
that own a real event loop (a browser bridge, a GUI toolkit) implement
``EventBus`` themselves; ``EventRegistry`` is the in-process
implementation used headlessly and in tests, with ``dispatch`` standing
in for the host's event delivery.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)

Handler = Callable[["PointerEvent"], Any]


# ---------------------------------------------------------------------------
# Host-side values
# ---------------------------------------------------------------------------

@dataclass
class HostElement:
    """The page element a chart is embedded in.

    Offsets are page coordinates of the element's top-left corner;
    ``client_width`` / ``client_height`` of 0 mean "same as the chart".
    """
    offset_left: float = 0.0
    offset_top: float = 0.0
    client_width: float = 0.0
    client_height: float = 0.0
    style: dict[str, str] = field(default_factory=dict)


class _Document:
    def __repr__(self) -> str:
        return "DOCUMENT"


# Page-level target, for listeners that must see the pointer leave the chart
DOCUMENT = _Document()


@dataclass(frozen=True)
class PointerEvent:
    """A pointer move.

    ``offset_*`` are relative to the chart element, ``page_*`` to the
    page. ``target_tag`` names the element under the pointer; text labels
    report ``"tspan"``.
    """
    offset_x: float = 0.0
    offset_y: float = 0.0
    page_x: float = 0.0
    page_y: float = 0.0
    target_tag: str = "svg"


@dataclass(frozen=True)
class ListenerHandle:
    """Everything needed to undo one ``add_listener`` call."""
    target: Any
    event: str
    handler: Handler


# ---------------------------------------------------------------------------
# Collaborator
# ---------------------------------------------------------------------------

class EventBus(Protocol):
    def add_listener(self, target: Any, event: str, handler: Handler) -> None: ...

    def remove_listener(self, target: Any, event: str, handler: Handler) -> None: ...


class EventRegistry:
    """In-process ``EventBus``."""

    def __init__(self) -> None:
        self._listeners: dict[tuple[int, str], list[Handler]] = {}

    def add_listener(self, target: Any, event: str, handler: Handler) -> None:
        self._listeners.setdefault((id(target), event), []).append(handler)

    def remove_listener(self, target: Any, event: str, handler: Handler) -> None:
        handlers = self._listeners.get((id(target), event), [])
        if handler in handlers:
            handlers.remove(handler)
        else:
            logger.debug("remove_listener: %r not registered for %s", handler, event)

    def listeners(self, target: Any, event: str) -> list[Handler]:
        return list(self._listeners.get((id(target), event), []))

    def dispatch(self, target: Any, event: str, payload: PointerEvent) -> int:
        """Deliver *payload* to every handler; return how many ran."""
        handlers = self.listeners(target, event)
        for handler in handlers:
            handler(payload)
        return len(handlers)
