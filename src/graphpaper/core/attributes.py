"""Visual attribute storage with constant-or-computed resolution.

Every visual property of a chart (colours, sizes, opacity, hover text…)
is either a fixed value or a function of the data point being drawn.
Values are tagged once when they are stored::

    store.set("pointColor", "red")                      # Constant
    store.set("pointRadius", lambda value, max_y: ...)  # Computed

and resolved through the tag at draw time::

    store.get("pointRadius", [point["y"], max_y])

The positional argument list is attribute-specific; each geometry engine
documents what it passes.
"""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Mapping, Sequence

logger = logging.getLogger(__name__)

_MISSING = object()


# ---------------------------------------------------------------------------
# Tagged attribute values
# ---------------------------------------------------------------------------

class Attribute(ABC):
    """A stored attribute value: ``Constant`` or ``Computed``."""

    @abstractmethod
    def resolve(self, args: Sequence[Any]) -> Any:
        """Return the literal value for this attribute given *args*."""


@dataclass(frozen=True)
class Constant(Attribute):
    """A fixed value, returned unchanged whatever the arguments."""
    value: Any

    def resolve(self, args: Sequence[Any]) -> Any:
        return self.value


@dataclass(frozen=True)
class Computed(Attribute):
    """A resolver function invoked with the call site's argument list."""
    fn: Callable[..., Any]

    def resolve(self, args: Sequence[Any]) -> Any:
        return self.fn(*args)


def as_attribute(value: Any) -> Attribute:
    """Tag a raw value: callables become ``Computed``, the rest ``Constant``."""
    if isinstance(value, Attribute):
        return value
    if callable(value):
        return Computed(value)
    return Constant(value)


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

def default_hover_text(point: Mapping[str, Any], x: str, y: str) -> str:
    """Hover caption: ``"<x>: <value>, <y>: <value>"``."""
    return f"{x}: {point.get(x)}, {y}: {point.get(y)}"


DEFAULT_ATTRIBUTES: dict[str, Any] = {
    "ajaxLoading": True,           # show a placeholder while remote data loads
    "animate": "none",             # easing name, or "none"
    "animateTime": 1000,           # ms
    "barBorderColor": "black",
    "barColor": "red",
    "barHoverColor": "darkgray",
    "barOpacity": 1,
    "barWidth": 0.8,               # fraction of the bar's slot
    "cursor": "default",
    "direction": "vertical",
    "gridLineWidth": 1,
    "gridLineColor": "gray",
    "gridLineOpacity": 0.8,
    "pointColor": "red",
    "pointHoverColor": "darkred",
    "pointOpacity": 1,
    "pointRadius": 5,
    "lineColor": "black",
    "lineOpacity": 1,
    "lineWidth": 1,
    "loadingText": "Loading...",
    "segmentBorderColor": "black",
    "segmentColor": "red",
    "segmentHoverColor": "darkgray",
    "segmentOpacity": 1,
    "segmentRadius": 100,
    "showGrid": False,
    "textFont": "Arial",
    "textSize": 10,
    "textOpacity": 1,
    "textColor": "black",
    "titlePosition": "right",      # left / right / center
    "hoverText": default_hover_text,
}


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class AttributeStore:
    """Per-chart attribute map.

    Each store starts from its own deep copy of ``DEFAULT_ATTRIBUTES`` so
    mutating one chart never leaks into another. Setting ``title`` calls
    *on_title* synchronously so the owning chart can refresh its caption.
    """

    def __init__(
        self,
        defaults: Mapping[str, Any] | None = None,
        on_title: Callable[[str], None] | None = None,
    ) -> None:
        base = copy.deepcopy(dict(DEFAULT_ATTRIBUTES if defaults is None else defaults))
        self._attrs: dict[str, Attribute] = {name: as_attribute(v) for name, v in base.items()}
        self._on_title = on_title

    def get(self, name: str, args: Sequence[Any] | None = None) -> Any:
        """Resolve attribute *name* with *args*; unknown names give ``None``."""
        attribute = self._attrs.get(name)
        if attribute is None:
            return None
        return attribute.resolve(list(args) if args is not None else [])

    def set(self, name: str | Mapping[str, Any], value: Any = _MISSING) -> AttributeStore:
        """Store one attribute, or merge a mapping of attributes key by key."""
        if isinstance(name, Mapping):
            for key, item in name.items():
                self.set(key, item)
            return self
        if value is _MISSING:
            raise TypeError(f"AttributeStore.set({name!r}) requires a value")

        self._attrs[name] = as_attribute(value)
        logger.debug("Attribute %s set to %r", name, value)

        if name == "title" and self._on_title is not None:
            self._on_title(self.get("title"))
        return self

    def update(self, mapping: Mapping[str, Any]) -> AttributeStore:
        return self.set(mapping)

    def raw(self, name: str) -> Attribute | None:
        """Return the tagged value stored under *name*."""
        return self._attrs.get(name)

    def names(self) -> list[str]:
        return sorted(self._attrs)

    def snapshot(self) -> dict[str, Any]:
        """Plain ``{name: value-or-function}`` view of the current map."""
        out: dict[str, Any] = {}
        for name, attribute in self._attrs.items():
            if isinstance(attribute, Constant):
                out[name] = attribute.value
            else:
                out[name] = getattr(attribute, "fn", attribute)
        return out

    def __contains__(self, name: object) -> bool:
        return name in self._attrs

    def __iter__(self) -> Iterator[str]:
        return iter(self._attrs)


def text_style(store: AttributeStore) -> dict[str, Any]:
    """Surface attributes for captions (title, loading placeholder)."""
    return {
        "font-family": store.get("textFont"),
        "font-size": store.get("textSize"),
        "opacity": store.get("textOpacity"),
        "fill": store.get("textColor"),
    }
