"""Abstract drawing-surface collaborator.

The chart engine never touches pixels. It creates shapes through a
``DrawingSurface`` and styles, animates and wires them through the
returned ``ShapeHandle`` objects. Attribute names follow SVG
(``fill``, ``stroke``, ``stroke-width``, ``opacity``, ``d`` …).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Mapping

HoverCallback = Callable[[], None]


class ShapeHandle(ABC):
    """A shape living on a surface."""

    kind: str  # "rect", "circle", "path" or "text"

    @abstractmethod
    def attr(self, name: str | Mapping[str, Any], value: Any = None) -> ShapeHandle:
        """Set one attribute, or every attribute of a mapping."""

    @abstractmethod
    def get(self, name: str) -> Any:
        """Return the current value of attribute *name*."""

    @abstractmethod
    def animate(self, target: Mapping[str, Any], duration_ms: float, easing: str) -> ShapeHandle:
        """Transition to *target* over *duration_ms* using *easing*."""

    @abstractmethod
    def hover(self, on_enter: HoverCallback, on_exit: HoverCallback) -> ShapeHandle:
        """Register pointer enter / leave callbacks."""

    @abstractmethod
    def show(self) -> ShapeHandle: ...

    @abstractmethod
    def hide(self) -> ShapeHandle: ...

    @abstractmethod
    def to_back(self) -> ShapeHandle: ...

    @abstractmethod
    def to_front(self) -> ShapeHandle: ...

    @abstractmethod
    def remove(self) -> None: ...

    @property
    @abstractmethod
    def removed(self) -> bool:
        """True once the shape has been removed or its surface cleared."""

    @abstractmethod
    def bbox(self) -> tuple[float, float, float, float]:
        """Bounding box as ``(x, y, width, height)``."""


class DrawingSurface(ABC):
    """Factory for shapes on a fixed-size canvas."""

    width: float
    height: float

    @abstractmethod
    def rect(self, x: float, y: float, width: float, height: float) -> ShapeHandle: ...

    @abstractmethod
    def circle(self, cx: float, cy: float, r: float) -> ShapeHandle: ...

    @abstractmethod
    def path(self, d: str) -> ShapeHandle:
        """Create a path. Besides SVG commands, ``R`` draws a smooth
        Catmull-Rom curve through the listed points."""

    @abstractmethod
    def text(self, x: float, y: float, text: str) -> ShapeHandle: ...

    @abstractmethod
    def clear(self) -> None:
        """Remove every shape from the surface."""
