"""In-memory drawing surface with SVG export.

``SceneSurface`` keeps every shape as a plain attribute dictionary in
z-order. Hosts (and tests) drive pointer hover through
``SceneShape.pointer_enter`` / ``pointer_leave``; ``to_svg`` serializes
the scene, turning recorded animations into SMIL ``<animate>`` elements.

Usage::

    surface = SceneSurface(400, 300)
    chart = create_chart(HostElement(), 400, 300, surface=surface)
    chart.draw(spec)
    Path("chart.svg").write_text(surface.to_svg())
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping
from xml.sax.saxutils import escape, quoteattr

from .base import DrawingSurface, HoverCallback, ShapeHandle
from .paths import fmt, path_points, to_svg_path

logger = logging.getLogger(__name__)

_UNSET = object()

# Rough glyph advance as a fraction of the font size
_GLYPH_WIDTH = 0.6

_EASING_SPLINES = {
    "ease-in": "0.42 0 1 1",
    "ease-out": "0 0 0.58 1",
    "<": "0.42 0 1 1",
    ">": "0 0 0.58 1",
}
_DEFAULT_SPLINE = "0.42 0 0.58 1"


@dataclass(frozen=True)
class Animation:
    """One recorded attribute transition."""
    attribute: str
    start: Any
    end: Any
    begin_ms: float
    duration_ms: float
    easing: str


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------

class SceneShape(ShapeHandle):
    """A shape stored as an attribute dictionary."""

    def __init__(self, surface: SceneSurface, kind: str, attrs: dict[str, Any]) -> None:
        self.surface = surface
        self.kind = kind
        self.attrs: dict[str, Any] = attrs
        self.visible = True
        self.animations: list[Animation] = []
        self._hover: list[tuple[HoverCallback, HoverCallback]] = []
        self._removed = False

    def __repr__(self) -> str:
        return f"SceneShape({self.kind!r}, {self.attrs!r})"

    # -- styling ---------------------------------------------------------

    def attr(self, name: str | Mapping[str, Any], value: Any = _UNSET) -> SceneShape:
        if isinstance(name, Mapping):
            self.attrs.update(name)
        elif value is _UNSET:
            raise TypeError(f"attr({name!r}) requires a value; use get() to read")
        else:
            self.attrs[name] = value
        return self

    def get(self, name: str) -> Any:
        return self.attrs.get(name)

    def animate(self, target: Mapping[str, Any], duration_ms: float, easing: str) -> SceneShape:
        begin = self.surface.clock() if self.surface.clock else 0.0
        for name, end in target.items():
            self.animations.append(
                Animation(name, self.attrs.get(name), end, begin, duration_ms, easing)
            )
        # The scene holds end-of-animation state; to_svg replays the transition.
        self.attrs.update(target)
        return self

    # -- interaction -----------------------------------------------------

    def hover(self, on_enter: HoverCallback, on_exit: HoverCallback) -> SceneShape:
        self._hover.append((on_enter, on_exit))
        return self

    def pointer_enter(self) -> None:
        for on_enter, _ in list(self._hover):
            on_enter()

    def pointer_leave(self) -> None:
        for _, on_exit in list(self._hover):
            on_exit()

    # -- visibility / z-order -------------------------------------------

    def show(self) -> SceneShape:
        self.visible = True
        return self

    def hide(self) -> SceneShape:
        self.visible = False
        return self

    def to_back(self) -> SceneShape:
        self.surface._restack(self, front=False)
        return self

    def to_front(self) -> SceneShape:
        self.surface._restack(self, front=True)
        return self

    def remove(self) -> None:
        if not self._removed:
            self.surface._discard(self)
            self._removed = True
            self._hover.clear()

    @property
    def removed(self) -> bool:
        return self._removed

    def bbox(self) -> tuple[float, float, float, float]:
        a = self.attrs
        if self.kind == "rect":
            return a["x"], a["y"], a["width"], a["height"]
        if self.kind == "circle":
            r = a["r"]
            return a["cx"] - r, a["cy"] - r, 2 * r, 2 * r
        if self.kind == "text":
            size = float(a.get("font-size", 10))
            width = len(str(a.get("text", ""))) * size * _GLYPH_WIDTH
            return a["x"] - width / 2, a["y"] - size / 2, width, size
        points = path_points(a.get("d", ""))
        if not points:
            return 0.0, 0.0, 0.0, 0.0
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        return min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys)

    # -- serialization ---------------------------------------------------

    def to_svg(self) -> str:
        attrs = {k: v for k, v in self.attrs.items() if k != "text" and v is not None}
        if self.kind == "path":
            attrs["d"] = to_svg_path(str(attrs.get("d", "")))
        if self.kind == "text":
            attrs.setdefault("text-anchor", "middle")
            attrs.setdefault("dominant-baseline", "middle")
        if not self.visible:
            attrs["display"] = "none"

        start_state = dict(attrs)
        for anim in reversed(self.animations):
            if anim.start is not None:
                start_state[anim.attribute] = anim.start
        rendered = " ".join(
            f"{name}={quoteattr(_svg_value(name, value))}" for name, value in start_state.items()
        )

        children = [_animate_element(anim) for anim in self.animations]
        if self.kind == "text":
            children.insert(0, escape(str(self.attrs.get("text", ""))))
        if not children:
            return f"<{self.kind} {rendered}/>"
        return f"<{self.kind} {rendered}>{''.join(children)}</{self.kind}>"


def _svg_value(name: str, value: Any) -> str:
    if name == "d":
        return to_svg_path(str(value))
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return fmt(value)
    return str(value)


def _animate_element(anim: Animation) -> str:
    timing = 'calcMode="linear"'
    if anim.easing != "linear":
        spline = _EASING_SPLINES.get(anim.easing, _DEFAULT_SPLINE)
        timing = f'calcMode="spline" keyTimes="0;1" keySplines="{spline}"'
    return (
        f'<animate attributeName="{anim.attribute}" '
        f"from={quoteattr(_svg_value(anim.attribute, anim.start))} "
        f"to={quoteattr(_svg_value(anim.attribute, anim.end))} "
        f'begin="{fmt(anim.begin_ms)}ms" dur="{fmt(anim.duration_ms)}ms" '
        f'{timing} fill="freeze"/>'
    )


# ---------------------------------------------------------------------------
# Surface
# ---------------------------------------------------------------------------

class SceneSurface(DrawingSurface):
    """Shape store in z-order (first element is drawn first).

    Parameters
    ----------
    width, height
        Canvas size in pixels.
    clock
        Optional callable returning the current time in ms. Animations
        record it as their begin offset (see ``VirtualTimer.now``).
    """

    def __init__(
        self,
        width: float,
        height: float,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.clock = clock
        self.shapes: list[SceneShape] = []

    def _add(self, kind: str, attrs: dict[str, Any]) -> SceneShape:
        shape = SceneShape(self, kind, attrs)
        self.shapes.append(shape)
        return shape

    def rect(self, x: float, y: float, width: float, height: float) -> SceneShape:
        return self._add("rect", {"x": x, "y": y, "width": width, "height": height})

    def circle(self, cx: float, cy: float, r: float) -> SceneShape:
        return self._add("circle", {"cx": cx, "cy": cy, "r": r})

    def path(self, d: str) -> SceneShape:
        return self._add("path", {"d": d, "fill": "none"})

    def text(self, x: float, y: float, text: str) -> SceneShape:
        return self._add("text", {"x": x, "y": y, "text": text})

    def clear(self) -> None:
        for shape in self.shapes:
            shape._removed = True
            shape._hover.clear()
        logger.debug("Cleared %d shapes", len(self.shapes))
        self.shapes = []

    # -- queries ---------------------------------------------------------

    def find(self, kind: str | None = None) -> list[SceneShape]:
        """Shapes of *kind* (all shapes when *kind* is None), in z-order."""
        return [s for s in self.shapes if kind is None or s.kind == kind]

    def to_svg(self) -> str:
        body = "".join(shape.to_svg() for shape in self.shapes)
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{fmt(self.width)}" '
            f'height="{fmt(self.height)}" viewBox="0 0 {fmt(self.width)} {fmt(self.height)}">'
            f"{body}</svg>"
        )

    # -- internals -------------------------------------------------------

    def _restack(self, shape: SceneShape, *, front: bool) -> None:
        if shape in self.shapes:
            self.shapes.remove(shape)
            if front:
                self.shapes.append(shape)
            else:
                self.shapes.insert(0, shape)

    def _discard(self, shape: SceneShape) -> None:
        if shape in self.shapes:
            self.shapes.remove(shape)
