"""Line graphs: a scatter graph with its points joined."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from ..core.animation import NO_ANIMATION
from ..core.errors import ConfigurationError
from ..core.models import ChartSpec, ChartType, DataPoint, LineMode
from ..surface.paths import curve_through, polyline
from .base import ChartLayout, GeometryEngine
from .scatter import ScatterEngine

if TYPE_CHECKING:
    from ..core.chart import Chart

logger = logging.getLogger(__name__)


def least_squares(points: Sequence[DataPoint]) -> tuple[float, float]:
    """Ordinary least-squares fit over the points' pixel positions.

    Returns ``(gradient, intercept)`` of ``ypos = gradient * xpos + intercept``.
    Raises ``ConfigurationError`` when every point shares one x position.
    """
    n = len(points)
    xsum = sum(p["xpos"] for p in points)
    ysum = sum(p["ypos"] for p in points)
    xysum = sum(p["xpos"] * p["ypos"] for p in points)
    xxsum = sum(p["xpos"] ** 2 for p in points)

    denominator = n * xxsum - xsum * xsum
    if n == 0 or abs(denominator) < 1e-9:
        raise ConfigurationError("Best fit line needs at least two distinct x values")

    gradient = (n * xysum - xsum * ysum) / denominator
    intercept = (xxsum * ysum - xsum * xysum) / denominator
    return gradient, intercept


class LineEngine(GeometryEngine):
    chart_type = ChartType.LINE

    def __init__(self, chart: Chart) -> None:
        super().__init__(chart)
        self.scatter = ScatterEngine(chart)

    def validate(self, spec: ChartSpec) -> tuple[str, str]:
        x, y = self.scatter.validate(spec)
        if spec.line is LineMode.BEST_FIT and spec.data and len({p[x] for p in spec.data}) < 2:
            raise ConfigurationError("Best fit line needs at least two distinct x values")
        return x, y

    def draw(self, spec: ChartSpec) -> ChartLayout:
        self.validate(spec)
        # Points only animate in under a best fit line
        animate = None if spec.line is LineMode.BEST_FIT else NO_ANIMATION
        layout = self.scatter.draw(spec, animate=animate)
        layout.chart_type = self.chart_type
        if not layout.points:
            return layout

        coords = [(p["xpos"], p["ypos"]) for p in layout.points]
        if spec.line is LineMode.BEST_FIT:
            gradient, intercept = least_squares(layout.points)
            width = self.chart.width
            d = polyline([(0.0, intercept), (width, gradient * width + intercept)])
            layout.bounds.update(gradient=gradient, intercept=intercept)
        elif spec.line is LineMode.CURVED:
            d = curve_through(coords)
        else:
            d = polyline(coords)

        path = self.surface.path(d)
        path.attr({
            "stroke": self.attributes.get("lineColor"),
            "stroke-opacity": self.attributes.get("lineOpacity"),
            "stroke-width": self.attributes.get("lineWidth"),
        })
        path.to_back()
        layout.line = path
        logger.debug("Joined %d points (%s)", len(coords), spec.line.value)
        return layout
