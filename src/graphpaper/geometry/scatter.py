"""Scatter graph layout.

Attribute arguments passed per point:

* ``pointColor``, ``pointHoverColor``, ``pointOpacity``:
  ``[{"x", "minX", "maxX", "y", "minY", "maxY"}]``
* ``pointRadius``: ``[y value, maxY]``
* ``animateTime``: ``[index]``
* ``hoverText``: ``[point, x field, y field]``
"""

from __future__ import annotations

import logging

from ..core.models import ChartSpec, ChartType
from .base import ChartLayout, GeometryEngine, padded_range, require_numeric

logger = logging.getLogger(__name__)


class ScatterEngine(GeometryEngine):
    chart_type = ChartType.SCATTER

    def validate(self, spec: ChartSpec) -> tuple[str, str]:
        x, y = super().validate(spec)
        require_numeric(spec.data, x, self.chart_type)
        require_numeric(spec.data, y, self.chart_type)
        return x, y

    def draw(self, spec: ChartSpec, *, animate: str | None = None) -> ChartLayout:
        """Place one circle per point.

        *animate* overrides the ``animate`` attribute for this draw only
        (line charts use it to suppress point animation).
        """
        x, y = self.validate(spec)
        points = spec.data
        layout = ChartLayout(self.chart_type, points=points)
        if not points:
            return layout

        width, height = self.chart.width, self.chart.height
        points.sort(key=lambda p: (p[x], p[y]))

        min_x, max_x = padded_range(p[x] for p in points)
        min_y, max_y = padded_range(p[y] for p in points)
        layout.bounds = {"minX": min_x, "maxX": max_x, "minY": min_y, "maxY": max_y}
        logger.debug("Scatter bounds: %s", layout.bounds)

        mode = self._animation_mode(animate)
        attrs = self.attributes

        for i, point in enumerate(points):
            point["xpos"] = width / (max_x - min_x) * (point[x] - min_x)
            point["ypos"] = height / (max_y - min_y) * (max_y - point[y])

            args = [{
                "x": point[x],
                "minX": min_x,
                "maxX": max_x,
                "y": point[y],
                "minY": min_y,
                "maxY": max_y,
            }]
            color = attrs.get("pointColor", args)
            radius = attrs.get("pointRadius", [point[y], max_y])

            if self.animation.enabled(mode):
                shape = self.surface.circle(point["xpos"], point["ypos"], 0)
                layout.delays.append(self.animation.stagger(
                    shape, i, {"r": radius},
                    easing=mode, duration_ms=attrs.get("animateTime", [i]),
                ))
            else:
                shape = self.surface.circle(point["xpos"], point["ypos"], radius)

            point["point"] = shape
            shape.attr({
                "fill": color,
                "stroke": color,
                "opacity": attrs.get("pointOpacity", args),
            })

            self.interaction.bind_hover(
                shape,
                base={"fill": color, "stroke": color},
                highlight=lambda args=args: attrs.get("pointHoverColor", args),
                keys=("fill", "stroke"),
                hover_text=lambda point=point: attrs.get("hoverText", [point, x, y]),
            )
            layout.shapes.append(shape)

        if attrs.get("showGrid"):
            self.interaction.attach_crosshair()

        return layout
