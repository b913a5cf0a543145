"""Bar chart layout.

Every bar resolves ``barWidth``, ``barColor``, ``barHoverColor``,
``barBorderColor`` and ``barOpacity`` with ``[y value, maxY]``,
``hoverText`` with ``[point, x field, y field]``, and ``animateTime`` with
``[index]``.

Horizontal charts are laid out as vertical ones on a transposed canvas:
slots run along the height, values along the width, and the rectangle
coordinates are swapped back when the shape is created.
"""

from __future__ import annotations

import logging

from ..core.models import ChartSpec, ChartType, Direction
from .base import PADDING, ChartLayout, GeometryEngine, require_numeric

logger = logging.getLogger(__name__)


class BarEngine(GeometryEngine):
    chart_type = ChartType.BAR

    def validate(self, spec: ChartSpec) -> tuple[str, str]:
        x, y = super().validate(spec)
        require_numeric(spec.data, y, self.chart_type)
        return x, y

    def draw(self, spec: ChartSpec) -> ChartLayout:
        x, y = self.validate(spec)
        points = spec.data
        layout = ChartLayout(self.chart_type, points=points)
        if not points:
            return layout

        attrs = self.attributes
        max_y = max(p[y] for p in points) * (1 + PADDING)
        if max_y <= 0:
            max_y = 1.0
        layout.bounds = {"maxY": max_y}

        horizontal = attrs.get("direction") == Direction.HORIZONTAL.value
        extent, depth = self.chart.width, self.chart.height
        if horizontal:
            extent, depth = depth, extent

        slot = extent / len(points)
        mode = self._animation_mode()
        animated = self.animation.enabled(mode)

        for i, point in enumerate(points):
            args = [point[y], max_y]
            bar_width = slot * attrs.get("barWidth", args)

            point["xpos"] = slot * i + (slot - bar_width) / 2
            point["ypos"] = depth - depth / max_y * point[y]
            point["barHeight"] = depth - point["ypos"]

            if horizontal:
                if animated:
                    bar = self.surface.rect(0, point["xpos"], 0, bar_width)
                    target = {"width": point["barHeight"]}
                else:
                    bar = self.surface.rect(0, point["xpos"], point["barHeight"], bar_width)
            else:
                if animated:
                    bar = self.surface.rect(point["xpos"], point["ypos"] + point["barHeight"], bar_width, 0)
                    target = {"y": point["ypos"], "height": point["barHeight"]}
                else:
                    bar = self.surface.rect(point["xpos"], point["ypos"], bar_width, point["barHeight"])

            if animated:
                layout.delays.append(
                    self.animation.stagger(
                        bar, i, target, easing=mode, duration_ms=attrs.get("animateTime", [i]),
                    )
                )

            color = attrs.get("barColor", args)
            point["bar"] = bar
            bar.attr({
                "stroke": attrs.get("barBorderColor", args),
                "fill": color,
                "opacity": attrs.get("barOpacity", args),
            })

            self.interaction.bind_hover(
                bar,
                base={"fill": color},
                highlight=lambda args=args: attrs.get("barHoverColor", args),
                keys=("fill",),
                hover_text=lambda point=point: attrs.get("hoverText", [point, x, y]),
            )
            layout.shapes.append(bar)

        logger.debug("Laid out %d bars (maxY=%.3f, %s)", len(points), max_y, attrs.get("direction"))
        return layout
