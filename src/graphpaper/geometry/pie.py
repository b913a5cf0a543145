"""Pie chart layout.

Segments are walked in input order from angle 0, each sweeping
``360 * value / total`` degrees. ``segmentBorderColor``,
``segmentColor``, ``segmentHoverColor``, ``segmentOpacity`` and
``segmentRadius`` resolve with ``[value, maxData]``; ``hoverText`` with
``[segment, name field, data field]``; ``animateTime`` with ``[index]``.
"""

from __future__ import annotations

import logging
import math

from ..core.models import ChartSpec, ChartType
from ..surface.paths import fmt
from .base import PADDING, ChartLayout, GeometryEngine, require_numeric

logger = logging.getLogger(__name__)

# An arc whose end point equals its start point draws nothing
_MAX_SWEEP = 359.99


def sector_path(cx: float, cy: float, r: float, start_angle: float, degrees: float) -> str:
    """Path of a pie slice centred on ``(cx, cy)``.

    Angles are in degrees, measured anticlockwise from the positive x
    axis; the large-arc flag is set for sweeps over 180°.
    """
    degrees = min(degrees, _MAX_SWEEP)
    rad = math.pi / 180
    x1 = cx + r * math.cos(-start_angle * rad)
    y1 = cy + r * math.sin(-start_angle * rad)
    x2 = cx + r * math.cos(-(start_angle + degrees) * rad)
    y2 = cy + r * math.sin(-(start_angle + degrees) * rad)
    large = 1 if degrees > 180 else 0
    return (
        f"M{fmt(cx)} {fmt(cy)}"
        f"L{fmt(x1)} {fmt(y1)}"
        f"A{fmt(r)} {fmt(r)} 0 {large} 0 {fmt(x2)} {fmt(y2)}"
        "Z"
    )


class PieEngine(GeometryEngine):
    chart_type = ChartType.PIE

    def fields(self, spec: ChartSpec) -> tuple[str, str]:
        return spec.data_name or "name", spec.data_data or "data"

    def validate(self, spec: ChartSpec) -> tuple[str, str]:
        name, data = super().validate(spec)
        require_numeric(spec.data, data, self.chart_type)
        return name, data

    def draw(self, spec: ChartSpec) -> ChartLayout:
        name, data = self.validate(spec)
        segments = spec.data
        layout = ChartLayout(self.chart_type, points=segments)
        if not segments:
            return layout

        attrs = self.attributes
        total = sum(s[data] for s in segments)
        max_data = max(s[data] for s in segments) * (1 + PADDING)
        layout.bounds = {"totalData": total, "maxData": max_data}

        cx, cy = self.chart.width / 2, self.chart.height / 2
        mode = self._animation_mode()
        animated = self.animation.enabled(mode)
        angle = 0.0

        for i, segment in enumerate(segments):
            degrees = 360 / total * segment[data] if total else 0.0
            args = [segment[data], max_data]
            color = attrs.get("segmentColor", args)
            radius = attrs.get("segmentRadius", args)

            if animated:
                shape = self.surface.path(sector_path(cx, cy, 1, angle, degrees))
                layout.delays.append(self.animation.stagger(
                    shape, i, {"d": sector_path(cx, cy, radius, angle, degrees)},
                    easing=mode, duration_ms=attrs.get("animateTime", [i]),
                ))
            else:
                shape = self.surface.path(sector_path(cx, cy, radius, angle, degrees))

            angle += degrees
            layout.sweeps.append(degrees)

            segment["segment"] = shape
            shape.attr({
                "stroke": attrs.get("segmentBorderColor", args),
                "fill": color,
                "opacity": attrs.get("segmentOpacity", args),
            })

            self.interaction.bind_hover(
                shape,
                base={"fill": color},
                highlight=lambda args=args: attrs.get("segmentHoverColor", args),
                keys=("fill",),
                hover_text=lambda segment=segment: attrs.get("hoverText", [segment, name, data]),
            )
            layout.shapes.append(shape)

        logger.debug("Laid out %d segments (total=%s)", len(segments), total)
        return layout
