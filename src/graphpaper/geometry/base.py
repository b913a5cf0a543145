"""Shared machinery for the per-chart-type geometry engines."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from numbers import Real
from typing import TYPE_CHECKING, Any, Iterable

from ..core.errors import ConfigurationError
from ..core.models import RESERVED_FIELDS, ChartSpec, ChartType, DataPoint
from ..surface.base import ShapeHandle

if TYPE_CHECKING:
    from ..core.chart import Chart

logger = logging.getLogger(__name__)

# Ranges are widened by this fraction of their span on each side
PADDING = 0.05


@dataclass
class ChartLayout:
    """What one engine run produced.

    ``bounds`` holds the engine's range values (``minX`` … ``maxY`` for
    scatter/line, ``maxY`` for bars, ``totalData`` / ``maxData`` for pies);
    ``delays`` the animation start offsets in ms, one per shape.
    """
    chart_type: ChartType
    points: list[DataPoint] = field(default_factory=list)
    shapes: list[ShapeHandle] = field(default_factory=list)
    bounds: dict[str, float] = field(default_factory=dict)
    delays: list[float] = field(default_factory=list)
    sweeps: list[float] = field(default_factory=list)
    line: ShapeHandle | None = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def check_reserved(*names: str) -> None:
    """Reject field names that layout itself writes onto every point."""
    for name in names:
        if name in RESERVED_FIELDS:
            raise ConfigurationError(
                f"Cannot use {name!r} as a data field: xpos and ypos are reserved for layout"
            )


def is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def require_numeric(points: Iterable[DataPoint], name: str, chart_type: ChartType) -> None:
    for index, point in enumerate(points):
        value = point.get(name)
        if not is_number(value):
            raise ConfigurationError(
                f"{chart_type.value} chart needs numeric {name!r} values; "
                f"record {index} has {value!r}"
            )


def padded_range(values: Iterable[float]) -> tuple[float, float]:
    """``(min, max)`` of *values*, widened by 5% of the span on each side.

    A zero span is treated as a one-unit span centred on the value.
    """
    values = list(values)
    low, high = min(values), max(values)
    if high == low:
        low, high = low - 0.5, high + 0.5
    pad = (high - low) * PADDING
    return low - pad, high + pad


# ---------------------------------------------------------------------------
# Engine base
# ---------------------------------------------------------------------------

class GeometryEngine(ABC):
    """Turns a validated ``ChartSpec`` into shapes on the chart's surface.

    Engines read attributes, the surface, the animation scheduler and the
    interaction controller from the owning chart, and augment the data
    points in place with their pixel positions and shape handles.
    """

    chart_type: ChartType  # set by subclasses

    def __init__(self, chart: Chart) -> None:
        self.chart = chart
        self.attributes = chart.attributes
        self.surface = chart.surface
        self.animation = chart.animation
        self.interaction = chart.interaction

    def fields(self, spec: ChartSpec) -> tuple[str, str]:
        """The two data fields this chart reads, after defaults."""
        return spec.x or "x", spec.y or "y"

    def validate(self, spec: ChartSpec) -> tuple[str, str]:
        """Check field names and values before anything is drawn."""
        names = self.fields(spec)
        check_reserved(*names)
        return names

    @abstractmethod
    def draw(self, spec: ChartSpec) -> ChartLayout:
        """Lay out ``spec.data`` and create its shapes."""

    # -- helpers ---------------------------------------------------------

    def _animation_mode(self, override: str | None = None) -> str:
        return override if override is not None else self.attributes.get("animate")
