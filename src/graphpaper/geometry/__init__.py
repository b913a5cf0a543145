"""Per-chart-type geometry engines.

Usage::

    from graphpaper.geometry import engine_for

    layout = engine_for(ChartType.BAR)(chart).draw(spec)
"""

from __future__ import annotations

from ..core.models import ChartType
from .bar import BarEngine
from .base import ChartLayout, GeometryEngine, check_reserved, padded_range
from .line import LineEngine, least_squares
from .pie import PieEngine, sector_path
from .scatter import ScatterEngine

ENGINES: dict[ChartType, type[GeometryEngine]] = {
    ChartType.BAR: BarEngine,
    ChartType.LINE: LineEngine,
    ChartType.PIE: PieEngine,
    ChartType.SCATTER: ScatterEngine,
}

_missing = set(ChartType) - set(ENGINES)
if _missing:
    raise ImportError(f"No geometry engine registered for: {sorted(t.value for t in _missing)}")


def engine_for(chart_type: ChartType) -> type[GeometryEngine]:
    return ENGINES[chart_type]


__all__ = [
    "ENGINES",
    "BarEngine",
    "ChartLayout",
    "GeometryEngine",
    "LineEngine",
    "PieEngine",
    "ScatterEngine",
    "check_reserved",
    "engine_for",
    "least_squares",
    "padded_range",
    "sector_path",
]
