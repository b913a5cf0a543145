"""graphpaper: declarative bar, line, pie and scatter charts.

Usage::

    from graphpaper import HostElement, create_chart

    chart = create_chart(HostElement(), 300, 200)
    chart.draw({"type": "bar", "x": "day", "y": "spoons", "data": [...]})
    svg = chart.surface.to_svg()
"""

from __future__ import annotations

from .core.animation import AnimationScheduler, LoopTimer, VirtualTimer
from .core.attributes import DEFAULT_ATTRIBUTES, AttributeStore, Computed, Constant
from .core.chart import Chart, create_chart
from .core.errors import ConfigurationError, GraphError, TransportError
from .core.events import DOCUMENT, EventRegistry, HostElement, PointerEvent
from .core.models import ChartSpec, ChartState, ChartType, Direction, LineMode, RemoteSource
from .core.transport import HttpTransport
from .surface.scene import SceneSurface

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_ATTRIBUTES",
    "DOCUMENT",
    "AnimationScheduler",
    "AttributeStore",
    "Chart",
    "ChartSpec",
    "ChartState",
    "ChartType",
    "Computed",
    "ConfigurationError",
    "Constant",
    "Direction",
    "EventRegistry",
    "GraphError",
    "HostElement",
    "HttpTransport",
    "LineMode",
    "LoopTimer",
    "PointerEvent",
    "RemoteSource",
    "SceneSurface",
    "TransportError",
    "VirtualTimer",
    "create_chart",
]
