"""Pydantic models describing a chart draw request.

A ``ChartSpec`` is the input to one draw cycle. The engine
never inspects raw dictionaries beyond ``ChartSpec.parse``, which is the
single deserialization boundary where malformed input (including an
unknown chart type) turns into a ``ConfigurationError``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ChartType(str, Enum):
    """Supported chart types."""
    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    SCATTER = "scatter"


class LineMode(str, Enum):
    """How a line chart joins its points."""
    STRAIGHT = "straight"
    CURVED = "curved"
    BEST_FIT = "best fit"


class Direction(str, Enum):
    """Orientation of the bars in a bar chart."""
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class ChartState(str, Enum):
    """Lifecycle state of a chart instance."""
    EMPTY = "empty"
    AWAITING_DATA = "awaiting_data"
    DRAWN = "drawn"


# Field names written onto every data point during layout
RESERVED_FIELDS = frozenset({"xpos", "ypos"})

# Everything layout adds to a record; stripped again on clear()
DERIVED_FIELDS = ("xpos", "ypos", "barHeight", "point", "bar", "segment")


# ---------------------------------------------------------------------------
# Data sources
# ---------------------------------------------------------------------------

class RemoteSource(BaseModel):
    """A dataset that has to be fetched before it can be drawn."""
    url: str
    data: Optional[Union[str, dict[str, Any]]] = None
    method: str = "GET"


DataPoint = dict[str, Any]
DataSource = Union[list[DataPoint], RemoteSource, str]


# ---------------------------------------------------------------------------
# Chart description
# ---------------------------------------------------------------------------

class ChartSpec(BaseModel):
    """Declarative description of one chart.

    ``dataName`` / ``dataData`` are accepted under their camelCase names
    as well as ``data_name`` / ``data_data``.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: ChartType
    title: str = ""
    x: Optional[str] = None
    y: Optional[str] = None
    data_name: Optional[str] = Field(default=None, alias="dataName")
    data_data: Optional[str] = Field(default=None, alias="dataData")
    line: LineMode = LineMode.STRAIGHT
    data: DataSource = Field(default_factory=list)
    attrs: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def parse(cls, raw: ChartSpec | Mapping[str, Any]) -> ChartSpec:
        """Validate *raw* into a ``ChartSpec``.

        Raises ``ConfigurationError`` when the description is malformed,
        e.g. when ``type`` names a chart type that does not exist.
        """
        if isinstance(raw, ChartSpec):
            return raw
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as exc:
            fields = ", ".join(
                ".".join(str(p) for p in err["loc"]) or "<root>" for err in exc.errors()
            )
            raise ConfigurationError(f"Invalid chart description ({fields}): {exc}") from exc

    @property
    def is_inline(self) -> bool:
        return isinstance(self.data, list)

    def with_data(self, records: list[DataPoint]) -> ChartSpec:
        """Return a copy of this spec holding the resolved *records*."""
        return self.model_copy(update={"data": records})
