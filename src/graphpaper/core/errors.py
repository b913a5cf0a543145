"""Exception hierarchy shared by every layer of the chart engine."""

from __future__ import annotations


class GraphError(Exception):
    """Base class for all errors raised by graphpaper."""


class ConfigurationError(GraphError):
    """The chart description cannot be drawn as given.

    Raised synchronously from ``Chart.draw`` for unknown chart types,
    reserved field names, non-numeric axis values and degenerate
    best-fit regressions.
    """


class TransportError(GraphError):
    """A remote data source could not be fetched or understood."""

    def __init__(self, message: str, *, url: str = "", status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
