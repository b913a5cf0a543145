"""Data acquisition for charts whose data lives behind a URL."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Mapping

from .attributes import AttributeStore, text_style
from .errors import TransportError
from .models import DataPoint, RemoteSource
from .transport import Transport

if TYPE_CHECKING:
    from ..surface.base import DrawingSurface, ShapeHandle

logger = logging.getLogger(__name__)


class DataPipeline:
    """Normalizes data sources and resolves remote ones into records."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    @staticmethod
    def normalize(source: Any) -> list[DataPoint] | RemoteSource:
        """Inline records pass through; anything else becomes a ``RemoteSource``.

        A bare string is shorthand for ``{"url": string}``.
        """
        if isinstance(source, list):
            return source
        if isinstance(source, RemoteSource):
            return source
        if isinstance(source, str):
            return RemoteSource(url=source)
        if isinstance(source, Mapping):
            return RemoteSource(**source)
        raise TypeError(f"Unsupported data source: {type(source).__name__}")

    @staticmethod
    def show_placeholder(surface: DrawingSurface, attributes: AttributeStore, width: float, height: float) -> ShapeHandle | None:
        """Draw the loading text in the middle of the surface when enabled."""
        if not attributes.get("ajaxLoading"):
            return None
        text = surface.text(width / 2, height / 2, attributes.get("loadingText"))
        text.attr(text_style(attributes))
        return text

    async def fetch(self, source: RemoteSource) -> list[DataPoint]:
        """Request *source* and return its records."""
        body = await self.transport.request(source.method, source.url, source.data)
        records = self.parse(body, url=source.url)
        logger.info("Loaded %d records from %s", len(records), source.url)
        return records

    @staticmethod
    def parse(body: Any, *, url: str = "") -> list[DataPoint]:
        """Decode a response body into a list of records.

        Structured bodies are used as they are; text is parsed as JSON.
        """
        if isinstance(body, (bytes, str)):
            try:
                body = json.loads(body)
            except json.JSONDecodeError as exc:
                raise TransportError(f"Response from {url or 'remote source'} is not JSON: {exc}", url=url) from exc

        if not isinstance(body, list) or not all(isinstance(r, Mapping) for r in body):
            raise TransportError(
                f"Expected a list of records from {url or 'remote source'}, got {type(body).__name__}",
                url=url,
            )
        return [dict(record) for record in body]
