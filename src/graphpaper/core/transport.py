"""Network collaborator for remote datasets.

``HttpTransport`` issues one request per call through ``httpx`` and
hands back either structured data (when the server labels the body
``application/json``) or the raw text for the pipeline to parse. Any
non-200 status is fatal; there is no retry or backoff here.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol, Union

import httpx

from .errors import TransportError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_REQUEST_TIMEOUT = 30.0
_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
_JSON_CONTENT_TYPE = "application/json"

Payload = Union[str, Mapping[str, Any], None]


class Transport(Protocol):
    async def request(self, method: str, url: str, payload: Payload = None) -> Any: ...


class HttpTransport:
    """``Transport`` backed by an ``httpx.AsyncClient``.

    Parameters
    ----------
    timeout
        Per-request timeout in seconds.
    client
        Optional pre-configured client (base URL, auth, a mock transport
        in tests). When omitted a short-lived client is opened per request.
    """

    def __init__(self, timeout: float = _REQUEST_TIMEOUT, client: httpx.AsyncClient | None = None) -> None:
        self.timeout = timeout
        self._client = client

    # -- public API ----------------------------------------------------------

    async def request(self, method: str, url: str, payload: Payload = None) -> Any:
        """Send *payload* to *url* and return the decoded body.

        GET payloads travel in the query string; POST payloads as a form
        body. Returns parsed JSON for ``application/json`` responses and
        ``str`` otherwise.
        """
        method = method.upper()
        kwargs = self._request_kwargs(method, payload)
        logger.info("Fetching chart data: %s %s", method, url)

        try:
            if self._client is not None:
                resp = await self._client.request(method, url, **kwargs)
            else:
                async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                    resp = await client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise TransportError(f"Request to {url} failed: {exc}", url=url) from exc

        if resp.status_code != 200:
            raise TransportError(
                f"Request failed: {resp.status_code} ({method} {url})",
                url=url,
                status_code=resp.status_code,
            )

        content_type = resp.headers.get("content-type", "").split(";")[0].strip().lower()
        if content_type == _JSON_CONTENT_TYPE:
            try:
                return resp.json()
            except ValueError as exc:
                raise TransportError(f"Malformed JSON from {url}: {exc}", url=url) from exc
        return resp.text

    async def get(self, url: str, payload: Payload = None) -> Any:
        return await self.request("GET", url, payload)

    async def post(self, url: str, payload: Payload = None) -> Any:
        return await self.request("POST", url, payload)

    # -- private -------------------------------------------------------------

    @staticmethod
    def _request_kwargs(method: str, payload: Payload) -> dict[str, Any]:
        if not payload:
            return {}
        if method == "GET":
            if isinstance(payload, str):
                return {"params": httpx.QueryParams(payload)}
            return {"params": dict(payload)}
        if isinstance(payload, str):
            return {"content": payload, "headers": {"Content-Type": _FORM_CONTENT_TYPE}}
        return {"data": dict(payload)}
