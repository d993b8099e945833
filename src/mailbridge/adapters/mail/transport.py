"""HTTP transport helpers shared by the provider adapters.

Provides client construction, orjson request encoding and response
interpretation. One POST is issued per send; there are no retries, and
httpx transport errors (connection failures, timeouts) reach the caller
unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx
import orjson

from ...domain.errors import DeliveryError

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def build_http_client(*, timeout: float, transport: httpx.BaseTransport | None = None) -> httpx.Client:
    """Return an ``httpx.Client`` with the request timeout applied.

    Args:
        timeout: Total timeout in seconds applied to connect, read and write.
        transport: Optional transport override, e.g. ``httpx.MockTransport``.

    Example:
        >>> with build_http_client(timeout=5.0) as client:
        ...     client.timeout.read
        5.0
    """
    return httpx.Client(timeout=httpx.Timeout(timeout), transport=transport)


def encode_json(payload: Mapping[str, Any]) -> bytes:
    """Serialize a request payload with orjson.

    orjson does not HTML-escape, so bodies containing markup travel unchanged.

    Example:
        >>> encode_json({"HtmlBody": "<b>hi</b>"})
        b'{"HtmlBody":"<b>hi</b>"}'
    """
    return orjson.dumps(payload)


def check_response(response: httpx.Response, *, driver: str, success_status: int) -> None:
    """Raise :class:`DeliveryError` unless the provider returned ``success_status``.

    Args:
        response: Response of the provider call.
        driver: Provider name for logging.
        success_status: The one status code the provider uses for acceptance.

    Raises:
        DeliveryError: Any other status; the body is carried verbatim.

    Example:
        >>> check_response(httpx.Response(202), driver="sendgrid", success_status=202)
        >>> check_response(httpx.Response(400, text="bad"), driver="sendgrid", success_status=202)
        Traceback (most recent call last):
        ...
        mailbridge.domain.errors.DeliveryError: bad
    """
    if response.status_code == success_status:
        return
    logger.warning(
        "Provider rejected message",
        extra={"driver": driver, "status_code": response.status_code},
    )
    raise DeliveryError(response.text, status_code=response.status_code)


def post_json(
    client: httpx.Client,
    url: str,
    payload: Mapping[str, Any],
    *,
    headers: Mapping[str, str] | None = None,
    auth: httpx.Auth | tuple[str, str] | None = None,
) -> httpx.Response:
    """POST an orjson-encoded payload with a JSON content type."""
    merged = {"Content-Type": JSON_CONTENT_TYPE, "Accept": JSON_CONTENT_TYPE}
    if headers:
        merged.update(headers)
    return client.post(url, content=encode_json(payload), headers=merged, auth=auth)


__all__ = [
    "JSON_CONTENT_TYPE",
    "build_http_client",
    "check_response",
    "encode_json",
    "post_json",
]
