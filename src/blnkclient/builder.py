r"""Build transport-ready ``httpx.Request`` objects from request
descriptors.

GET requests carry their payload as query parameters and never a body.
Every other method carries its payload as a JSON body and never query
parameters.
"""

from __future__ import annotations

__all__ = ["build_request", "encode_payload", "encode_query_params"]

import json
import logging
from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import TYPE_CHECKING, Any

import httpx

from blnkclient.config import API_KEY_HEADER, JSON_CONTENT_TYPE
from blnkclient.descriptor import HttpMethod, RequestDescriptor
from blnkclient.exceptions import RequestBuildError

if TYPE_CHECKING:
    from blnkclient.config import ClientConfig

logger: logging.Logger = logging.getLogger(__name__)


def encode_payload(value: Any) -> Any:
    """Convert a payload into JSON-compatible values.

    Dataclass fields keep their declaration order. A field can be renamed
    on the wire with ``field(metadata={"name": "..."})`` and fields set to
    ``None`` are omitted.

    Args:
        value: The value to convert.

    Returns:
        The converted value.

    Example:
        ```pycon
        >>> from dataclasses import dataclass, field
        >>> from blnkclient.builder import encode_payload
        >>> @dataclass
        ... class Balance:
        ...     ledger_id: str
        ...     currency: str
        ...     meta: dict | None = field(default=None, metadata={"name": "meta_data"})
        ...
        >>> encode_payload(Balance("ldg_1", "USD", {"k": 1}))
        {'ledger_id': 'ldg_1', 'currency': 'USD', 'meta_data': {'k': 1}}

        ```
    """
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Enum):
        return encode_payload(value.value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        encoded = {}
        for f in fields(value):
            item = getattr(value, f.name)
            if item is None:
                continue
            encoded[f.metadata.get("name", f.name)] = encode_payload(item)
        return encoded
    if isinstance(value, Mapping):
        return {str(key): encode_payload(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [encode_payload(item) for item in value]
    return value


def _format_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def encode_query_params(payload: Any) -> list[tuple[str, str]]:
    """Serialize a payload into ordered query parameters.

    Args:
        payload: A dataclass instance or a mapping.

    Returns:
        The ``(key, value)`` pairs in the payload's field order.
        ``None`` values are skipped and sequences become repeated keys.

    Raises:
        RequestBuildError: If the payload is not a dataclass instance or
            a mapping.

    Example:
        ```pycon
        >>> from blnkclient.builder import encode_query_params
        >>> encode_query_params({"limit": 20, "active": True, "ids": ["a", "b"], "skip": None})
        [('limit', '20'), ('active', 'true'), ('ids', 'a'), ('ids', 'b')]

        ```
    """
    encoded = encode_payload(payload)
    if not isinstance(encoded, dict):
        msg = f"GET payload must be a mapping or a dataclass, got {type(payload).__name__}"
        raise RequestBuildError(msg, method=HttpMethod.GET.value)
    params = []
    for key, value in encoded.items():
        if value is None:
            continue
        if isinstance(value, list):
            params.extend((key, _format_query_value(item)) for item in value)
        else:
            params.append((key, _format_query_value(value)))
    return params


def _resolve_url(base_url: str, endpoint: str) -> httpx.URL:
    if "://" in endpoint:
        msg = f"endpoint must be relative to the base URL, got {endpoint!r}"
        raise RequestBuildError(msg, endpoint=endpoint)
    try:
        return httpx.URL(base_url + endpoint.lstrip("/"))
    except httpx.InvalidURL as exc:
        msg = f"cannot build a valid URL from {base_url!r} and {endpoint!r}: {exc}"
        raise RequestBuildError(msg, endpoint=endpoint) from exc


def build_request(descriptor: RequestDescriptor, config: ClientConfig) -> httpx.Request:
    """Turn a request descriptor into an ``httpx.Request``.

    Args:
        descriptor: The logical call.
        config: The client configuration providing the base address,
            the credential and the per-attempt timeout.

    Returns:
        The request, ready to be sent.

    Raises:
        RequestBuildError: If the URL is invalid or the payload cannot be
            serialized.

    Example:
        ```pycon
        >>> from blnkclient.builder import build_request
        >>> from blnkclient.config import ClientConfig
        >>> from blnkclient.descriptor import RequestDescriptor
        >>> config = ClientConfig(base_url="http://localhost:5001", api_key="secret")
        >>> request = build_request(RequestDescriptor("balances", "GET", {"limit": 5}), config)
        >>> str(request.url)
        'http://localhost:5001/balances?limit=5'
        >>> request.headers["X-Blnk-Key"]
        'secret'

        ```
    """
    method = descriptor.method
    url = _resolve_url(config.base_url, descriptor.endpoint)

    params = None
    content = None
    if descriptor.payload is not None:
        if method is HttpMethod.GET:
            params = encode_query_params(descriptor.payload)
        else:
            try:
                content = json.dumps(encode_payload(descriptor.payload)).encode("utf-8")
            except (TypeError, ValueError) as exc:
                msg = f"cannot encode {method.value} payload for {descriptor.endpoint!r} as JSON: {exc}"
                raise RequestBuildError(
                    msg, method=method.value, endpoint=descriptor.endpoint
                ) from exc

    headers = {"Content-Type": JSON_CONTENT_TYPE, "Accept": JSON_CONTENT_TYPE}
    if config.api_key is not None:
        headers[API_KEY_HEADER] = config.api_key

    # The configured timeout applies to every attempt, whichever httpx.Client
    # sends the request.
    request = httpx.Request(
        method.value,
        url,
        params=params,
        content=content,
        headers=headers,
        extensions={"timeout": httpx.Timeout(config.timeout).as_dict()},
    )
    logger.debug(f"Built {method.value} request to {request.url}")
    return request
