r"""Validate HTTP responses and decode their JSON body into a caller
target.

The target is either a type (a dataclass type or any callable accepting
the parsed JSON), an existing instance that is populated in place (a
dataclass instance, a mutable mapping or a mutable sequence), or
``None`` to get the parsed JSON value back.
"""

from __future__ import annotations

__all__ = ["decode_response", "decode_value", "parse_datetime"]

import logging
import re
import types
import typing
from collections.abc import MutableMapping, MutableSequence
from dataclasses import fields, is_dataclass
from datetime import datetime
from typing import Any

import httpx

from blnkclient.exceptions import ResponseParseError, ResponseStatusError

logger: logging.Logger = logging.getLogger(__name__)

# Fractional seconds of any precision. RFC 3339 timestamps with nanosecond
# precision drop trailing zeros, so the fraction has from 1 to 9 digits.
_FRACTION_PATTERN = re.compile(r"\.(\d+)")


def _wire_name(f: Any) -> str:
    return f.metadata.get("name", f.name)


def _field_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        # Unresolvable forward references: values are assigned as parsed.
        return {}


def parse_datetime(value: str) -> datetime:
    r"""Parse an RFC 3339 timestamp.

    A trailing ``Z`` is read as UTC and fractional seconds are padded or
    truncated to microseconds.

    Args:
        value: The timestamp string.

    Returns:
        The parsed datetime.

    Raises:
        ValueError: If the value is not a valid timestamp.

    Example:
        ```pycon
        >>> from blnkclient.decoder import parse_datetime
        >>> parse_datetime("2024-05-01T12:34:56.123456789Z")
        datetime.datetime(2024, 5, 1, 12, 34, 56, 123456, tzinfo=datetime.timezone.utc)

        ```
    """
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    value = _FRACTION_PATTERN.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)
    return datetime.fromisoformat(value)


def _convert(hint: Any, value: Any) -> Any:
    if hint is None or value is None:
        return value
    if isinstance(hint, type) and is_dataclass(hint):
        return _from_dict(hint, value)
    if hint is datetime and isinstance(value, str):
        return parse_datetime(value)
    origin = typing.get_origin(hint)
    args = typing.get_args(hint)
    if origin in (typing.Union, types.UnionType):
        candidates = [arg for arg in args if arg is not type(None)]
        return _convert(candidates[0], value) if len(candidates) == 1 else value
    if origin is list and args and isinstance(value, list):
        return [_convert(args[0], item) for item in value]
    return value


def _from_dict(cls: type, data: Any) -> Any:
    if not isinstance(data, dict):
        msg = f"expected a JSON object to build {cls.__name__}, got {type(data).__name__}"
        raise TypeError(msg)
    hints = _field_hints(cls)
    kwargs = {
        f.name: _convert(hints.get(f.name), data[_wire_name(f)])
        for f in fields(cls)
        if f.init and _wire_name(f) in data
    }
    return cls(**kwargs)


def decode_value(data: Any, target: Any = None) -> Any:
    """Decode a parsed JSON value into a target.

    Args:
        data: The parsed JSON value.
        target: The decoding target. See the module documentation.

    Returns:
        The decoded value. When ``target`` is an instance, the same
        instance is returned after being populated.

    Raises:
        TypeError: If the value does not fit the target.
        ValueError: If a field value cannot be converted.

    Example:
        ```pycon
        >>> from dataclasses import dataclass
        >>> from blnkclient.decoder import decode_value
        >>> @dataclass
        ... class Ledger:
        ...     ledger_id: str
        ...     name: str = ""
        ...
        >>> decode_value({"ledger_id": "ldg_1", "name": "main", "extra": 1}, Ledger)
        Ledger(ledger_id='ldg_1', name='main')
        >>> target = {}
        >>> decode_value({"a": 1}, target) is target
        True

        ```
    """
    if target is None:
        return data
    if isinstance(target, type):
        if is_dataclass(target):
            return _from_dict(target, data)
        return target(data)
    if is_dataclass(target):
        if not isinstance(data, dict):
            msg = f"expected a JSON object to populate {type(target).__name__}"
            raise TypeError(msg)
        hints = _field_hints(type(target))
        for f in fields(target):
            if _wire_name(f) in data:
                setattr(target, f.name, _convert(hints.get(f.name), data[_wire_name(f)]))
        return target
    if isinstance(target, MutableMapping):
        target.update(data)
        return target
    if isinstance(target, MutableSequence):
        if not isinstance(data, list):
            msg = f"expected a JSON array to populate {type(target).__name__}"
            raise TypeError(msg)
        target[:] = data
        return target
    msg = f"unsupported decoding target {type(target).__name__}"
    raise TypeError(msg)


def _error_payload(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _request_label(response: httpx.Response) -> str:
    try:
        request = response.request
    except RuntimeError:
        return "request"
    return f"{request.method} request to {request.url}"


def _status_error(response: httpx.Response) -> ResponseStatusError:
    payload = _error_payload(response)
    msg = f"{_request_label(response)} failed with status {response.status_code}"
    if isinstance(payload, dict):
        detail = payload.get("error") or payload.get("message")
        if detail:
            msg = f"{msg}: {detail}"
    return ResponseStatusError(msg, response=response, error_payload=payload)


def decode_response(response: httpx.Response, target: Any = None) -> Any:
    """Validate the response status and decode its JSON body.

    The response is closed when this function returns or raises.

    Args:
        response: The response to decode.
        target: The decoding target. See the module documentation.

    Returns:
        The decoded value. A 2xx response with an empty body returns
        an instance target unchanged and ``None`` otherwise.

    Raises:
        ResponseStatusError: If the status is not in the 2xx range.
        ResponseParseError: If the body has a malformed content
            encoding, is not valid JSON or does not fit the target.

    Example:
        ```pycon
        >>> import httpx
        >>> from blnkclient.decoder import decode_response
        >>> request = httpx.Request("GET", "http://localhost:5001/ledgers")
        >>> decode_response(httpx.Response(200, json={"ledger_id": "ldg_1"}, request=request))
        {'ledger_id': 'ldg_1'}

        ```
    """
    try:
        try:
            response.read()
        except httpx.DecodingError as exc:
            msg = f"cannot decode the response body: {exc}"
            raise ResponseParseError(msg, response=response) from exc
        if not response.is_success:
            raise _status_error(response)
        if not response.content:
            return None if isinstance(target, type) else target
        try:
            data = response.json()
        except ValueError as exc:
            msg = f"response body is not valid JSON: {exc}"
            raise ResponseParseError(msg, response=response) from exc
        try:
            return decode_value(data, target)
        except (TypeError, ValueError, AttributeError) as exc:
            msg = f"cannot decode response body: {exc}"
            raise ResponseParseError(msg, response=response) from exc
    finally:
        response.close()
        logger.debug(f"Released response body (status {response.status_code})")
