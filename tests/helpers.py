r"""Shared test helpers for the call layer tests.

This module provides fake transports that replay scripted outcomes and
record every request they receive, plus a byte stream that counts how
many times it was released.
"""

from __future__ import annotations

__all__ = [
    "TEST_BASE_URL",
    "EchoTransport",
    "ScriptedTransport",
    "TrackingStream",
    "json_response",
]

import json
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

TEST_BASE_URL = "http://ledger.test:5001"


class TrackingStream(httpx.SyncByteStream):
    """Byte stream that records how many times it was closed."""

    def __init__(self, content: bytes = b"") -> None:
        self._content = content
        self.close_count = 0

    def __iter__(self) -> Iterator[bytes]:
        yield self._content

    def close(self) -> None:
        self.close_count += 1


def json_response(status_code: int, body: Any = None) -> httpx.Response:
    """Create a response with a JSON body (empty body if ``body`` is
    ``None``)."""
    content = b"" if body is None else json.dumps(body).encode("utf-8")
    return httpx.Response(
        status_code,
        headers={"Content-Type": "application/json"},
        stream=TrackingStream(content),
    )


class ScriptedTransport(httpx.BaseTransport):
    """Transport replaying a sequence of outcomes, one per request.

    Each outcome is an exception instance (raised), a status code (empty
    body), or a ``(status_code, body)`` tuple (JSON body). The last
    outcome is repeated once the script is exhausted.
    """

    def __init__(self, outcomes: Sequence[Exception | int | tuple[int, Any]]) -> None:
        self.outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []
        self.streams: list[TrackingStream] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.outcomes)) - 1
        outcome = self.outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        status_code, body = outcome if isinstance(outcome, tuple) else (outcome, None)
        response = json_response(status_code, body)
        self.streams.append(response.stream)
        return response


class EchoTransport(httpx.BaseTransport):
    """Transport answering 200 with the request body or, for requests
    without a body, with the query parameters as a JSON object."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = request.read()
        if not body:
            body = json.dumps(dict(request.url.params)).encode("utf-8")
        return httpx.Response(200, headers={"Content-Type": "application/json"}, content=body)
