r"""blnkclient - Resilient HTTP call layer for the Blnk ledger API.

This package builds requests from logical ``(endpoint, method, payload)``
calls, sends them with bounded retries over ``httpx``, and decodes the
JSON responses into caller targets.

Key Features:
    - GET payloads sent as ordered query parameters, other payloads as JSON
    - ``X-Blnk-Key`` credential header and JSON content type on every request
    - Transport errors and 5xx responses retried up to the retry count
    - 4xx responses and decode errors returned immediately, never retried
    - Pluggable backoff strategies: constant, exponential, jittered
    - Fallible construction raising ``ConfigurationError``

Example:
    ```pycon
    >>> from blnkclient import new_client, with_retry_count
    >>> with new_client("http://localhost:5001", "secret", with_retry_count(5)) as client:  # doctest: +SKIP
    ...     result = client.post("ledgers", {"name": "main"})
    ...     result.data["ledger_id"]
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "BlnkError",
    "CallResult",
    "Client",
    "ClientConfig",
    "ConfigurationError",
    "ConstantBackoff",
    "DecodeError",
    "ExponentialBackoff",
    "HttpMethod",
    "JitterBackoff",
    "RequestBuildError",
    "RequestDescriptor",
    "ResponseParseError",
    "ResponseStatusError",
    "RetryExecutor",
    "RetryExhaustedError",
    "__version__",
    "build_request",
    "decode_response",
    "new_client",
    "new_client_config",
    "with_backoff_strategy",
    "with_logger",
    "with_retry_count",
    "with_timeout",
]

from importlib.metadata import PackageNotFoundError, version

from blnkclient.backoff import ConstantBackoff, ExponentialBackoff, JitterBackoff
from blnkclient.builder import build_request
from blnkclient.client import Client, new_client
from blnkclient.config import (
    ClientConfig,
    new_client_config,
    with_backoff_strategy,
    with_logger,
    with_retry_count,
    with_timeout,
)
from blnkclient.decoder import decode_response
from blnkclient.descriptor import HttpMethod, RequestDescriptor
from blnkclient.exceptions import (
    BlnkError,
    ConfigurationError,
    DecodeError,
    RequestBuildError,
    ResponseParseError,
    ResponseStatusError,
    RetryExhaustedError,
)
from blnkclient.executor import CallResult, RetryExecutor

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
