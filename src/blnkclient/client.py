r"""Client for the Blnk ledger API.

The ``Client`` holds an immutable configuration and an ``httpx.Client``
connection pool, and exposes the call layer: request building, calls
with bounded retries, and response decoding.
"""

from __future__ import annotations

__all__ = ["Client", "new_client"]

from typing import TYPE_CHECKING, Any

import httpx

from blnkclient.builder import build_request
from blnkclient.config import new_client_config
from blnkclient.decoder import decode_response
from blnkclient.descriptor import HttpMethod, RequestDescriptor
from blnkclient.executor import CallResult, RetryExecutor

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

    from blnkclient.config import ClientConfig, ClientOption


class Client:
    r"""Client for the Blnk ledger API.

    Two usage patterns are supported:

    **External transport lifecycle**: an open ``httpx.Client`` is passed
    in and the caller closes it. ``Client`` never closes a client it did
    not create.

    .. code-block:: python

        import httpx
        from blnkclient import Client, new_client_config

        with httpx.Client(timeout=5.0) as http_client:
            client = Client(new_client_config("http://localhost:5001"), http_client=http_client)
            result = client.get("ledgers")

    **Managed lifecycle**: ``Client`` creates its own ``httpx.Client``
    using the configured timeout (and the optional ``transport``) and
    closes it on ``close()`` or when the ``with`` block exits.

    .. code-block:: python

        from blnkclient import new_client, with_retry_count

        with new_client("http://localhost:5001", "secret", with_retry_count(5)) as client:
            result = client.post("ledgers", {"name": "main"})

    Args:
        config: The client configuration.
        http_client: Optional ``httpx.Client`` used as transport. The
            configured timeout still applies to every attempt.
        transport: Optional ``httpx.BaseTransport`` for the managed
            ``httpx.Client``. Ignored when ``http_client`` is given.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        http_client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        self._owns_client = http_client is None
        self._client: httpx.Client = http_client or httpx.Client(
            timeout=config.timeout, transport=transport
        )
        self._executor = RetryExecutor(config, self._client)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(base_url={self._config.base_url!r})"

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def config(self) -> ClientConfig:
        """The immutable client configuration."""
        return self._config

    def close(self) -> None:
        """Close the underlying ``httpx.Client`` if this client created
        it."""
        if self._owns_client and not self._client.is_closed:
            self._client.close()

    def new_request(
        self, endpoint: str, method: str | HttpMethod, payload: Any = None
    ) -> httpx.Request:
        """Build the request for a call without sending it.

        Args:
            endpoint: Path relative to the base address.
            method: The HTTP method.
            payload: Optional payload.

        Returns:
            The built request.

        Raises:
            RequestBuildError: If the request cannot be built.
        """
        return build_request(RequestDescriptor(endpoint, method, payload), self._config)

    def call_with_retry(
        self,
        endpoint: str,
        method: str | HttpMethod,
        payload: Any = None,
        target: Any = None,
    ) -> CallResult:
        """Send a call with bounded retries and decode its response.

        Args:
            endpoint: Path relative to the base address.
            method: The HTTP method.
            payload: Optional payload (query parameters for GET, JSON
                body otherwise).
            target: The decoding target (see ``decode_response``).

        Returns:
            The final response and the decoded body.

        Raises:
            RequestBuildError: If the request cannot be built.
            DecodeError: If the response is rejected or cannot be decoded.
            RetryExhaustedError: If every attempt failed transiently.
        """
        return self._executor.execute(RequestDescriptor(endpoint, method, payload), target)

    def decode_response(self, response: httpx.Response, target: Any = None) -> Any:
        """Validate and decode a response. See ``decode_response``."""
        return decode_response(response, target)

    def get(self, endpoint: str, payload: Any = None, target: Any = None) -> CallResult:
        """Send a GET call; ``payload`` is sent as query parameters."""
        return self.call_with_retry(endpoint, HttpMethod.GET, payload, target)

    def post(self, endpoint: str, payload: Any = None, target: Any = None) -> CallResult:
        """Send a POST call; ``payload`` is sent as a JSON body."""
        return self.call_with_retry(endpoint, HttpMethod.POST, payload, target)

    def put(self, endpoint: str, payload: Any = None, target: Any = None) -> CallResult:
        """Send a PUT call; ``payload`` is sent as a JSON body."""
        return self.call_with_retry(endpoint, HttpMethod.PUT, payload, target)

    def delete(self, endpoint: str, payload: Any = None, target: Any = None) -> CallResult:
        """Send a DELETE call; ``payload`` is sent as a JSON body."""
        return self.call_with_retry(endpoint, HttpMethod.DELETE, payload, target)


def new_client(
    base_url: str | None,
    api_key: str | None = None,
    *options: ClientOption,
    transport: httpx.BaseTransport | None = None,
) -> Client:
    """Create a client, validating its configuration first.

    Args:
        base_url: Absolute base address of the API.
        api_key: Optional credential sent as ``X-Blnk-Key``.
        *options: Option mutators applied in order (``with_retry_count``,
            ``with_timeout``, ``with_logger``, ``with_backoff_strategy``).
        transport: Optional ``httpx`` transport, e.g. for testing.

    Returns:
        The client. It owns its ``httpx.Client``.

    Raises:
        ConfigurationError: If the base address is missing or invalid, or
            an option is invalid. Raised before any request is attempted.

    Example:
        ```pycon
        >>> from blnkclient import new_client
        >>> with new_client("http://localhost:5001", "secret") as client:
        ...     client.config.api_key
        ...
        'secret'

        ```
    """
    return Client(new_client_config(base_url, api_key, *options), transport=transport)
