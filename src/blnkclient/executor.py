r"""Retry executor driving one logical call to completion.

Each attempt builds the request, sends it and decodes the response.
Transport errors and 5xx responses are transient and retried after a
backoff wait. Build errors, non-5xx rejections and decode errors are
permanent and returned immediately. The number of attempts is bounded by
the configured retry count.
"""

from __future__ import annotations

__all__ = ["CallResult", "RetryExecutor"]

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from blnkclient.builder import build_request
from blnkclient.decoder import decode_response
from blnkclient.exceptions import DecodeError, ResponseParseError, RetryExhaustedError

if TYPE_CHECKING:
    from blnkclient.config import ClientConfig
    from blnkclient.descriptor import RequestDescriptor

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallResult:
    """Outcome of a successful call.

    Attributes:
        response: The final HTTP response. Its body is already consumed
            and released.
        data: The decoded body.
    """

    response: httpx.Response
    data: Any


class RetryExecutor:
    """Execute calls with a bounded number of attempts.

    The executor holds no per-call state, so one instance can serve
    concurrent calls as long as the ``httpx.Client`` is shared safely.

    Args:
        config: The client configuration.
        client: The ``httpx.Client`` used as transport. Its timeout is
            applied to every attempt.

    Example:
        ```pycon
        >>> import httpx
        >>> from blnkclient.config import ClientConfig
        >>> from blnkclient.descriptor import RequestDescriptor
        >>> from blnkclient.executor import RetryExecutor
        >>> transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"ok": True}))
        >>> executor = RetryExecutor(
        ...     ClientConfig(base_url="http://localhost:5001"), httpx.Client(transport=transport)
        ... )
        >>> executor.execute(RequestDescriptor("health")).data
        {'ok': True}

        ```
    """

    def __init__(self, config: ClientConfig, client: httpx.Client) -> None:
        self.config = config
        self.client = client

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(config={self.config!r})"

    def execute(self, descriptor: RequestDescriptor, target: Any = None) -> CallResult:
        """Execute a call, retrying transient failures.

        Args:
            descriptor: The logical call.
            target: The decoding target (see ``decode_response``).

        Returns:
            The final response and the decoded body.

        Raises:
            RequestBuildError: If the request cannot be built. Not retried.
            DecodeError: If the response is rejected (non-2xx below 500)
                or cannot be decoded. Not retried; the error carries the
                response.
            RetryExhaustedError: If every attempt failed with a transport
                error or a 5xx response.
        """
        retry_count = self.config.retry_count
        method = descriptor.method.value
        url = descriptor.endpoint
        last_error: Exception | None = None

        for attempt in range(retry_count):
            request = build_request(descriptor, self.config)
            url = str(request.url)
            logger.debug(f"{method} request to {url}: attempt {attempt + 1}/{retry_count}")

            try:
                response = self.client.send(request, stream=True)
            except httpx.RequestError as exc:
                last_error = exc
                self.config.logger.info(
                    f"{method} request to {url} failed on attempt {attempt + 1}/{retry_count}: "
                    f"{type(exc).__name__}: {exc}"
                )
                self._wait(attempt)
                continue

            if response.status_code >= 500:
                last_error = None
                response.close()
                self.config.logger.error(
                    f"Request failed with status code {response.status_code} and status "
                    f"{response.reason_phrase} on attempt {attempt + 1}/{retry_count}"
                )
                self._wait(attempt)
                continue

            try:
                response.read()
            except httpx.DecodingError as exc:
                response.close()
                msg = f"cannot decode the response body of {method} request to {url}: {exc}"
                self.config.logger.error(msg)
                raise ResponseParseError(msg, response=response) from exc
            except httpx.RequestError as exc:
                last_error = exc
                response.close()
                self.config.logger.info(
                    f"{method} request to {url} failed while reading the body on attempt "
                    f"{attempt + 1}/{retry_count}: {type(exc).__name__}: {exc}"
                )
                self._wait(attempt)
                continue

            try:
                data = decode_response(response, target)
            except DecodeError as exc:
                self.config.logger.error(str(exc))
                raise

            logger.debug(
                f"{method} request to {url} succeeded with status {response.status_code} "
                f"on attempt {attempt + 1}/{retry_count}"
            )
            return CallResult(response=response, data=data)

        msg = f"{method} request to {url} failed after {retry_count} attempts: max retry count exceeded"
        raise RetryExhaustedError(msg, method=method, url=url, attempts=retry_count) from last_error

    def _wait(self, attempt: int) -> None:
        # No wait after the final attempt.
        if attempt + 1 >= self.config.retry_count:
            return
        delay = self.config.backoff_strategy.calculate(attempt)
        logger.debug(f"Waiting {delay:.2f}s before retry")
        time.sleep(delay)
