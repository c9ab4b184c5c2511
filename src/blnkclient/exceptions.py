r"""Exceptions raised by the Blnk HTTP call layer.

The taxonomy separates permanent failures (configuration, request
building, response decoding) from the terminal failure raised when
every attempt of a call was consumed by transient errors.
"""

from __future__ import annotations

__all__ = [
    "BlnkError",
    "ConfigurationError",
    "DecodeError",
    "RequestBuildError",
    "ResponseParseError",
    "ResponseStatusError",
    "RetryExhaustedError",
]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


class BlnkError(Exception):
    """Base class for all errors raised by ``blnkclient``.

    Args:
        message: Human-readable description of the error.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(BlnkError, ValueError):
    """Raised when a client configuration is invalid.

    This is raised at construction time, before any request is attempted.

    Example:
        ```pycon
        >>> from blnkclient.exceptions import ConfigurationError
        >>> raise ConfigurationError("base_url is required")
        Traceback (most recent call last):
        ...
        blnkclient.exceptions.ConfigurationError: base_url is required

        ```
    """


class RequestBuildError(BlnkError):
    """Raised when a request cannot be built from a descriptor.

    A build failure is permanent and is never retried.

    Args:
        message: Description of the error.
        method: The HTTP method of the descriptor, if known.
        endpoint: The endpoint of the descriptor, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        method: str | None = None,
        endpoint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.endpoint = endpoint


class DecodeError(BlnkError):
    """Raised when a response cannot be validated or decoded.

    Decode errors are permanent: repeating the call will not fix a
    rejected or malformed response.

    Args:
        message: Description of the error.
        response: The response that failed to decode.
    """

    def __init__(self, message: str, *, response: httpx.Response | None = None) -> None:
        super().__init__(message)
        self.response = response

    @property
    def status_code(self) -> int | None:
        """The HTTP status code of the response, if any."""
        if self.response is None:
            return None
        return self.response.status_code


class ResponseStatusError(DecodeError):
    """Raised when the response status is outside the 2xx range.

    Args:
        message: Description of the error.
        response: The rejected response.
        error_payload: The JSON error body sent by the server, or ``None``
            if the body was empty or not JSON.

    Example:
        ```pycon
        >>> import httpx
        >>> from blnkclient.exceptions import ResponseStatusError
        >>> err = ResponseStatusError(
        ...     "request failed with status 404",
        ...     response=httpx.Response(404),
        ...     error_payload={"error": "not found"},
        ... )
        >>> err.status_code
        404
        >>> err.error_payload
        {'error': 'not found'}

        ```
    """

    def __init__(
        self,
        message: str,
        *,
        response: httpx.Response | None = None,
        error_payload: Any = None,
    ) -> None:
        super().__init__(message, response=response)
        self.error_payload = error_payload


class ResponseParseError(DecodeError):
    """Raised when a response body cannot be decoded: a malformed
    content encoding, invalid JSON, or a value that does not fit the
    requested target."""


class RetryExhaustedError(BlnkError):
    """Raised when every attempt of a call failed with a transient
    error.

    No response is attached. The last transport error, if any, is
    chained as ``__cause__``.

    Args:
        message: Description of the error.
        method: The HTTP method of the call.
        url: The URL of the call.
        attempts: The number of attempts performed.
    """

    def __init__(self, message: str, *, method: str, url: str, attempts: int) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.attempts = attempts
