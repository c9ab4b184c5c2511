r"""Parameter validation utilities for the client configuration.

Each function raises ``ConfigurationError`` when the value does not
satisfy its constraint, so invalid settings are rejected when the
configuration is built rather than when a request is sent.
"""

from __future__ import annotations

__all__ = ["validate_base_url", "validate_retry_count", "validate_timeout"]

import httpx

from blnkclient.exceptions import ConfigurationError


def validate_base_url(base_url: str | None) -> None:
    """Validate the base address of the remote API.

    Args:
        base_url: The base address. Must be a non-empty absolute URL
            with a scheme and a host.

    Raises:
        ConfigurationError: If the base address is missing, empty,
            unparsable, or not absolute.

    Example:
        ```pycon
        >>> from blnkclient.validation import validate_base_url
        >>> validate_base_url("http://localhost:5001/")
        >>> validate_base_url("")  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        blnkclient.exceptions.ConfigurationError: base_url is required

        ```
    """
    if base_url is None or not str(base_url).strip():
        msg = "base_url is required"
        raise ConfigurationError(msg)
    try:
        url = httpx.URL(str(base_url))
    except (httpx.InvalidURL, TypeError) as exc:
        msg = f"base_url is not a valid URL, got {base_url!r}: {exc}"
        raise ConfigurationError(msg) from exc
    if url.scheme not in ("http", "https") or not url.host:
        msg = f"base_url must be an absolute http(s) URL, got {base_url!r}"
        raise ConfigurationError(msg)


def validate_retry_count(retry_count: int) -> None:
    """Validate the number of attempts per call.

    Args:
        retry_count: Total attempts per logical call. Must be >= 1.

    Raises:
        ConfigurationError: If ``retry_count`` is not a positive integer.
    """
    if isinstance(retry_count, bool) or not isinstance(retry_count, int) or retry_count < 1:
        msg = f"retry_count must be a positive integer, got {retry_count!r}"
        raise ConfigurationError(msg)


def validate_timeout(timeout: float) -> None:
    """Validate the per-attempt timeout.

    Args:
        timeout: Maximum seconds to wait for the server. Must be > 0.

    Raises:
        ConfigurationError: If ``timeout`` is not strictly positive.
    """
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        msg = f"timeout must be > 0, got {timeout!r}"
        raise ConfigurationError(msg)
