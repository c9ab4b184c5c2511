r"""Configuration dataclass, defaults and option mutators for the
client.

A ``ClientConfig`` is built once per client and is read-only
afterwards, so it can be shared by concurrent calls without
synchronization. Options are plain functions that return an updated
copy of the configuration.
"""

from __future__ import annotations

__all__ = [
    "API_KEY_HEADER",
    "DEFAULT_RETRY_COUNT",
    "DEFAULT_RETRY_DELAY",
    "DEFAULT_TIMEOUT",
    "JSON_CONTENT_TYPE",
    "ClientConfig",
    "ClientOption",
    "new_client_config",
    "with_backoff_strategy",
    "with_logger",
    "with_retry_count",
    "with_timeout",
]

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any

from blnkclient.backoff import DEFAULT_RETRY_DELAY, BaseBackoffStrategy, ConstantBackoff
from blnkclient.exceptions import ConfigurationError
from blnkclient.logger import Logger, get_default_logger
from blnkclient.validation import validate_base_url, validate_retry_count, validate_timeout

# Default timeout in seconds for one attempt
DEFAULT_TIMEOUT = 10.0

# Default number of attempts per call (initial attempt included)
DEFAULT_RETRY_COUNT = 3

# Header carrying the API credential
API_KEY_HEADER = "X-Blnk-Key"

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class ClientConfig:
    """Configuration of a Blnk API client.

    Args:
        base_url: Absolute base address of the API. A trailing slash is
            appended if missing so relative endpoints resolve under it.
        api_key: Optional credential sent in the ``X-Blnk-Key`` header.
        retry_count: Total number of attempts per call. Must be >= 1.
        timeout: Per-attempt timeout in seconds. Must be > 0.
        logger: Logger capability used to report retries and decode
            failures.
        backoff_strategy: Strategy computing the wait between two
            attempts. Defaults to a flat 2-second wait.

    Raises:
        ConfigurationError: If any parameter fails validation.

    Example:
        ```pycon
        >>> from blnkclient.config import ClientConfig
        >>> config = ClientConfig(base_url="http://localhost:5001")
        >>> config.base_url
        'http://localhost:5001/'
        >>> config.retry_count
        3
        >>> config.timeout
        10.0

        ```
    """

    base_url: str
    api_key: str | None = None
    retry_count: int = DEFAULT_RETRY_COUNT
    timeout: float = DEFAULT_TIMEOUT
    logger: Logger = field(default_factory=get_default_logger, repr=False)
    backoff_strategy: BaseBackoffStrategy = field(default_factory=ConstantBackoff)

    def __post_init__(self) -> None:
        validate_base_url(self.base_url)
        validate_retry_count(self.retry_count)
        validate_timeout(self.timeout)
        if not isinstance(self.logger, Logger):
            msg = f"logger must provide info() and error(), got {type(self.logger).__name__}"
            raise ConfigurationError(msg)
        if not isinstance(self.backoff_strategy, BaseBackoffStrategy):
            msg = (
                "backoff_strategy must be a BaseBackoffStrategy, "
                f"got {type(self.backoff_strategy).__name__}"
            )
            raise ConfigurationError(msg)
        if not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", f"{self.base_url}/")

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with the given parameters overridden.

        ``None`` values are ignored so the current values are kept.

        Args:
            **overrides: Parameters to override.

        Returns:
            A new validated ``ClientConfig``.

        Example:
            ```pycon
            >>> from blnkclient.config import ClientConfig
            >>> config = ClientConfig(base_url="http://localhost:5001")
            >>> config.merge(retry_count=5).retry_count
            5
            >>> config.retry_count
            3

            ```
        """
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


ClientOption = Callable[[ClientConfig], ClientConfig]


def with_retry_count(retry_count: int) -> ClientOption:
    """Return an option overriding the number of attempts per call.

    Args:
        retry_count: Total number of attempts. Must be >= 1.

    Returns:
        The option.
    """

    def apply(config: ClientConfig) -> ClientConfig:
        return replace(config, retry_count=retry_count)

    return apply


def with_timeout(timeout: float) -> ClientOption:
    """Return an option overriding the per-attempt timeout (seconds)."""

    def apply(config: ClientConfig) -> ClientConfig:
        return replace(config, timeout=timeout)

    return apply


def with_logger(logger: Logger) -> ClientOption:
    """Return an option injecting a logger capability."""

    def apply(config: ClientConfig) -> ClientConfig:
        return replace(config, logger=logger)

    return apply


def with_backoff_strategy(backoff_strategy: BaseBackoffStrategy) -> ClientOption:
    """Return an option overriding the wait between attempts."""

    def apply(config: ClientConfig) -> ClientConfig:
        return replace(config, backoff_strategy=backoff_strategy)

    return apply


def new_client_config(
    base_url: str | None,
    api_key: str | None = None,
    *options: ClientOption,
) -> ClientConfig:
    """Build a client configuration and apply options in order.

    Args:
        base_url: Absolute base address of the API.
        api_key: Optional credential.
        *options: Option mutators, applied from first to last.

    Returns:
        The validated configuration.

    Raises:
        ConfigurationError: If the base address is missing or invalid,
            or if an option sets an invalid value.

    Example:
        ```pycon
        >>> from blnkclient.config import new_client_config, with_retry_count, with_timeout
        >>> config = new_client_config(
        ...     "http://localhost:5001", "secret", with_retry_count(5), with_timeout(2.5)
        ... )
        >>> config.retry_count, config.timeout, config.api_key
        (5, 2.5, 'secret')

        ```
    """
    validate_base_url(base_url)
    config = ClientConfig(base_url=str(base_url), api_key=api_key)
    for option in options:
        config = option(config)
    return config
