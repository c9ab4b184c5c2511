r"""Logger capability consumed by the call layer.

Any object exposing ``info(message)`` and ``error(message)`` can be
injected in the client configuration. A standard library
``logging.Logger`` satisfies the protocol and is used by default.
"""

from __future__ import annotations

__all__ = ["DEFAULT_LOGGER_NAME", "Logger", "get_default_logger"]

import logging
from typing import Protocol, runtime_checkable

DEFAULT_LOGGER_NAME = "blnkclient"


@runtime_checkable
class Logger(Protocol):
    """Minimal logging capability used to report retries and decode
    failures."""

    def info(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


def get_default_logger() -> logging.Logger:
    """Return the logger used when none is configured.

    Returns:
        The ``blnkclient`` standard library logger.

    Example:
        ```pycon
        >>> from blnkclient.logger import get_default_logger
        >>> get_default_logger().name
        'blnkclient'

        ```
    """
    return logging.getLogger(DEFAULT_LOGGER_NAME)
