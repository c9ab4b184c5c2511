r"""Backoff strategies for the wait between two attempts of a call.

The wait is a policy choice supplied through the client configuration.
The default is a flat ``DEFAULT_RETRY_DELAY`` wait.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_RETRY_DELAY",
    "BaseBackoffStrategy",
    "ConstantBackoff",
    "ExponentialBackoff",
    "JitterBackoff",
]

import random
from abc import ABC, abstractmethod

# Default flat wait in seconds between two attempts
DEFAULT_RETRY_DELAY = 2.0


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies."""

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the wait before the next attempt.

        Args:
            attempt: The retry number (0-indexed). ``attempt=0`` is the
                wait between the first and the second attempt.

        Returns:
            The wait in seconds.
        """


class ConstantBackoff(BaseBackoffStrategy):
    """Flat backoff: the same wait before every retried attempt.

    Args:
        delay: The wait in seconds. Defaults to
            ``DEFAULT_RETRY_DELAY``.

    Example:
        ```pycon
        >>> from blnkclient.backoff import ConstantBackoff
        >>> backoff = ConstantBackoff()
        >>> backoff.calculate(0)
        2.0
        >>> backoff.calculate(7)
        2.0

        ```
    """

    def __init__(self, delay: float = DEFAULT_RETRY_DELAY) -> None:
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)
        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        return self.delay


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff: ``base_delay * multiplier ** attempt``,
    optionally capped by ``max_delay``.

    Args:
        base_delay: The wait before the first retry, in seconds.
        multiplier: The growth factor between two consecutive waits.
            Must be >= 1.
        max_delay: Optional cap on any single wait, in seconds.

    Example:
        ```pycon
        >>> from blnkclient.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(base_delay=0.5, max_delay=3.0)
        >>> [backoff.calculate(i) for i in range(4)]
        [0.5, 1.0, 2.0, 3.0]
        >>> [ExponentialBackoff(base_delay=1.0, multiplier=3.0).calculate(i) for i in range(3)]
        [1.0, 3.0, 9.0]

        ```
    """

    def __init__(
        self, base_delay: float = 0.5, multiplier: float = 2.0, max_delay: float | None = None
    ) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if multiplier < 1:
            msg = f"multiplier must be >= 1, got {multiplier}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)
        self.base_delay = base_delay
        self.multiplier = multiplier
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(base_delay={self.base_delay}, "
            f"multiplier={self.multiplier}, max_delay={self.max_delay})"
        )

    def calculate(self, attempt: int) -> float:
        delay = self.base_delay * self.multiplier**attempt
        if self.max_delay is None:
            return delay
        return min(delay, self.max_delay)


class JitterBackoff(BaseBackoffStrategy):
    """Add random jitter on top of another strategy.

    The wait is ``base + uniform(0, jitter_factor) * base`` where
    ``base`` is the wrapped strategy's wait.

    Args:
        strategy: The wrapped backoff strategy.
        jitter_factor: Upper bound of the jitter, as a fraction of the
            base wait. Must be >= 0.

    Example:
        ```pycon
        >>> from blnkclient.backoff import ConstantBackoff, JitterBackoff
        >>> backoff = JitterBackoff(ConstantBackoff(delay=1.0), jitter_factor=0.1)
        >>> 1.0 <= backoff.calculate(0) <= 1.1
        True

        ```
    """

    def __init__(self, strategy: BaseBackoffStrategy, jitter_factor: float = 0.1) -> None:
        if jitter_factor < 0:
            msg = f"jitter_factor must be >= 0, got {jitter_factor}"
            raise ValueError(msg)
        self.strategy = strategy
        self.jitter_factor = jitter_factor

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(strategy={self.strategy!r}, "
            f"jitter_factor={self.jitter_factor})"
        )

    def calculate(self, attempt: int) -> float:
        delay = self.strategy.calculate(attempt)
        if self.jitter_factor > 0:
            delay += random.uniform(0, self.jitter_factor) * delay  # noqa: S311
        return delay
