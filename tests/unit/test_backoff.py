r"""Unit tests for the backoff strategies."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from blnkclient.backoff import (
    DEFAULT_RETRY_DELAY,
    BaseBackoffStrategy,
    ConstantBackoff,
    ExponentialBackoff,
    JitterBackoff,
)

#####################################
#     Tests for ConstantBackoff     #
#####################################


def test_constant_backoff_default_is_two_seconds() -> None:
    """Test that the default constant wait is two seconds for every attempt."""
    backoff = ConstantBackoff()
    assert backoff.delay == DEFAULT_RETRY_DELAY == 2.0
    assert backoff.calculate(0) == 2.0
    assert backoff.calculate(5) == 2.0


def test_constant_backoff_zero_delay() -> None:
    """Test constant backoff with a zero delay."""
    assert ConstantBackoff(delay=0.0).calculate(3) == 0.0


def test_constant_backoff_invalid_delay() -> None:
    """Test that a negative delay raises ValueError."""
    with pytest.raises(ValueError, match=r"delay must be non-negative"):
        ConstantBackoff(delay=-1.0)


def test_constant_backoff_repr() -> None:
    """Test the string representation of ConstantBackoff."""
    assert repr(ConstantBackoff(delay=1.5)) == "ConstantBackoff(delay=1.5)"


########################################
#     Tests for ExponentialBackoff     #
########################################


def test_exponential_backoff_doubles() -> None:
    """Test that the exponential wait doubles on each attempt."""
    backoff = ExponentialBackoff(base_delay=0.5)
    assert [backoff.calculate(i) for i in range(4)] == [0.5, 1.0, 2.0, 4.0]


def test_exponential_backoff_max_delay() -> None:
    """Test exponential backoff with max_delay cap."""
    backoff = ExponentialBackoff(base_delay=1.0, max_delay=5.0)
    assert backoff.calculate(2) == 4.0
    assert backoff.calculate(10) == 5.0


def test_exponential_backoff_invalid_base_delay() -> None:
    """Test that negative base_delay raises ValueError."""
    with pytest.raises(ValueError, match=r"base_delay must be non-negative"):
        ExponentialBackoff(base_delay=-0.1)


@pytest.mark.parametrize("max_delay", [0.0, -1.0])
def test_exponential_backoff_invalid_max_delay(max_delay: float) -> None:
    """Test that non-positive max_delay raises ValueError."""
    with pytest.raises(ValueError, match=r"max_delay must be positive"):
        ExponentialBackoff(max_delay=max_delay)


def test_exponential_backoff_multiplier() -> None:
    """Test exponential backoff with a custom growth factor."""
    backoff = ExponentialBackoff(base_delay=1.0, multiplier=3.0, max_delay=20.0)
    assert [backoff.calculate(i) for i in range(4)] == [1.0, 3.0, 9.0, 20.0]


@pytest.mark.parametrize("multiplier", [0.0, 0.5])
def test_exponential_backoff_invalid_multiplier(multiplier: float) -> None:
    """Test that a multiplier below 1 raises ValueError."""
    with pytest.raises(ValueError, match=r"multiplier must be >= 1"):
        ExponentialBackoff(multiplier=multiplier)


def test_exponential_backoff_repr() -> None:
    """Test the string representation of ExponentialBackoff."""
    assert repr(ExponentialBackoff(base_delay=0.5, max_delay=8.0)) == (
        "ExponentialBackoff(base_delay=0.5, multiplier=2.0, max_delay=8.0)"
    )


###################################
#     Tests for JitterBackoff     #
###################################


def test_jitter_backoff_adds_jitter() -> None:
    """Test that jitter is added on top of the wrapped strategy."""
    backoff = JitterBackoff(ConstantBackoff(delay=2.0), jitter_factor=0.5)
    with patch("random.uniform", return_value=0.25) as mock_uniform:
        assert backoff.calculate(0) == 2.5
    mock_uniform.assert_called_once_with(0, 0.5)


def test_jitter_backoff_stays_in_bounds() -> None:
    """Test that the jittered wait stays within the jitter factor."""
    backoff = JitterBackoff(ExponentialBackoff(base_delay=1.0), jitter_factor=0.1)
    for attempt in range(5):
        base = 2.0**attempt
        assert base <= backoff.calculate(attempt) <= base * 1.1


def test_jitter_backoff_zero_factor() -> None:
    """Test that zero jitter factor results in no jitter."""
    backoff = JitterBackoff(ConstantBackoff(delay=1.0), jitter_factor=0.0)
    assert backoff.calculate(0) == 1.0


def test_jitter_backoff_invalid_factor() -> None:
    """Test that a negative jitter factor raises ValueError."""
    with pytest.raises(ValueError, match=r"jitter_factor must be >= 0"):
        JitterBackoff(ConstantBackoff(), jitter_factor=-0.1)


def test_custom_backoff_strategy() -> None:
    """Test creating a custom backoff strategy."""
    class SteppedBackoff(BaseBackoffStrategy):
        def calculate(self, attempt: int) -> float:
            return float(attempt)

    assert SteppedBackoff().calculate(3) == 3.0


def test_base_backoff_strategy_is_abstract() -> None:
    """Test that BaseBackoffStrategy cannot be instantiated directly."""
    with pytest.raises(TypeError):
        BaseBackoffStrategy()  # type: ignore[abstract]
