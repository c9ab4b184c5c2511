r"""Unit tests for package initialization and metadata."""

from __future__ import annotations

import blnkclient


def test_package_version_is_string() -> None:
    """Test that __version__ is a non-empty string."""
    assert isinstance(blnkclient.__version__, str)
    assert len(blnkclient.__version__) > 0


def test_all_exports_defined() -> None:
    """Test that all items in __all__ are defined in the module."""
    for name in blnkclient.__all__:
        assert hasattr(blnkclient, name), f"{name} is in __all__ but not defined in module"


def test_exception_classes_are_exceptions() -> None:
    """Test that the public error classes are exceptions."""
    for name in (
        "BlnkError",
        "ConfigurationError",
        "DecodeError",
        "RequestBuildError",
        "RetryExhaustedError",
    ):
        assert issubclass(getattr(blnkclient, name), Exception)
