r"""Unit tests for RequestDescriptor and HttpMethod."""

from __future__ import annotations

import dataclasses

import pytest

from blnkclient.descriptor import HttpMethod, RequestDescriptor
from blnkclient.exceptions import RequestBuildError


@pytest.mark.parametrize(
    ("method", "expected"),
    [
        ("GET", HttpMethod.GET),
        ("post", HttpMethod.POST),
        ("Put", HttpMethod.PUT),
        (HttpMethod.DELETE, HttpMethod.DELETE),
    ],
)
def test_http_method_parse(method: str | HttpMethod, expected: HttpMethod) -> None:
    """Test case-insensitive parsing of HTTP methods."""
    assert HttpMethod.parse(method) is expected


@pytest.mark.parametrize("method", ["PATCH", "HEAD", ""])
def test_http_method_parse_unsupported(method: str) -> None:
    """Test that an unsupported method raises RequestBuildError."""
    with pytest.raises(RequestBuildError, match=r"unsupported HTTP method") as exc_info:
        HttpMethod.parse(method)
    assert exc_info.value.method == method


def test_request_descriptor_defaults() -> None:
    """Test RequestDescriptor default values."""
    descriptor = RequestDescriptor("ledgers")
    assert descriptor.endpoint == "ledgers"
    assert descriptor.method is HttpMethod.GET
    assert descriptor.payload is None


def test_request_descriptor_normalises_method() -> None:
    """Test that the method of a descriptor is normalised."""
    descriptor = RequestDescriptor("transactions", "post", {"amount": 10})
    assert descriptor.method is HttpMethod.POST
    assert descriptor.payload == {"amount": 10}


def test_request_descriptor_is_immutable() -> None:
    """Test that RequestDescriptor cannot be modified."""
    descriptor = RequestDescriptor("ledgers")
    with pytest.raises(dataclasses.FrozenInstanceError):
        descriptor.endpoint = "balances"  # type: ignore[misc]


def test_request_descriptor_unsupported_method() -> None:
    """Test that a descriptor with an unsupported method cannot be built."""
    with pytest.raises(RequestBuildError):
        RequestDescriptor("ledgers", "PATCH")
