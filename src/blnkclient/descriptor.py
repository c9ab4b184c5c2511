r"""Logical description of one API call, prior to transport encoding."""

from __future__ import annotations

__all__ = ["HttpMethod", "RequestDescriptor"]

from dataclasses import dataclass
from enum import Enum
from typing import Any

from blnkclient.exceptions import RequestBuildError


class HttpMethod(str, Enum):
    """HTTP methods supported by the Blnk API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, method: str | HttpMethod) -> HttpMethod:
        """Return the member matching ``method`` (case-insensitive).

        Args:
            method: A method name or member.

        Returns:
            The matching member.

        Raises:
            RequestBuildError: If the method is not supported.

        Example:
            ```pycon
            >>> from blnkclient.descriptor import HttpMethod
            >>> HttpMethod.parse("post")
            <HttpMethod.POST: 'POST'>

            ```
        """
        if isinstance(method, cls):
            return method
        try:
            return cls(str(method).upper())
        except ValueError as exc:
            msg = f"unsupported HTTP method {method!r}"
            raise RequestBuildError(msg, method=str(method)) from exc


@dataclass(frozen=True)
class RequestDescriptor:
    """Immutable description of one logical call.

    Args:
        endpoint: Path relative to the client's base address
            (e.g. ``"transactions"``).
        method: The HTTP method. Strings are normalised to
            ``HttpMethod``.
        payload: Optional structured value: a dataclass instance or a
            mapping. Sent as query parameters for GET requests and as a
            JSON body otherwise.

    Raises:
        RequestBuildError: If the method is not supported.

    Example:
        ```pycon
        >>> from blnkclient.descriptor import RequestDescriptor
        >>> descriptor = RequestDescriptor("ledgers", "get", {"limit": 10})
        >>> descriptor.method
        <HttpMethod.GET: 'GET'>

        ```
    """

    endpoint: str
    method: HttpMethod = HttpMethod.GET
    payload: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", HttpMethod.parse(self.method))
