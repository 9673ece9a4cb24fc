"""Ports the reconcile engine depends on."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping


@runtime_checkable
class HttpClient(Protocol):
    """Issues one request and returns the parsed JSON body.

    Implementations raise ``RemoteAPIError`` for non-success statuses, including
    the response body text, and ``RemoteRequestError`` when the request could not
    be sent at all.
    """

    async def request(
        self,
        url: str,
        method: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: object | None = None,
    ) -> object:
        ...


__all__ = ["HttpClient"]
