"""Rate-limited JSON client for the WAF vendor API."""

from __future__ import annotations

from collections.abc import Mapping
from logging import getLogger
from typing import TYPE_CHECKING, TypedDict

import httpx
from aiolimiter import AsyncLimiter

from edgewaf.domain.errors import RemoteAPIError, RemoteRequestError

if TYPE_CHECKING:
    from types import TracebackType

    from edgewaf.config.http_client import HttpClientConfig

log = getLogger(__name__)


class AsyncClientOptions(TypedDict, total=False):
    timeout: float
    transport: httpx.AsyncBaseTransport


class ApiClient:
    """Sends JSON requests and maps failures onto the domain error types.

    Requests are never retried; the optional rate limit only delays them.
    """

    def __init__(
        self,
        config: HttpClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._limiter: AsyncLimiter | None = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit
            else None
        )

        client_kwargs: AsyncClientOptions = {"timeout": config.timeout_seconds}
        if transport is not None:
            client_kwargs["transport"] = transport

        self._client = httpx.AsyncClient(**client_kwargs)

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        url: str,
        method: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: object | None = None,
    ) -> object:
        try:
            response = await self._send(
                method,
                url,
                headers=dict(headers) if headers is not None else None,
                body=body,
            )
        except httpx.HTTPError as exc:
            raise RemoteRequestError(f"{method} {url} failed: {exc!r}") from exc

        if not response.is_success:
            raise RemoteAPIError(response.status_code, response.text)

        log.debug(f"{self.config.name}: {method} {url} -> {response.status_code}")
        return _parse_body(response)

    async def _send(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str] | None,
        body: object | None,
    ) -> httpx.Response:
        if self._limiter is None:
            return await self._client.request(method, url, headers=headers, json=body)
        async with self._limiter:
            return await self._client.request(method, url, headers=headers, json=body)


def _parse_body(response: httpx.Response) -> object:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def default_client_factory(config: HttpClientConfig) -> ApiClient:
    return ApiClient(config)
