"""Retrying, paced HTTP client used by the store adapter."""

from __future__ import annotations

import time
from contextlib import AbstractAsyncContextManager, nullcontext
from logging import getLogger
from typing import TYPE_CHECKING, TypedDict, Unpack

import httpx
from aiolimiter import AsyncLimiter
from httpx_retries import Retry, RetryTransport

from storeclone.config.http_resilience import RateLimit, ResilienceConfig, RetryPolicy

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._types import (
        AuthTypes,
        HeaderTypes,
        QueryParamTypes,
        RequestData,
        RequestFiles,
    )

log = getLogger(__name__)

__all__ = [
    "RateLimit",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
    "build_retry",
]


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        backoff_jitter=policy.backoff_jitter,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=tuple(policy.allowed_methods),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
    )


class StoreRequestOptions(TypedDict, total=False):
    params: QueryParamTypes | None
    json: object
    data: RequestData | None
    files: RequestFiles | None
    headers: HeaderTypes | None
    auth: AuthTypes | None


def _build_client(config: ResilienceConfig) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=config.base_url or "",
        headers=dict(config.default_headers or {}),
        timeout=config.timeout_seconds,
        transport=RetryTransport(retry=build_retry(config.retry)),
    )


class ResilientClient:
    """``httpx.AsyncClient`` with transport retries and an optional request pace.

    Retries cover throttling and transport failures only; any other status is
    handed back to the caller. When ``config.ratelimit`` is set every request,
    retried or not, first takes a slot from a shared ``AsyncLimiter``.
    """

    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        self._limiter = (
            AsyncLimiter(config.ratelimit.max_calls, config.ratelimit.per_seconds)
            if config.ratelimit is not None
            else None
        )
        self._client = _build_client(config)

    async def __aenter__(self) -> ResilientClient:
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

    def _pace(self) -> AbstractAsyncContextManager[object]:
        return self._limiter if self._limiter is not None else nullcontext()

    async def request(
        self,
        method: str,
        path: str,
        **options: Unpack[StoreRequestOptions],
    ) -> httpx.Response:
        async with self._pace():
            started = time.perf_counter()
            response = await self._client.request(method, path, **options)
        # path only; the query string may hold credentials
        log.debug(
            "%s %s -> %d (%.0f ms)",
            method,
            response.request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response
