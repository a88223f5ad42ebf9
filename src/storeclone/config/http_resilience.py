"""Retry, pacing and timeout settings for calls to the target store."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

import httpx

from storeclone import __version__

DEFAULT_USER_AGENT = f"storeclone/{__version__}"
DEFAULT_TIMEOUT_SECONDS = 60.0

# Rate limiting and maintenance mode. 400/409 are create conflicts and belong
# to the reconcilers.
RETRYABLE_STATUSES = frozenset({429, 503})
RETRYABLE_METHODS = frozenset({"GET", "POST", "PUT"})


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    total: int = 3
    backoff_factor: float = 1.0
    max_backoff_wait: float = 60.0
    backoff_jitter: float = 1.0
    respect_retry_after_header: bool = True
    allowed_methods: frozenset[str] = RETRYABLE_METHODS
    status_forcelist: frozenset[int] = RETRYABLE_STATUSES
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float

    @classmethod
    def per_second(cls, requests_per_second: float) -> RateLimit:
        """Express a requests-per-second ceiling as a whole number of calls per window.

        Rates below one widen the window instead, so ``0.5`` means one call every
        two seconds.
        """
        if requests_per_second <= 0:
            raise ValueError("requests_per_second must be positive")
        if requests_per_second >= 1:
            return cls(max_calls=round(requests_per_second), per_seconds=1.0)
        return cls(max_calls=1, per_seconds=1.0 / requests_per_second)


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    default_headers: Mapping[str, str] | None = field(
        default_factory=lambda: {"User-Agent": DEFAULT_USER_AGENT}
    )
