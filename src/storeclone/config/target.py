"""Target store configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from .env import positive_float_env_var, require_env_vars
from .errors import ConfigurationError, InvalidStoreUrlError
from .http_resilience import DEFAULT_TIMEOUT_SECONDS, RateLimit, ResilienceConfig

if TYPE_CHECKING:
    from collections.abc import Mapping

BASE_URL_VAR = "STORECLONE_BASE_URL"
CONSUMER_KEY_VAR = "STORECLONE_CONSUMER_KEY"
CONSUMER_SECRET_VAR = "STORECLONE_CONSUMER_SECRET"
RATE_LIMIT_VAR = "STORECLONE_MAX_REQUESTS_PER_SECOND"
TIMEOUT_VAR = "STORECLONE_TIMEOUT_SECONDS"


def clean_base_url(value: str) -> str:
    """Validate a store URL and strip trailing slashes."""

    candidate = value.strip()
    parts = urlsplit(candidate)
    if parts.scheme not in {"http", "https"} or not parts.netloc:
        raise InvalidStoreUrlError(value)
    return candidate.rstrip("/")


@dataclass(frozen=True, slots=True)
class TargetStoreConfig:
    """Credentials and transport settings for the store receiving the snapshot."""

    base_url: str
    consumer_key: str
    consumer_secret: str
    resilience: ResilienceConfig = field(default_factory=lambda: ResilienceConfig(name="target"))

    def __post_init__(self) -> None:
        if not self.base_url.strip():
            raise ConfigurationError("Base URL is required.")
        if not self.consumer_key.strip():
            raise ConfigurationError("Consumer key is required.")
        if not self.consumer_secret.strip():
            raise ConfigurationError("Consumer secret is required.")
        object.__setattr__(self, "base_url", clean_base_url(self.base_url))
        object.__setattr__(self, "consumer_key", self.consumer_key.strip())
        object.__setattr__(self, "consumer_secret", self.consumer_secret.strip())


def _resilience_from_env(base_url: str, environ: Mapping[str, str] | None) -> ResilienceConfig:
    rate = positive_float_env_var(RATE_LIMIT_VAR, environ)
    timeout = positive_float_env_var(TIMEOUT_VAR, environ)
    return ResilienceConfig(
        name="target",
        base_url=base_url,
        timeout_seconds=timeout or DEFAULT_TIMEOUT_SECONDS,
        ratelimit=RateLimit.per_second(rate) if rate is not None else None,
    )


def get_target_config(
    *,
    resilience: ResilienceConfig | None = None,
    environ: Mapping[str, str] | None = None,
) -> TargetStoreConfig:
    values = require_env_vars((BASE_URL_VAR, CONSUMER_KEY_VAR, CONSUMER_SECRET_VAR), environ)
    base_url = clean_base_url(values[BASE_URL_VAR])
    return TargetStoreConfig(
        base_url=base_url,
        consumer_key=values[CONSUMER_KEY_VAR],
        consumer_secret=values[CONSUMER_SECRET_VAR],
        resilience=resilience or _resilience_from_env(base_url, environ),
    )
