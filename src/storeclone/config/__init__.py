"""Target store configuration and process-wide logging setup."""

from __future__ import annotations

from .env import optional_env_var, positive_float_env_var, require_env_vars
from .errors import ConfigurationError, InvalidStoreUrlError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .target import TargetStoreConfig, clean_base_url, get_target_config

__all__ = [
    "ConfigurationError",
    "InvalidStoreUrlError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "TargetStoreConfig",
    "clean_base_url",
    "configure_logging",
    "get_target_config",
    "optional_env_var",
    "positive_float_env_var",
    "require_env_vars",
]
