"""Errors raised while assembling the target store configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ConfigurationError(RuntimeError):
    """A configuration value is present but unusable."""


class MissingConfigurationError(ConfigurationError):
    def __init__(self, names: Iterable[str]) -> None:
        self.names = tuple(sorted(names))
        super().__init__(f"Missing configuration for: {', '.join(self.names)}")


class InvalidStoreUrlError(ConfigurationError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid store URL: {value!r} (expected http(s)://host[/path])")
