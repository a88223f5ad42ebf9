"""Environment lookups used to build the target store configuration.

Every reader accepts an optional ``environ`` mapping so callers can resolve
values from something other than the process environment. Blank values
count as unset.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


def optional_env_var(name: str, environ: Mapping[str, str] | None = None) -> str | None:
    source = os.environ if environ is None else environ
    value = source.get(name, "").strip()
    return value or None


def require_env_vars(
    names: Sequence[str], environ: Mapping[str, str] | None = None
) -> dict[str, str]:
    """Resolve all ``names`` at once so one error lists every missing variable."""

    values = {
        name: value for name in names if (value := optional_env_var(name, environ)) is not None
    }
    if missing := [name for name in names if name not in values]:
        raise MissingConfigurationError(missing)
    return values


def positive_float_env_var(name: str, environ: Mapping[str, str] | None = None) -> float | None:
    raw = optional_env_var(name, environ)
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value
