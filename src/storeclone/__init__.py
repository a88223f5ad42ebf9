"""Replicate captured storefront snapshots into a WooCommerce store."""

from __future__ import annotations

from importlib import metadata

try:
    __version__ = metadata.version("storeclone")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+local"
