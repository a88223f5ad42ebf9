"""Public interface for reading captured snapshots."""

from __future__ import annotations

from .loader import SnapshotLoadError, discover_bundles, load_snapshot
from .translator import split_image_paths

__all__ = [
    "SnapshotLoadError",
    "discover_bundles",
    "load_snapshot",
    "split_image_paths",
]
