"""Domain port definitions for adapters."""

from __future__ import annotations

from .target_store import (
    CONFLICT_STATUS_CODES,
    BundleUpload,
    JsonObject,
    RemoteCustomer,
    RemoteOrder,
    RemoteTerm,
    TargetStore,
    TargetStoreError,
)

__all__ = [
    "CONFLICT_STATUS_CODES",
    "BundleUpload",
    "JsonObject",
    "RemoteCustomer",
    "RemoteOrder",
    "RemoteTerm",
    "TargetStore",
    "TargetStoreError",
]
