"""Replication of a captured storefront snapshot into a live target store.

Flow of one run:
1) apply store configuration
2) scan products for category, tag and attribute seeds
3) ensure those taxonomies exist on the target
4) upsert products, building the product identity map
5) upsert customers and coupons
6) create orders against the mapped products, customers and coupons
"""

from __future__ import annotations

from .bundles import BundleUploader, install_endpoints
from .context import ReplicationContext
from .engine import ReplicationEngine
from .errors import ReplicationCancelledError, ReplicationError
from .identity import IdentityMap, ReplicationIdentity
from .progress import PROGRESS_LOGGER_NAME, CancelSignal, ProgressSink, log_progress
from .report import KindCounts, Outcome, ReplicationReport, ReportKind

__all__ = [
    "PROGRESS_LOGGER_NAME",
    "BundleUploader",
    "CancelSignal",
    "IdentityMap",
    "KindCounts",
    "Outcome",
    "ProgressSink",
    "ReplicationCancelledError",
    "ReplicationContext",
    "ReplicationEngine",
    "ReplicationError",
    "ReplicationIdentity",
    "ReplicationReport",
    "ReportKind",
    "install_endpoints",
    "log_progress",
]
