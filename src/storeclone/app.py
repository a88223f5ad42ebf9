"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from storeclone.adapters.woocommerce import (
    WooCommerceStore,
    default_client_factory,
    target_resilience,
)
from storeclone.config import get_target_config
from storeclone.domain.model import BundleScope
from storeclone.domain.replication import (
    BundleUploader,
    ReplicationContext,
    ReplicationEngine,
    log_progress,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from storeclone.adapters.http_resilience import ResilienceConfig, ResilientClient
    from storeclone.config import TargetStoreConfig
    from storeclone.domain.model import ExtensionBundle, SourceCatalogSnapshot
    from storeclone.domain.replication import CancelSignal, ProgressSink, ReplicationReport

type ClientFactory = Callable[[ResilienceConfig], ResilientClient]

log = getLogger(__name__)


def replicate_snapshot(
    snapshot: SourceCatalogSnapshot,
    *,
    config: TargetStoreConfig | None = None,
    progress: ProgressSink | None = None,
    cancel_event: CancelSignal | None = None,
    client_factory: ClientFactory = default_client_factory,
) -> ReplicationReport:
    """Replicate ``snapshot`` into the configured WooCommerce store."""

    effective_config = config or get_target_config()
    log.info(
        "Starting replication into %s: products=%s, customers=%s, coupons=%s, orders=%s",
        effective_config.base_url,
        len(snapshot.products),
        len(snapshot.customers),
        len(snapshot.coupons),
        len(snapshot.orders),
    )
    report = asyncio.run(
        _replicate_async(
            snapshot,
            config=effective_config,
            progress=progress or log_progress,
            cancel_event=cancel_event,
            client_factory=client_factory,
        )
    )
    log.info(f"Finished replication: {report.summary()}")
    return report


async def _replicate_async(
    snapshot: SourceCatalogSnapshot,
    *,
    config: TargetStoreConfig,
    progress: ProgressSink,
    cancel_event: CancelSignal | None,
    client_factory: ClientFactory,
) -> ReplicationReport:
    async with client_factory(target_resilience(config)) as client:
        store = WooCommerceStore(config=config, client=client)
        engine = ReplicationEngine(store=store, progress=progress, cancel_event=cancel_event)
        return await engine.run(snapshot)


def upload_bundles(
    bundles: Iterable[ExtensionBundle],
    *,
    scope: BundleScope,
    config: TargetStoreConfig | None = None,
    progress: ProgressSink | None = None,
    cancel_event: CancelSignal | None = None,
    client_factory: ClientFactory = default_client_factory,
) -> ReplicationReport:
    """Upload plugin or theme bundles to the store's install endpoint."""

    effective_config = config or get_target_config()
    pending = list(bundles)
    log.info("Uploading %d %s bundles to %s", len(pending), scope, effective_config.base_url)
    report = asyncio.run(
        _upload_bundles_async(
            pending,
            scope=scope,
            config=effective_config,
            progress=progress or log_progress,
            cancel_event=cancel_event,
            client_factory=client_factory,
        )
    )
    log.info(f"Finished {scope} upload: {report.summary()}")
    return report


async def _upload_bundles_async(
    bundles: list[ExtensionBundle],
    *,
    scope: BundleScope,
    config: TargetStoreConfig,
    progress: ProgressSink,
    cancel_event: CancelSignal | None,
    client_factory: ClientFactory,
) -> ReplicationReport:
    async with client_factory(target_resilience(config)) as client:
        store = WooCommerceStore(config=config, client=client)
        context = ReplicationContext(store=store, progress=progress, cancel_event=cancel_event)
        await BundleUploader(context, scope).upload_all(bundles)
        return context.report


__all__ = ["BundleScope", "replicate_snapshot", "upload_bundles"]
