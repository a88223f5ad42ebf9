"""Orchestrates one replication run from snapshot to target store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .configuration import ConfigurationApplier
from .context import ReplicationContext
from .coupons import CouponReconciler
from .customers import CustomerReconciler
from .media import MediaUploader
from .orders import OrderReconciler
from .products import ProductReconciler, build_category_id_map
from .progress import log_progress
from .report import Outcome, ReportKind
from .seeds import collect_attribute_seeds, collect_category_seeds, collect_tag_seeds
from .taxonomy import TaxonomyReconciler, TaxonomyResource

if TYPE_CHECKING:
    from storeclone.domain.model import SourceCatalogSnapshot
    from storeclone.domain.ports import TargetStore

    from .progress import CancelSignal, ProgressSink
    from .report import ReplicationReport

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ReplicationEngine:
    """Replicate a snapshot into ``store``.

    Entity kinds are processed strictly in dependency order: configuration,
    taxonomies, products, customers, coupons, orders. Every call is awaited
    before the next one starts.
    """

    store: TargetStore
    progress: ProgressSink = log_progress
    cancel_event: CancelSignal | None = None

    async def run(self, snapshot: SourceCatalogSnapshot) -> ReplicationReport:
        context = ReplicationContext(
            store=self.store, progress=self.progress, cancel_event=self.cancel_event
        )
        report = context.report
        if snapshot.is_empty:
            context.progress("No artifacts to provision.")
            report.empty = True
            return report

        if snapshot.configuration is not None and not snapshot.configuration.is_empty:
            context.checkpoint("configuration")
            await ConfigurationApplier(context).apply(snapshot.configuration)

        products = snapshot.products
        if products:
            context.progress(f"Preparing taxonomies for {len(products)} products…")
            category_seeds = collect_category_seeds(products)
            tag_seeds = collect_tag_seeds(products)
            attribute_seeds = collect_attribute_seeds(products)
            log.debug(
                "Collected %d category, %d tag and %d attribute seeds",
                len(category_seeds),
                len(tag_seeds),
                len(attribute_seeds),
            )

            taxonomy = TaxonomyReconciler(context)
            await taxonomy.ensure_all(TaxonomyResource.CATEGORIES, category_seeds)
            await taxonomy.ensure_all(TaxonomyResource.TAGS, tag_seeds)
            await taxonomy.ensure_attributes(attribute_seeds)

            context.progress("Provisioning products…")
            media = MediaUploader(context)
            await ProductReconciler(context, media).reconcile_all(products)
            context.identity.categories = build_category_id_map(
                products, context.identity.taxonomies
            )

        if snapshot.customers:
            await CustomerReconciler(context).reconcile_all(snapshot.customers)
        if snapshot.coupons:
            await CouponReconciler(context).reconcile_all(snapshot.coupons)
        if snapshot.orders:
            await OrderReconciler(context).reconcile_all(snapshot.orders)

        if snapshot.subscriptions:
            count = len(snapshot.subscriptions)
            context.progress(f"Skipping {count} subscriptions (provisioning not implemented).")
            report.record(ReportKind.SUBSCRIPTION, Outcome.SKIPPED, count)

        report.identity_sizes = context.identity.sizes()
        context.progress("Provisioning complete.")
        return report
