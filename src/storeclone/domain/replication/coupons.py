"""Create or update coupons with product and category references remapped."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from storeclone.domain.ports import TargetStoreError

from .payloads import CouponPayload, meta_payloads
from .report import Outcome, ReportKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from storeclone.domain.model import Coupon

    from .context import ReplicationContext
    from .identity import IdentityMap


def map_ids(source_ids: Iterable[int], identity: IdentityMap[int]) -> list[int]:
    """Target ids for ``source_ids``; ids without a counterpart are dropped."""

    mapped = (identity.get(source) for source in source_ids)
    return [target for target in mapped if target is not None]


def build_coupon_payload(
    coupon: Coupon, products: IdentityMap[int], categories: IdentityMap[int]
) -> CouponPayload:
    return CouponPayload(
        code=coupon.code,
        amount=coupon.amount,
        discount_type=coupon.discount_type,
        description=coupon.description,
        individual_use=coupon.individual_use,
        usage_limit=coupon.usage_limit,
        usage_limit_per_user=coupon.usage_limit_per_user,
        limit_usage_to_x_items=coupon.limit_usage_to_x_items,
        free_shipping=coupon.free_shipping,
        exclude_sale_items=coupon.exclude_sale_items,
        minimum_amount=coupon.minimum_amount,
        maximum_amount=coupon.maximum_amount,
        date_expires=coupon.date_expires,
        date_expires_gmt=coupon.date_expires_gmt,
        product_ids=map_ids(coupon.product_ids, products),
        excluded_product_ids=map_ids(coupon.excluded_product_ids, products),
        product_categories=map_ids(coupon.product_categories, categories),
        excluded_product_categories=map_ids(coupon.excluded_product_categories, categories),
        email_restrictions=list(coupon.email_restrictions),
        meta_data=meta_payloads(coupon.meta_data),
    )


@dataclass(slots=True)
class CouponReconciler:
    context: ReplicationContext

    async def reconcile_all(self, coupons: Iterable[Coupon]) -> None:
        for coupon in coupons:
            self.context.checkpoint(ReportKind.COUPON.value)
            await self.reconcile(coupon)

    async def reconcile(self, coupon: Coupon) -> int | None:
        identity = self.context.identity
        payload = build_coupon_payload(coupon, identity.products, identity.categories).to_json()
        if not payload:
            self.context.progress(f"Skipping coupon '{coupon.label}': no importable fields.")
            self.context.report.record(ReportKind.COUPON, Outcome.SKIPPED)
            return None

        store = self.context.store
        existing = await self.find_existing(coupon)
        if existing is not None:
            self.context.progress(f"Updating coupon '{coupon.label}' (ID {existing}).")
            target_id = await store.update_coupon(existing, payload)
            self._remember(coupon, target_id, Outcome.UPDATED)
            return target_id

        self.context.progress(f"Creating coupon '{coupon.label}'.")
        try:
            target_id = await store.create_coupon(payload)
        except TargetStoreError as exc:
            if not exc.is_conflict:
                raise
            self.context.progress(
                f"Coupon '{coupon.label}' may already exist ({exc.status_code}). Retrying fetch."
            )
            existing = await self.find_existing(coupon)
            if existing is None:
                raise
            await store.update_coupon(existing, payload)
            self._remember(coupon, existing, Outcome.UPDATED)
            return existing
        self._remember(coupon, target_id, Outcome.CREATED)
        return target_id

    async def find_existing(self, coupon: Coupon) -> int | None:
        if not coupon.code or not coupon.code.strip():
            return None
        return await self.context.store.find_coupon_by_code(coupon.code)

    def _remember(self, coupon: Coupon, target_id: int, outcome: Outcome) -> None:
        identity = self.context.identity
        identity.coupons.record(coupon.id, target_id)
        identity.record_coupon_code(coupon.code, target_id)
        self.context.report.record(ReportKind.COUPON, outcome)
