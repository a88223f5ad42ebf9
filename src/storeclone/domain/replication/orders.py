"""Create orders with product, customer and coupon references remapped.

Orders are never updated: a create rejected as a conflict is resolved by
looking the order up and leaving it alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from storeclone.domain.ports import TargetStoreError

from .payloads import (
    AddressPayload,
    CouponLinePayload,
    FeeLinePayload,
    LineItemPayload,
    OrderPayload,
    ShippingLinePayload,
    TaxLinePayload,
    meta_payloads,
)
from .report import Outcome, ReportKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from storeclone.domain.model import Order, OrderLineItem

    from .context import ReplicationContext
    from .identity import IdentityMap, ReplicationIdentity

PAID_STATUSES = frozenset({"completed", "processing", "on-hold"})


def is_paid(order: Order) -> bool:
    for paid_at in (order.date_paid, order.date_paid_gmt):
        if paid_at and paid_at.strip():
            return True
    return (order.status or "").strip().lower() in PAID_STATUSES


def build_line_items(
    items: Iterable[OrderLineItem], products: IdentityMap[int]
) -> list[LineItemPayload]:
    """Line item payloads with product and variation ids remapped.

    Items whose product has no target counterpart are kept without the id.
    Items that carry nothing at all are dropped.
    """

    result: list[LineItemPayload] = []
    for item in items:
        line = LineItemPayload(
            name=item.name,
            product_id=products.get(item.product_id),
            variation_id=products.get(item.variation_id),
            quantity=item.quantity if item.quantity > 0 else None,
            subtotal=item.subtotal,
            subtotal_tax=item.subtotal_tax,
            total=item.total,
            total_tax=item.total_tax,
            price=item.price,
            sku=item.sku,
            meta_data=meta_payloads(item.meta_data),
        )
        if line.to_json():
            result.append(line)
    return result


def has_mapped_product(line_items: Iterable[LineItemPayload]) -> bool:
    return any(line.product_id is not None or line.variation_id is not None for line in line_items)


def build_order_payload(
    order: Order, line_items: list[LineItemPayload], identity: ReplicationIdentity
) -> OrderPayload:
    return OrderPayload(
        status=order.status,
        currency=order.currency,
        customer_id=identity.customers.get(order.customer_id),
        billing=AddressPayload.from_address(order.billing),
        shipping=AddressPayload.from_address(order.shipping),
        payment_method=order.payment_method,
        payment_method_title=order.payment_method_title,
        transaction_id=order.transaction_id,
        customer_note=order.customer_note,
        date_created=order.date_created,
        date_created_gmt=order.date_created_gmt,
        date_paid=order.date_paid,
        date_paid_gmt=order.date_paid_gmt,
        date_completed=order.date_completed,
        date_completed_gmt=order.date_completed_gmt,
        discount_total=order.discount_total,
        discount_tax=order.discount_tax,
        shipping_total=order.shipping_total,
        shipping_tax=order.shipping_tax,
        cart_tax=order.cart_tax,
        total=order.total,
        total_tax=order.total_tax,
        set_paid=is_paid(order),
        line_items=line_items,
        coupon_lines=[
            CouponLinePayload(
                code=line.code,
                discount=line.discount,
                discount_tax=line.discount_tax,
                coupon_id=identity.coupon_id_for_code(line.code),
                meta_data=meta_payloads(line.meta_data),
            )
            for line in order.coupon_lines
        ],
        shipping_lines=[
            ShippingLinePayload(
                method_title=line.method_title,
                method_id=line.method_id,
                total=line.total,
                total_tax=line.total_tax,
                meta_data=meta_payloads(line.meta_data),
            )
            for line in order.shipping_lines
        ],
        fee_lines=[
            FeeLinePayload(
                name=line.name,
                tax_class=line.tax_class,
                tax_status=line.tax_status,
                total=line.total,
                total_tax=line.total_tax,
                meta_data=meta_payloads(line.meta_data),
            )
            for line in order.fee_lines
        ],
        tax_lines=[
            TaxLinePayload(
                rate_code=line.rate_code,
                rate_id=line.rate_id,
                label=line.label,
                compound=line.compound,
                tax_total=line.tax_total,
                shipping_tax_total=line.shipping_tax_total,
                meta_data=meta_payloads(line.meta_data),
            )
            for line in order.tax_lines
        ],
        meta_data=meta_payloads(order.meta_data),
    )


@dataclass(slots=True)
class OrderReconciler:
    context: ReplicationContext

    async def reconcile_all(self, orders: Iterable[Order]) -> None:
        for order in orders:
            self.context.checkpoint(ReportKind.ORDER.value)
            await self.reconcile(order)

    async def reconcile(self, order: Order) -> int | None:
        """Create ``order``; returns ``None`` when it was skipped."""

        line_items = build_line_items(order.line_items, self.context.identity.products)
        if not has_mapped_product(line_items):
            self.context.progress(
                f"Skipping order '{order.label}': no line items could be mapped."
            )
            self.context.report.record(ReportKind.ORDER, Outcome.SKIPPED)
            return None

        payload = build_order_payload(order, line_items, self.context.identity)
        self.context.progress(f"Creating order '{order.label}'.")
        try:
            target_id = await self.context.store.create_order(payload.to_json())
        except TargetStoreError as exc:
            if not exc.is_conflict:
                raise
            self.context.progress(
                f"Order '{order.label}' may already exist ({exc.status_code}). Retrying fetch."
            )
            existing = await self.find_existing(order)
            if existing is None:
                raise
            self.context.progress(
                f"Order '{order.label}' already present as ID {existing}. Skipping creation."
            )
            self.context.report.record(ReportKind.ORDER, Outcome.SKIPPED)
            return existing
        self.context.report.record(ReportKind.ORDER, Outcome.CREATED)
        return target_id

    async def find_existing(self, order: Order) -> int | None:
        """Search by order number, then by order key; the returned field must match."""

        store = self.context.store
        if order.number and order.number.strip():
            wanted = order.number.casefold()
            for candidate in await store.search_orders(order.number):
                if candidate.number is not None and candidate.number.casefold() == wanted:
                    return candidate.id
        if order.order_key and order.order_key.strip():
            wanted = order.order_key.casefold()
            for candidate in await store.search_orders(order.order_key):
                if candidate.order_key is not None and candidate.order_key.casefold() == wanted:
                    return candidate.id
        return None
