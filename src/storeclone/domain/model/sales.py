"""Coupons, orders and subscriptions captured from the source storefront."""

from __future__ import annotations

from dataclasses import dataclass, field

from storeclone.domain.model.primitives import Address, MetaEntry, SourceId  # noqa: TC001


@dataclass(slots=True, kw_only=True)
class Coupon:
    id: SourceId = 0
    code: str | None = None
    amount: str | None = None
    discount_type: str | None = None
    description: str | None = None
    individual_use: bool | None = None
    usage_limit: int | None = None
    usage_limit_per_user: int | None = None
    limit_usage_to_x_items: int | None = None
    free_shipping: bool | None = None
    exclude_sale_items: bool | None = None
    minimum_amount: str | None = None
    maximum_amount: str | None = None
    date_expires: str | None = None
    date_expires_gmt: str | None = None
    product_ids: list[SourceId] = field(default_factory=list[int])
    excluded_product_ids: list[SourceId] = field(default_factory=list[int])
    product_categories: list[SourceId] = field(default_factory=list[int])
    excluded_product_categories: list[SourceId] = field(default_factory=list[int])
    email_restrictions: list[str] = field(default_factory=list[str])
    meta_data: list[MetaEntry] = field(default_factory=list["MetaEntry"])

    @property
    def label(self) -> str:
        if self.code and self.code.strip():
            return self.code
        return str(self.id) if self.id > 0 else "coupon"


@dataclass(slots=True, kw_only=True)
class OrderLineItem:
    name: str | None = None
    product_id: SourceId | None = None
    variation_id: SourceId | None = None
    quantity: int = 0
    subtotal: str | None = None
    subtotal_tax: str | None = None
    total: str | None = None
    total_tax: str | None = None
    price: str | None = None
    sku: str | None = None
    meta_data: list[MetaEntry] = field(default_factory=list["MetaEntry"])


@dataclass(slots=True, kw_only=True)
class ShippingLine:
    method_title: str | None = None
    method_id: str | None = None
    total: str | None = None
    total_tax: str | None = None
    meta_data: list[MetaEntry] = field(default_factory=list["MetaEntry"])


@dataclass(slots=True, kw_only=True)
class CouponLine:
    code: str | None = None
    discount: str | None = None
    discount_tax: str | None = None
    meta_data: list[MetaEntry] = field(default_factory=list["MetaEntry"])


@dataclass(slots=True, kw_only=True)
class FeeLine:
    name: str | None = None
    tax_class: str | None = None
    tax_status: str | None = None
    total: str | None = None
    total_tax: str | None = None
    meta_data: list[MetaEntry] = field(default_factory=list["MetaEntry"])


@dataclass(slots=True, kw_only=True)
class TaxLine:
    rate_code: str | None = None
    rate_id: int | None = None
    label: str | None = None
    compound: bool | None = None
    tax_total: str | None = None
    shipping_tax_total: str | None = None
    meta_data: list[MetaEntry] = field(default_factory=list["MetaEntry"])


@dataclass(slots=True, kw_only=True)
class Order:
    id: SourceId = 0
    number: str | None = None
    order_key: str | None = None
    status: str | None = None
    currency: str | None = None
    customer_id: SourceId | None = None
    billing: Address | None = None
    shipping: Address | None = None
    payment_method: str | None = None
    payment_method_title: str | None = None
    transaction_id: str | None = None
    customer_note: str | None = None
    date_created: str | None = None
    date_created_gmt: str | None = None
    date_paid: str | None = None
    date_paid_gmt: str | None = None
    date_completed: str | None = None
    date_completed_gmt: str | None = None
    discount_total: str | None = None
    discount_tax: str | None = None
    shipping_total: str | None = None
    shipping_tax: str | None = None
    cart_tax: str | None = None
    total: str | None = None
    total_tax: str | None = None
    line_items: list[OrderLineItem] = field(default_factory=list["OrderLineItem"])
    shipping_lines: list[ShippingLine] = field(default_factory=list["ShippingLine"])
    coupon_lines: list[CouponLine] = field(default_factory=list["CouponLine"])
    fee_lines: list[FeeLine] = field(default_factory=list["FeeLine"])
    tax_lines: list[TaxLine] = field(default_factory=list["TaxLine"])
    meta_data: list[MetaEntry] = field(default_factory=list["MetaEntry"])

    @property
    def label(self) -> str:
        if self.number and self.number.strip():
            return self.number
        if self.order_key and self.order_key.strip():
            return self.order_key
        return str(self.id) if self.id > 0 else "order"


@dataclass(slots=True, kw_only=True)
class Subscription:
    """Recurring order; carried so a run can report it, never provisioned."""

    id: SourceId = 0
    number: str | None = None
    status: str | None = None
    customer_id: SourceId | None = None
