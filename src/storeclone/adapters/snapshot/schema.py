"""Pydantic models describing the files of a captured snapshot.

The capture tools write the storefront's own JSON shapes (Store API for
products, REST v3 for everything else), so numbers and strings are mixed
freely; amounts are read as text and JSON ``null`` falls back to defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, cast

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, JsonValue, model_validator


def _to_text(value: object) -> object:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return str(value)
    return value


Text = Annotated[str | None, BeforeValidator(_to_text)]


class SnapshotBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, value: object) -> object:
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            return {key: item for key, item in mapping_value.items() if item is not None}
        return value


class SnapshotMeta(SnapshotBaseModel):
    key: Text = None
    value: JsonValue = None


class SnapshotAddress(SnapshotBaseModel):
    first_name: Text = None
    last_name: Text = None
    company: Text = None
    address_1: Text = None
    address_2: Text = None
    city: Text = None
    state: Text = None
    postcode: Text = None
    country: Text = None
    email: Text = None
    phone: Text = None


# catalog


class SnapshotPrices(SnapshotBaseModel):
    regular_price: Text = None
    sale_price: Text = None
    price: Text = None
    currency_code: Text = None
    currency_minor_unit: int | None = None


class SnapshotTerm(SnapshotBaseModel):
    id: int = 0
    name: Text = None
    slug: Text = None


class SnapshotAttribute(SnapshotBaseModel):
    name: Text = None
    taxonomy: Text = None
    attribute_key: Text = Field(default=None, alias="attribute")
    option: Text = None
    value: Text = None
    term: Text = None
    slug: Text = None


class SnapshotImage(SnapshotBaseModel):
    id: int = 0
    src: Text = None
    alt: Text = None


class SnapshotProduct(SnapshotBaseModel):
    id: int = 0
    name: Text = None
    slug: Text = None
    sku: Text = None
    type: Text = None
    description: Text = None
    short_description: Text = None
    prices: SnapshotPrices | None = None
    stock_status: Text = None
    is_in_stock: bool | None = None
    parent_id: int | None = Field(default=None, alias="parent")
    categories: list[SnapshotTerm] = Field(default_factory=list["SnapshotTerm"])
    tags: list[SnapshotTerm] = Field(default_factory=list["SnapshotTerm"])
    attributes: list[SnapshotAttribute] = Field(default_factory=list["SnapshotAttribute"])
    images: list[SnapshotImage] = Field(default_factory=list["SnapshotImage"])
    image_file_paths: str | list[str] | None = None


# people and sales


class SnapshotCustomer(SnapshotBaseModel):
    id: int = 0
    email: Text = None
    first_name: Text = None
    last_name: Text = None
    username: Text = None
    billing: SnapshotAddress | None = None
    shipping: SnapshotAddress | None = None
    meta_data: list[SnapshotMeta] = Field(default_factory=list["SnapshotMeta"])


class SnapshotCoupon(SnapshotBaseModel):
    id: int = 0
    code: Text = None
    amount: Text = None
    discount_type: Text = None
    description: Text = None
    individual_use: bool | None = None
    usage_limit: int | None = None
    usage_limit_per_user: int | None = None
    limit_usage_to_x_items: int | None = None
    free_shipping: bool | None = None
    exclude_sale_items: bool | None = None
    minimum_amount: Text = None
    maximum_amount: Text = None
    date_expires: Text = None
    date_expires_gmt: Text = None
    product_ids: list[int] = Field(default_factory=list[int])
    excluded_product_ids: list[int] = Field(default_factory=list[int])
    product_categories: list[int] = Field(default_factory=list[int])
    excluded_product_categories: list[int] = Field(default_factory=list[int])
    email_restrictions: list[str] = Field(default_factory=list[str])
    meta_data: list[SnapshotMeta] = Field(default_factory=list["SnapshotMeta"])


class SnapshotLineItem(SnapshotBaseModel):
    name: Text = None
    product_id: int | None = None
    variation_id: int | None = None
    quantity: int = 0
    subtotal: Text = None
    subtotal_tax: Text = None
    total: Text = None
    total_tax: Text = None
    price: Text = None
    sku: Text = None
    meta_data: list[SnapshotMeta] = Field(default_factory=list["SnapshotMeta"])


class SnapshotShippingLine(SnapshotBaseModel):
    method_title: Text = None
    method_id: Text = None
    total: Text = None
    total_tax: Text = None
    meta_data: list[SnapshotMeta] = Field(default_factory=list["SnapshotMeta"])


class SnapshotCouponLine(SnapshotBaseModel):
    code: Text = None
    discount: Text = None
    discount_tax: Text = None
    meta_data: list[SnapshotMeta] = Field(default_factory=list["SnapshotMeta"])


class SnapshotFeeLine(SnapshotBaseModel):
    name: Text = None
    tax_class: Text = None
    tax_status: Text = None
    total: Text = None
    total_tax: Text = None
    meta_data: list[SnapshotMeta] = Field(default_factory=list["SnapshotMeta"])


class SnapshotTaxLine(SnapshotBaseModel):
    rate_code: Text = None
    rate_id: int | None = None
    label: Text = None
    compound: bool | None = None
    tax_total: Text = None
    shipping_tax_total: Text = None
    meta_data: list[SnapshotMeta] = Field(default_factory=list["SnapshotMeta"])


class SnapshotOrder(SnapshotBaseModel):
    id: int = 0
    number: Text = None
    order_key: Text = None
    status: Text = None
    currency: Text = None
    customer_id: int | None = None
    billing: SnapshotAddress | None = None
    shipping: SnapshotAddress | None = None
    payment_method: Text = None
    payment_method_title: Text = None
    transaction_id: Text = None
    customer_note: Text = None
    date_created: Text = None
    date_created_gmt: Text = None
    date_paid: Text = None
    date_paid_gmt: Text = None
    date_completed: Text = None
    date_completed_gmt: Text = None
    discount_total: Text = None
    discount_tax: Text = None
    shipping_total: Text = None
    shipping_tax: Text = None
    cart_tax: Text = None
    total: Text = None
    total_tax: Text = None
    line_items: list[SnapshotLineItem] = Field(default_factory=list["SnapshotLineItem"])
    shipping_lines: list[SnapshotShippingLine] = Field(
        default_factory=list["SnapshotShippingLine"]
    )
    coupon_lines: list[SnapshotCouponLine] = Field(default_factory=list["SnapshotCouponLine"])
    fee_lines: list[SnapshotFeeLine] = Field(default_factory=list["SnapshotFeeLine"])
    tax_lines: list[SnapshotTaxLine] = Field(default_factory=list["SnapshotTaxLine"])
    meta_data: list[SnapshotMeta] = Field(default_factory=list["SnapshotMeta"])


class SnapshotSubscription(SnapshotBaseModel):
    id: int = 0
    number: Text = None
    status: Text = None
    customer_id: int | None = None


# configuration


class SnapshotSetting(SnapshotBaseModel):
    id: Text = None
    group_id: Text = None
    label: Text = None
    value: JsonValue = None


class SnapshotZoneLocation(SnapshotBaseModel):
    code: Text = None
    type: Text = None


class SnapshotShippingMethod(SnapshotBaseModel):
    id: Text = None
    instance_id: int = 0
    method_id: Text = None
    title: Text = None
    method_title: Text = None
    order: int | None = None
    enabled: bool = False
    settings: dict[str, SnapshotSetting] = Field(default_factory=dict[str, "SnapshotSetting"])


class SnapshotShippingZone(SnapshotBaseModel):
    id: int = 0
    name: Text = None
    order: int = 0
    locations: list[SnapshotZoneLocation] = Field(default_factory=list["SnapshotZoneLocation"])
    methods: list[SnapshotShippingMethod] = Field(
        default_factory=list["SnapshotShippingMethod"]
    )


class SnapshotPaymentGateway(SnapshotBaseModel):
    id: Text = None
    title: Text = None
    description: Text = None
    method_title: Text = None
    order: int | None = None
    enabled: bool = False
    settings: dict[str, SnapshotSetting] = Field(default_factory=dict[str, "SnapshotSetting"])


class SnapshotConfiguration(SnapshotBaseModel):
    store_settings: list[SnapshotSetting] = Field(default_factory=list["SnapshotSetting"])
    shipping_zones: list[SnapshotShippingZone] = Field(
        default_factory=list["SnapshotShippingZone"]
    )
    payment_gateways: list[SnapshotPaymentGateway] = Field(
        default_factory=list["SnapshotPaymentGateway"]
    )
