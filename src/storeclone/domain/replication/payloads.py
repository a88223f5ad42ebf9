"""Typed request bodies sent to the target store.

Every payload serializes through ``Payload.to_json`` which drops fields that
are absent: ``None``, blank strings and empty collections. Fields named in
``always`` are emitted even when absent.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar

from storeclone.domain.model import (
    FlagSetting,
    ListSetting,
    MappingSetting,
    NullSetting,
    NumberSetting,
    TextSetting,
    json_number,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from storeclone.domain.model import Address, JsonValue, MetaEntry, SettingValue
    from storeclone.domain.ports import JsonObject

_SETTING_TYPES = (TextSetting, NumberSetting, FlagSetting, ListSetting, MappingSetting, NullSetting)


def _serialize(value: object) -> JsonValue:
    if isinstance(value, Payload):
        return value.to_json()
    if isinstance(value, _SETTING_TYPES):
        return value.to_json()
    if isinstance(value, list | tuple):
        items = [_serialize(item) for item in value]  # pyright: ignore[reportUnknownVariableType]
        return [item for item in items if not _is_absent(item)]
    if isinstance(value, dict):
        return {str(key): _serialize(item) for key, item in value.items()}  # pyright: ignore[reportUnknownVariableType, reportUnknownArgumentType]
    if isinstance(value, Decimal):
        return json_number(value)
    if isinstance(value, str | int | float | bool) or value is None:
        return value
    raise TypeError(f"Cannot serialize {type(value).__name__} into a payload")


def _is_absent(value: JsonValue) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, list | dict):
        return not value
    return False


@dataclass(slots=True, kw_only=True)
class Payload:
    always: ClassVar[frozenset[str]] = frozenset()

    def to_json(self) -> JsonObject:
        body: JsonObject = {}
        for item in fields(self):
            value = _serialize(getattr(self, item.name))
            if _is_absent(value) and item.name not in self.always:
                continue
            body[item.name] = value
        return body

    @property
    def is_empty(self) -> bool:
        return not self.to_json()


# shared fragments


@dataclass(slots=True, kw_only=True)
class MetaPayload(Payload):
    key: str
    value: str


def meta_payloads(entries: Iterable[MetaEntry]) -> list[MetaPayload]:
    """Keyed entries whose value renders to a string; everything else is dropped."""

    result: list[MetaPayload] = []
    for entry in entries:
        if not entry.key or not entry.key.strip():
            continue
        value = entry.value_as_string()
        if value is None:
            continue
        result.append(MetaPayload(key=entry.key, value=value))
    return result


@dataclass(slots=True, kw_only=True)
class AddressPayload(Payload):
    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None
    address_1: str | None = None
    address_2: str | None = None
    city: str | None = None
    state: str | None = None
    postcode: str | None = None
    country: str | None = None
    email: str | None = None
    phone: str | None = None

    @classmethod
    def from_address(cls, address: Address | None) -> AddressPayload | None:
        if address is None:
            return None
        return cls(
            first_name=address.first_name,
            last_name=address.last_name,
            company=address.company,
            address_1=address.address_1,
            address_2=address.address_2,
            city=address.city,
            state=address.state,
            postcode=address.postcode,
            country=address.country,
            email=address.email,
            phone=address.phone,
        )


@dataclass(slots=True, kw_only=True)
class IdRef(Payload):
    id: int


# taxonomies


@dataclass(slots=True, kw_only=True)
class TaxonomyPayload(Payload):
    name: str
    slug: str


# products


@dataclass(slots=True, kw_only=True)
class AttributeAssignment(Payload):
    id: int
    options: list[str] = field(default_factory=list[str])


@dataclass(slots=True, kw_only=True)
class RemoteImage(Payload):
    src: str
    alt: str | None = None


@dataclass(slots=True, kw_only=True)
class ProductPayload(Payload):
    name: str | None = None
    slug: str | None = None
    type: str = "simple"
    sku: str | None = None
    status: str = "publish"
    regular_price: str | None = None
    sale_price: str | None = None
    description: str | None = None
    short_description: str | None = None
    stock_status: str | None = None
    categories: list[IdRef] = field(default_factory=list["IdRef"])
    tags: list[IdRef] = field(default_factory=list["IdRef"])
    attributes: list[AttributeAssignment] = field(default_factory=list["AttributeAssignment"])
    images: list[IdRef | RemoteImage] = field(default_factory=list["IdRef | RemoteImage"])


# customers and coupons


@dataclass(slots=True, kw_only=True)
class CustomerPayload(Payload):
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    billing: AddressPayload | None = None
    shipping: AddressPayload | None = None
    meta_data: list[MetaPayload] = field(default_factory=list["MetaPayload"])


@dataclass(slots=True, kw_only=True)
class CouponPayload(Payload):
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
    product_ids: list[int] = field(default_factory=list[int])
    excluded_product_ids: list[int] = field(default_factory=list[int])
    product_categories: list[int] = field(default_factory=list[int])
    excluded_product_categories: list[int] = field(default_factory=list[int])
    email_restrictions: list[str] = field(default_factory=list[str])
    meta_data: list[MetaPayload] = field(default_factory=list["MetaPayload"])


# orders


@dataclass(slots=True, kw_only=True)
class LineItemPayload(Payload):
    name: str | None = None
    product_id: int | None = None
    variation_id: int | None = None
    quantity: int | None = None
    subtotal: str | None = None
    subtotal_tax: str | None = None
    total: str | None = None
    total_tax: str | None = None
    price: str | None = None
    sku: str | None = None
    meta_data: list[MetaPayload] = field(default_factory=list["MetaPayload"])


@dataclass(slots=True, kw_only=True)
class CouponLinePayload(Payload):
    code: str | None = None
    discount: str | None = None
    discount_tax: str | None = None
    coupon_id: int | None = None
    meta_data: list[MetaPayload] = field(default_factory=list["MetaPayload"])


@dataclass(slots=True, kw_only=True)
class ShippingLinePayload(Payload):
    method_title: str | None = None
    method_id: str | None = None
    total: str | None = None
    total_tax: str | None = None
    meta_data: list[MetaPayload] = field(default_factory=list["MetaPayload"])


@dataclass(slots=True, kw_only=True)
class FeeLinePayload(Payload):
    name: str | None = None
    tax_class: str | None = None
    tax_status: str | None = None
    total: str | None = None
    total_tax: str | None = None
    meta_data: list[MetaPayload] = field(default_factory=list["MetaPayload"])


@dataclass(slots=True, kw_only=True)
class TaxLinePayload(Payload):
    rate_code: str | None = None
    rate_id: int | None = None
    label: str | None = None
    compound: bool | None = None
    tax_total: str | None = None
    shipping_tax_total: str | None = None
    meta_data: list[MetaPayload] = field(default_factory=list["MetaPayload"])


@dataclass(slots=True, kw_only=True)
class OrderPayload(Payload):
    always: ClassVar[frozenset[str]] = frozenset({"set_paid"})

    status: str | None = None
    currency: str | None = None
    customer_id: int | None = None
    billing: AddressPayload | None = None
    shipping: AddressPayload | None = None
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
    set_paid: bool = False
    line_items: list[LineItemPayload] = field(default_factory=list["LineItemPayload"])
    coupon_lines: list[CouponLinePayload] = field(default_factory=list["CouponLinePayload"])
    shipping_lines: list[ShippingLinePayload] = field(default_factory=list["ShippingLinePayload"])
    fee_lines: list[FeeLinePayload] = field(default_factory=list["FeeLinePayload"])
    tax_lines: list[TaxLinePayload] = field(default_factory=list["TaxLinePayload"])
    meta_data: list[MetaPayload] = field(default_factory=list["MetaPayload"])


# configuration


@dataclass(slots=True, kw_only=True)
class SettingUpdatePayload(Payload):
    always: ClassVar[frozenset[str]] = frozenset({"value"})

    id: str
    value: SettingValue = field(default_factory=NullSetting)


def settings_map(settings: Mapping[str, SettingValue]) -> dict[str, JsonValue]:
    """``{key: {"value": ...}}`` body used by shipping methods and payment gateways."""

    return {
        key: {"value": value.to_json()} for key, value in settings.items() if key and key.strip()
    }


@dataclass(slots=True, kw_only=True)
class ShippingZonePayload(Payload):
    name: str | None = None
    order: int | None = None


@dataclass(slots=True, kw_only=True)
class ZoneLocationPayload(Payload):
    code: str
    type: str


@dataclass(slots=True, kw_only=True)
class ShippingMethodPayload(Payload):
    method_id: str | None = None
    title: str | None = None
    order: int | None = None
    enabled: bool | None = None
    settings: dict[str, JsonValue] = field(default_factory=dict[str, "JsonValue"])


@dataclass(slots=True, kw_only=True)
class PaymentGatewayPayload(Payload):
    title: str | None = None
    description: str | None = None
    order: int | None = None
    enabled: bool | None = None
    settings: dict[str, JsonValue] = field(default_factory=dict[str, "JsonValue"])
