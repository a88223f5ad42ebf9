"""Translate snapshot schemas into domain snapshot entities."""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from storeclone.domain.model import (
    Address,
    Coupon,
    CouponLine,
    Customer,
    FeeLine,
    MetaEntry,
    Order,
    OrderLineItem,
    PaymentGateway,
    PriceInfo,
    Product,
    ProductAttribute,
    ProductImage,
    SettingValue,
    ShippingLine,
    ShippingMethod,
    ShippingZone,
    ShippingZoneLocation,
    StoreConfiguration,
    StoreSetting,
    Subscription,
    TaxLine,
    TaxonomyRef,
    setting_value_from_json,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from .schema import (
        SnapshotAddress,
        SnapshotConfiguration,
        SnapshotCoupon,
        SnapshotCouponLine,
        SnapshotCustomer,
        SnapshotFeeLine,
        SnapshotLineItem,
        SnapshotMeta,
        SnapshotOrder,
        SnapshotPaymentGateway,
        SnapshotProduct,
        SnapshotSetting,
        SnapshotShippingLine,
        SnapshotShippingZone,
        SnapshotSubscription,
        SnapshotTaxLine,
        SnapshotTerm,
    )

_PATH_SEPARATORS = re.compile(r"[;,\r\n]+")


def split_image_paths(raw: str | list[str] | None, base_dir: Path) -> list[str]:
    """Local image paths of a product, resolved against the snapshot directory."""

    if raw is None:
        return []
    chunks = raw if isinstance(raw, list) else _PATH_SEPARATORS.split(raw)
    paths: list[str] = []
    for chunk in chunks:
        candidate = chunk.strip()
        if not candidate:
            continue
        path = Path(candidate)
        paths.append(str(path if path.is_absolute() else base_dir / path))
    return paths


def _meta(entries: Iterable[SnapshotMeta]) -> list[MetaEntry]:
    return [MetaEntry(key=entry.key, value=entry.value) for entry in entries]


def _address(address: SnapshotAddress | None) -> Address | None:
    if address is None:
        return None
    return Address(**address.model_dump())


def _refs(terms: Iterable[SnapshotTerm]) -> list[TaxonomyRef]:
    return [TaxonomyRef(id=term.id, name=term.name, slug=term.slug) for term in terms]


def to_product(payload: SnapshotProduct, base_dir: Path) -> Product:
    prices = None
    if payload.prices is not None:
        prices = PriceInfo(**payload.prices.model_dump())
    return Product(
        id=payload.id,
        name=payload.name,
        slug=payload.slug,
        sku=payload.sku,
        type=payload.type,
        description=payload.description,
        short_description=payload.short_description,
        prices=prices,
        stock_status=payload.stock_status,
        is_in_stock=payload.is_in_stock,
        parent_id=payload.parent_id,
        categories=_refs(payload.categories),
        tags=_refs(payload.tags),
        attributes=[ProductAttribute(**item.model_dump()) for item in payload.attributes],
        images=[
            ProductImage(id=image.id, src=image.src, alt=image.alt) for image in payload.images
        ],
        local_image_paths=split_image_paths(payload.image_file_paths, base_dir),
    )


def to_customer(payload: SnapshotCustomer) -> Customer:
    return Customer(
        id=payload.id,
        email=payload.email,
        first_name=payload.first_name,
        last_name=payload.last_name,
        username=payload.username,
        billing=_address(payload.billing),
        shipping=_address(payload.shipping),
        meta_data=_meta(payload.meta_data),
    )


def to_coupon(payload: SnapshotCoupon) -> Coupon:
    fields = payload.model_dump(exclude={"meta_data"})
    return Coupon(**fields, meta_data=_meta(payload.meta_data))


type _OrderLine = (
    SnapshotLineItem | SnapshotShippingLine | SnapshotCouponLine | SnapshotFeeLine | SnapshotTaxLine
)


def _with_meta[T](factory: Callable[..., T], line: _OrderLine) -> T:
    return factory(**line.model_dump(exclude={"meta_data"}), meta_data=_meta(line.meta_data))


def to_order(payload: SnapshotOrder) -> Order:
    scalars = payload.model_dump(
        exclude={
            "billing",
            "shipping",
            "line_items",
            "shipping_lines",
            "coupon_lines",
            "fee_lines",
            "tax_lines",
            "meta_data",
        }
    )
    return Order(
        **scalars,
        billing=_address(payload.billing),
        shipping=_address(payload.shipping),
        line_items=[_with_meta(OrderLineItem, item) for item in payload.line_items],
        shipping_lines=[_with_meta(ShippingLine, line) for line in payload.shipping_lines],
        coupon_lines=[_with_meta(CouponLine, line) for line in payload.coupon_lines],
        fee_lines=[_with_meta(FeeLine, line) for line in payload.fee_lines],
        tax_lines=[_with_meta(TaxLine, line) for line in payload.tax_lines],
        meta_data=_meta(payload.meta_data),
    )


def to_subscription(payload: SnapshotSubscription) -> Subscription:
    return Subscription(**payload.model_dump())


def _settings_map(settings: Mapping[str, SnapshotSetting]) -> dict[str, SettingValue]:
    return {key: setting_value_from_json(setting.value) for key, setting in settings.items()}


def _zone(payload: SnapshotShippingZone) -> ShippingZone:
    return ShippingZone(
        id=payload.id,
        name=payload.name or "",
        order=payload.order,
        locations=[
            ShippingZoneLocation(code=location.code, type=location.type)
            for location in payload.locations
            if location.code and location.type
        ],
        methods=[
            ShippingMethod(
                id=method.id,
                instance_id=method.instance_id,
                method_id=method.method_id,
                title=method.title,
                method_title=method.method_title,
                order=method.order,
                enabled=method.enabled,
                settings=_settings_map(method.settings),
            )
            for method in payload.methods
        ],
    )


def _gateway(payload: SnapshotPaymentGateway) -> PaymentGateway | None:
    if not payload.id:
        return None
    return PaymentGateway(
        id=payload.id,
        title=payload.title,
        description=payload.description,
        method_title=payload.method_title,
        order=payload.order,
        enabled=payload.enabled,
        settings=_settings_map(payload.settings),
    )


def to_configuration(payload: SnapshotConfiguration) -> StoreConfiguration:
    settings = [
        StoreSetting(
            id=setting.id,
            group_id=setting.group_id,
            label=setting.label,
            value=setting_value_from_json(setting.value),
        )
        for setting in payload.store_settings
        if setting.id and setting.group_id
    ]
    gateways = [gateway for gateway in map(_gateway, payload.payment_gateways) if gateway]
    return StoreConfiguration(
        store_settings=settings,
        shipping_zones=[_zone(zone) for zone in payload.shipping_zones],
        payment_gateways=gateways,
    )
