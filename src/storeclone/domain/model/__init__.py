"""Public domain model surface."""

from __future__ import annotations

from storeclone.domain.model.bundles import BundleScope, ExtensionBundle
from storeclone.domain.model.catalog import (
    PriceInfo,
    Product,
    ProductAttribute,
    ProductImage,
    TaxonomyRef,
)
from storeclone.domain.model.configuration import (
    FlagSetting,
    ListSetting,
    MappingSetting,
    NullSetting,
    NumberSetting,
    PaymentGateway,
    SettingValue,
    ShippingMethod,
    ShippingZone,
    ShippingZoneLocation,
    StoreConfiguration,
    StoreSetting,
    TextSetting,
    setting_value_from_json,
)
from storeclone.domain.model.customers import Customer
from storeclone.domain.model.primitives import (
    Address,
    JsonValue,
    MetaEntry,
    SourceId,
    TargetId,
    json_number,
)
from storeclone.domain.model.sales import (
    Coupon,
    CouponLine,
    FeeLine,
    Order,
    OrderLineItem,
    ShippingLine,
    Subscription,
    TaxLine,
)
from storeclone.domain.model.snapshot import SourceCatalogSnapshot

__all__ = [  # noqa: RUF022
    # catalog
    "PriceInfo",
    "Product",
    "ProductAttribute",
    "ProductImage",
    "TaxonomyRef",
    # people
    "Address",
    "Customer",
    # sales
    "Coupon",
    "CouponLine",
    "FeeLine",
    "Order",
    "OrderLineItem",
    "ShippingLine",
    "Subscription",
    "TaxLine",
    # configuration
    "FlagSetting",
    "ListSetting",
    "MappingSetting",
    "NullSetting",
    "NumberSetting",
    "PaymentGateway",
    "SettingValue",
    "ShippingMethod",
    "ShippingZone",
    "ShippingZoneLocation",
    "StoreConfiguration",
    "StoreSetting",
    "TextSetting",
    "setting_value_from_json",
    # bundles
    "BundleScope",
    "ExtensionBundle",
    # primitives
    "JsonValue",
    "MetaEntry",
    "SourceId",
    "TargetId",
    "json_number",
    # aggregate
    "SourceCatalogSnapshot",
]
