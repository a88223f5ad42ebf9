"""Aggregate handed to the replication engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from storeclone.domain.model.bundles import ExtensionBundle
from storeclone.domain.model.catalog import Product
from storeclone.domain.model.configuration import StoreConfiguration  # noqa: TC001
from storeclone.domain.model.customers import Customer
from storeclone.domain.model.sales import Coupon, Order, Subscription


@dataclass(slots=True, kw_only=True)
class SourceCatalogSnapshot:
    products: list[Product] = field(default_factory=list["Product"])
    customers: list[Customer] = field(default_factory=list["Customer"])
    coupons: list[Coupon] = field(default_factory=list["Coupon"])
    orders: list[Order] = field(default_factory=list["Order"])
    subscriptions: list[Subscription] = field(default_factory=list["Subscription"])
    configuration: StoreConfiguration | None = None
    plugin_bundles: list[ExtensionBundle] = field(default_factory=list["ExtensionBundle"])
    theme_bundles: list[ExtensionBundle] = field(default_factory=list["ExtensionBundle"])

    @property
    def is_empty(self) -> bool:
        return not (
            self.products or self.customers or self.coupons or self.orders or self.subscriptions
        )
