"""Counters describing what one replication run did."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class Outcome(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"


class ReportKind(StrEnum):
    CATEGORY = "categories"
    TAG = "tags"
    ATTRIBUTE = "attributes"
    ATTRIBUTE_TERM = "attribute_terms"
    MEDIA = "media"
    PRODUCT = "products"
    CUSTOMER = "customers"
    COUPON = "coupons"
    ORDER = "orders"
    SUBSCRIPTION = "subscriptions"
    SETTINGS_GROUP = "settings_groups"
    SHIPPING_ZONE = "shipping_zones"
    SHIPPING_METHOD = "shipping_methods"
    PAYMENT_GATEWAY = "payment_gateways"
    BUNDLE = "bundles"


@dataclass(slots=True)
class KindCounts:
    created: int = 0
    updated: int = 0
    skipped: int = 0

    def add(self, outcome: Outcome, count: int = 1) -> None:
        match outcome:
            case Outcome.CREATED:
                self.created += count
            case Outcome.UPDATED:
                self.updated += count
            case Outcome.SKIPPED:
                self.skipped += count

    @property
    def total(self) -> int:
        return self.created + self.updated + self.skipped


@dataclass(slots=True)
class ReplicationReport:
    counts: dict[ReportKind, KindCounts] = field(default_factory=dict[ReportKind, KindCounts])
    identity_sizes: dict[str, int] = field(default_factory=dict[str, int])
    empty: bool = False

    def record(self, kind: ReportKind, outcome: Outcome, count: int = 1) -> None:
        self.counts.setdefault(kind, KindCounts()).add(outcome, count)

    def for_kind(self, kind: ReportKind) -> KindCounts:
        return self.counts.get(kind, KindCounts())

    def summary(self) -> str:
        if self.empty:
            return "nothing to replicate"
        parts = [
            f"{kind.value}: {counts.created} created, {counts.updated} updated, "
            f"{counts.skipped} skipped"
            for kind, counts in self.counts.items()
        ]
        return "; ".join(parts) if parts else "no changes"
