"""Source id to target id tables built up during one replication run."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import StrEnum


class EntityKind(StrEnum):
    PRODUCT = "product"
    CUSTOMER = "customer"
    COUPON = "coupon"
    CATEGORY = "category"


@dataclass(slots=True)
class IdentityMap[TKey: Hashable]:
    """Correspondence table for one entity kind.

    Entries are added only after the target confirmed persistence. A missing
    entry means there is no known counterpart.
    """

    kind: str
    _ids: dict[TKey, int] = field(default_factory=dict[TKey, int])

    def record(self, source: TKey, target_id: int) -> None:
        if isinstance(source, int) and source <= 0:
            return
        self._ids[source] = target_id

    def get(self, source: TKey | None) -> int | None:
        if source is None:
            return None
        return self._ids.get(source)

    def __contains__(self, source: object) -> bool:
        return source in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def items(self) -> list[tuple[TKey, int]]:
        return list(self._ids.items())


type TaxonomyKey = tuple[str, str]


@dataclass(slots=True)
class ReplicationIdentity:
    """All identity maps of one run."""

    taxonomies: IdentityMap[TaxonomyKey] = field(
        default_factory=lambda: IdentityMap[TaxonomyKey]("taxonomy")
    )
    products: IdentityMap[int] = field(default_factory=lambda: IdentityMap[int](EntityKind.PRODUCT))
    categories: IdentityMap[int] = field(
        default_factory=lambda: IdentityMap[int](EntityKind.CATEGORY)
    )
    customers: IdentityMap[int] = field(
        default_factory=lambda: IdentityMap[int](EntityKind.CUSTOMER)
    )
    coupons: IdentityMap[int] = field(default_factory=lambda: IdentityMap[int](EntityKind.COUPON))
    coupon_codes: dict[str, int] = field(default_factory=dict[str, int])

    def record_coupon_code(self, code: str | None, target_id: int) -> None:
        if code and code.strip():
            self.coupon_codes[code.strip().casefold()] = target_id

    def coupon_id_for_code(self, code: str | None) -> int | None:
        if not code or not code.strip():
            return None
        return self.coupon_codes.get(code.strip().casefold())

    def sizes(self) -> dict[str, int]:
        return {
            "taxonomies": len(self.taxonomies),
            "products": len(self.products),
            "categories": len(self.categories),
            "customers": len(self.customers),
            "coupons": len(self.coupons),
            "coupon_codes": len(self.coupon_codes),
        }
