"""In-memory ``TargetStore`` used by the replication tests."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from typing import TYPE_CHECKING

from storeclone.domain.ports import (
    BundleUpload,
    RemoteCustomer,
    RemoteOrder,
    RemoteTerm,
    TargetStore,
    TargetStoreError,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from storeclone.domain.ports import JsonObject


@dataclass(slots=True)
class StoredOrder:
    payload: JsonObject
    number: str | None = None
    order_key: str | None = None


def _text(payload: JsonObject, key: str) -> str | None:
    value = payload.get(key)
    return value if isinstance(value, str) else None


class FakeTargetStore(TargetStore):
    """Keeps every entity in dictionaries and records each call by name.

    ``conflict_once`` makes the next call of a create method persist the
    entity and then answer 409, as if a concurrent writer won the race.
    ``fail_once`` raises the given error without touching any state.
    """

    def __init__(self) -> None:
        self._ids = count(100)
        self.calls: list[str] = []
        self.products: dict[int, JsonObject] = {}
        self.taxonomies: dict[str, dict[int, JsonObject]] = {"categories": {}, "tags": {}}
        self.attributes: dict[int, JsonObject] = {}
        self.attribute_terms: dict[int, dict[int, JsonObject]] = {}
        self.media: dict[int, Path] = {}
        self.customers: dict[int, JsonObject] = {}
        self.coupons: dict[int, JsonObject] = {}
        self.orders: dict[int, StoredOrder] = {}
        self.settings: dict[str, list[JsonObject]] = {}
        self.zones: dict[int, JsonObject] = {}
        self.zone_locations: dict[int, list[JsonObject]] = {}
        self.zone_methods: dict[tuple[int, int], JsonObject] = {}
        self.created_methods: list[tuple[int, JsonObject]] = []
        self.gateways: dict[str, JsonObject] = {}
        self.installed: list[tuple[str, BundleUpload]] = []
        self.endpoint_statuses: dict[str, int] = {}
        self._conflicts: set[str] = set()
        self._failures: dict[str, TargetStoreError] = {}

    # test controls

    def conflict_once(self, method: str) -> None:
        self._conflicts.add(method)

    def fail_once(self, method: str, status_code: int, body: str = "rejected") -> None:
        self._failures[method] = TargetStoreError(status_code, body, method=method)

    def count(self, method: str) -> int:
        return self.calls.count(method)

    @property
    def creates(self) -> list[str]:
        return [call for call in self.calls if call.startswith(("create_", "upload_"))]

    def _enter(self, method: str) -> None:
        self.calls.append(method)
        failure = self._failures.pop(method, None)
        if failure is not None:
            raise failure

    def _store(self, method: str, table: dict[int, JsonObject], payload: JsonObject) -> int:
        target_id = next(self._ids)
        table[target_id] = dict(payload)
        if method in self._conflicts:
            self._conflicts.discard(method)
            raise TargetStoreError(409, "term_exists", method=method)
        return target_id

    @staticmethod
    def _find(table: dict[int, JsonObject], key: str, value: str) -> int | None:
        for target_id, payload in table.items():
            stored = _text(payload, key)
            if stored is not None and stored.casefold() == value.casefold():
                return target_id
        return None

    # catalog

    async def find_product_by_sku(self, sku: str) -> int | None:
        self._enter("find_product_by_sku")
        return self._find(self.products, "sku", sku)

    async def find_product_by_slug(self, slug: str) -> int | None:
        self._enter("find_product_by_slug")
        return self._find(self.products, "slug", slug)

    async def create_product(self, payload: JsonObject) -> int:
        self._enter("create_product")
        return self._store("create_product", self.products, payload)

    async def update_product(self, product_id: int, payload: JsonObject) -> int:
        self._enter("update_product")
        self.products[product_id] = {**self.products.get(product_id, {}), **payload}
        return product_id

    async def find_taxonomy_by_slug(self, resource: str, slug: str) -> int | None:
        self._enter("find_taxonomy_by_slug")
        return self._find(self.taxonomies.setdefault(resource, {}), "slug", slug)

    async def create_taxonomy(self, resource: str, payload: JsonObject) -> int:
        self._enter("create_taxonomy")
        return self._store("create_taxonomy", self.taxonomies.setdefault(resource, {}), payload)

    async def list_attributes(self) -> list[RemoteTerm]:
        self._enter("list_attributes")
        return [
            RemoteTerm(id=target_id, slug=_text(payload, "slug"), name=_text(payload, "name"))
            for target_id, payload in self.attributes.items()
        ]

    async def create_attribute(self, payload: JsonObject) -> int:
        self._enter("create_attribute")
        return self._store("create_attribute", self.attributes, payload)

    async def list_attribute_terms(self, attribute_id: int) -> list[RemoteTerm]:
        self._enter("list_attribute_terms")
        terms = self.attribute_terms.get(attribute_id, {})
        return [
            RemoteTerm(id=target_id, slug=_text(payload, "slug"), name=_text(payload, "name"))
            for target_id, payload in terms.items()
        ]

    async def create_attribute_term(self, attribute_id: int, payload: JsonObject) -> int:
        self._enter("create_attribute_term")
        terms = self.attribute_terms.setdefault(attribute_id, {})
        return self._store("create_attribute_term", terms, payload)

    async def upload_media(self, path: Path, content_type: str) -> int:
        self._enter("upload_media")
        media_id = next(self._ids)
        self.media[media_id] = path
        return media_id

    # people and sales

    async def find_customer_by_email(self, email: str) -> int | None:
        self._enter("find_customer_by_email")
        return self._find(self.customers, "email", email)

    async def search_customers(self, term: str) -> list[RemoteCustomer]:
        self._enter("search_customers")
        needle = term.casefold()
        return [
            RemoteCustomer(
                id=target_id, email=_text(payload, "email"), username=_text(payload, "username")
            )
            for target_id, payload in self.customers.items()
            if any(
                needle in (_text(payload, key) or "").casefold() for key in ("email", "username")
            )
        ]

    async def create_customer(self, payload: JsonObject) -> int:
        self._enter("create_customer")
        return self._store("create_customer", self.customers, payload)

    async def update_customer(self, customer_id: int, payload: JsonObject) -> int:
        self._enter("update_customer")
        self.customers[customer_id] = {**self.customers.get(customer_id, {}), **payload}
        return customer_id

    async def find_coupon_by_code(self, code: str) -> int | None:
        self._enter("find_coupon_by_code")
        return self._find(self.coupons, "code", code)

    async def create_coupon(self, payload: JsonObject) -> int:
        self._enter("create_coupon")
        return self._store("create_coupon", self.coupons, payload)

    async def update_coupon(self, coupon_id: int, payload: JsonObject) -> int:
        self._enter("update_coupon")
        self.coupons[coupon_id] = {**self.coupons.get(coupon_id, {}), **payload}
        return coupon_id

    def add_order(self, *, number: str | None = None, order_key: str | None = None) -> int:
        order_id = next(self._ids)
        self.orders[order_id] = StoredOrder(payload={}, number=number, order_key=order_key)
        return order_id

    async def search_orders(self, term: str) -> list[RemoteOrder]:
        self._enter("search_orders")
        needle = term.casefold()
        return [
            RemoteOrder(id=order_id, number=order.number, order_key=order.order_key)
            for order_id, order in self.orders.items()
            if needle in (order.number or "").casefold()
            or needle in (order.order_key or "").casefold()
        ]

    async def create_order(self, payload: JsonObject) -> int:
        self._enter("create_order")
        order_id = next(self._ids)
        self.orders[order_id] = StoredOrder(payload=dict(payload), number=str(order_id))
        return order_id

    # configuration

    async def update_settings_group(self, group_id: str, updates: Sequence[JsonObject]) -> None:
        self._enter("update_settings_group")
        self.settings[group_id] = list(updates)

    async def update_shipping_zone(self, zone_id: int, payload: JsonObject) -> None:
        self._enter("update_shipping_zone")
        self.zones[zone_id] = dict(payload)

    async def replace_shipping_zone_locations(
        self, zone_id: int, locations: Sequence[JsonObject]
    ) -> None:
        self._enter("replace_shipping_zone_locations")
        self.zone_locations[zone_id] = list(locations)

    async def update_shipping_zone_method(
        self, zone_id: int, instance_id: int, payload: JsonObject
    ) -> None:
        self._enter("update_shipping_zone_method")
        if (zone_id, instance_id) not in self.zone_methods:
            raise TargetStoreError(404, "woocommerce_rest_shipping_zone_method_invalid")
        self.zone_methods[(zone_id, instance_id)] = dict(payload)

    async def create_shipping_zone_method(self, zone_id: int, payload: JsonObject) -> None:
        self._enter("create_shipping_zone_method")
        self.created_methods.append((zone_id, dict(payload)))

    async def update_payment_gateway(self, gateway_id: str, payload: JsonObject) -> None:
        self._enter("update_payment_gateway")
        self.gateways[gateway_id] = dict(payload)

    # extensions

    async def install_bundle(self, path: str, upload: BundleUpload) -> None:
        self._enter("install_bundle")
        status = self.endpoint_statuses.get(path, 200)
        if status >= 400:  # noqa: PLR2004
            raise TargetStoreError(status, f"status {status}", method="POST", path=path)
        self.installed.append((path, upload))
