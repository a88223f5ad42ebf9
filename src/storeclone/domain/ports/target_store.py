"""Port describing the live store the snapshot is replicated into."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from storeclone.domain.model import JsonValue, TargetId

type JsonObject = dict[str, JsonValue]

CONFLICT_STATUS_CODES = frozenset({400, 409})


class TargetStoreError(RuntimeError):
    """Raised for every non-success response from the target store."""

    def __init__(self, status_code: int, body: str, *, method: str = "", path: str = "") -> None:
        self.status_code = status_code
        self.body = body
        self.method = method
        self.path = path
        request = f"{method} {path} " if method or path else ""
        super().__init__(f"{request}failed with HTTP {status_code}: {body}")

    @property
    def is_conflict(self) -> bool:
        """Whether a create was rejected because the entity probably exists already."""

        return self.status_code in CONFLICT_STATUS_CODES

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404  # noqa: PLR2004


@dataclass(slots=True, frozen=True)
class RemoteTerm:
    """Attribute definition or attribute term as listed by the target."""

    id: TargetId
    slug: str | None = None
    name: str | None = None


@dataclass(slots=True, frozen=True)
class RemoteCustomer:
    id: TargetId
    email: str | None = None
    username: str | None = None


@dataclass(slots=True, frozen=True)
class RemoteOrder:
    id: TargetId
    number: str | None = None
    order_key: str | None = None


@dataclass(slots=True, frozen=True)
class BundleUpload:
    """Multipart form for the bundle install endpoint."""

    slug: str
    options_json: str | None = None
    manifest_json: str | None = None
    archive_path: Path | None = None


@runtime_checkable
class TargetStore(Protocol):
    """Async REST surface of the target store.

    Lookups return ``None`` or an empty list when nothing matches; every
    other failure raises ``TargetStoreError``.
    """

    # catalog
    async def find_product_by_sku(self, sku: str) -> TargetId | None: ...

    async def find_product_by_slug(self, slug: str) -> TargetId | None: ...

    async def create_product(self, payload: JsonObject) -> TargetId: ...

    async def update_product(self, product_id: TargetId, payload: JsonObject) -> TargetId: ...

    async def find_taxonomy_by_slug(self, resource: str, slug: str) -> TargetId | None: ...

    async def create_taxonomy(self, resource: str, payload: JsonObject) -> TargetId: ...

    async def list_attributes(self) -> list[RemoteTerm]: ...

    async def create_attribute(self, payload: JsonObject) -> TargetId: ...

    async def list_attribute_terms(self, attribute_id: TargetId) -> list[RemoteTerm]: ...

    async def create_attribute_term(
        self, attribute_id: TargetId, payload: JsonObject
    ) -> TargetId: ...

    async def upload_media(self, path: Path, content_type: str) -> TargetId: ...

    # people and sales
    async def find_customer_by_email(self, email: str) -> TargetId | None: ...

    async def search_customers(self, term: str) -> list[RemoteCustomer]: ...

    async def create_customer(self, payload: JsonObject) -> TargetId: ...

    async def update_customer(self, customer_id: TargetId, payload: JsonObject) -> TargetId: ...

    async def find_coupon_by_code(self, code: str) -> TargetId | None: ...

    async def create_coupon(self, payload: JsonObject) -> TargetId: ...

    async def update_coupon(self, coupon_id: TargetId, payload: JsonObject) -> TargetId: ...

    async def search_orders(self, term: str) -> list[RemoteOrder]: ...

    async def create_order(self, payload: JsonObject) -> TargetId: ...

    # configuration
    async def update_settings_group(self, group_id: str, updates: Sequence[JsonObject]) -> None: ...

    async def update_shipping_zone(self, zone_id: int, payload: JsonObject) -> None: ...

    async def replace_shipping_zone_locations(
        self, zone_id: int, locations: Sequence[JsonObject]
    ) -> None: ...

    async def update_shipping_zone_method(
        self, zone_id: int, instance_id: int, payload: JsonObject
    ) -> None: ...

    async def create_shipping_zone_method(self, zone_id: int, payload: JsonObject) -> None: ...

    async def update_payment_gateway(self, gateway_id: str, payload: JsonObject) -> None: ...

    # extensions
    async def install_bundle(self, path: str, upload: BundleUpload) -> None: ...


__all__ = [
    "CONFLICT_STATUS_CODES",
    "BundleUpload",
    "JsonObject",
    "RemoteCustomer",
    "RemoteOrder",
    "RemoteTerm",
    "TargetStore",
    "TargetStoreError",
]
