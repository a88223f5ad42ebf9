"""REST client for a WooCommerce target store."""

from __future__ import annotations

from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from storeclone.adapters.http_resilience import ResilientClient
from storeclone.domain.ports import TargetStoreError

from .schema import CUSTOMER_LIST, ENTITY, ENTITY_LIST, MEDIA, ORDER_LIST, TERM_LIST
from .translator import to_remote_customer, to_remote_order, to_remote_term

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from pydantic import TypeAdapter

    from storeclone.adapters.http_resilience import ResilienceConfig
    from storeclone.config.target import TargetStoreConfig
    from storeclone.domain.model import TargetId
    from storeclone.domain.ports import (
        BundleUpload,
        JsonObject,
        RemoteCustomer,
        RemoteOrder,
        RemoteTerm,
    )

log = getLogger(__name__)

WC_API = "/wp-json/wc/v3"
MEDIA_PATH = "/wp-json/wp/v2/media"
LOOKUP_PAGE_SIZE = 1
LISTING_PAGE_SIZE = 100
_WC_ROUTE_MARKER = "/wc/"

type FormFiles = list[tuple[str, tuple[str | None, bytes, str]]]


def _segment(value: str | int) -> str:
    return quote(str(value), safe="")


def default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


def target_resilience(config: TargetStoreConfig) -> ResilienceConfig:
    """Resilience settings of ``config`` pointed at the store's base URL."""

    return replace(config.resilience, base_url=config.base_url)


@dataclass(slots=True)
class WooCommerceStore:
    """``TargetStore`` over the WooCommerce v3 REST API.

    Every request carries HTTP Basic credentials; requests to ``/wc/`` routes
    also carry them as ``consumer_key``/``consumer_secret`` query parameters.
    Lookup GETs answering 404 count as "no match". Transport failures that
    survive the retry policy are raised as ``TargetStoreError`` with status 0.
    """

    config: TargetStoreConfig
    client: ResilientClient

    # transport

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str | int] | None = None,
        json: object = None,
        data: dict[str, str] | None = None,
        files: FormFiles | None = None,
    ) -> httpx.Response:
        query: dict[str, str | int] = dict(params or {})
        if _WC_ROUTE_MARKER in path:
            query["consumer_key"] = self.config.consumer_key
            query["consumer_secret"] = self.config.consumer_secret
        auth = httpx.BasicAuth(self.config.consumer_key, self.config.consumer_secret)
        log.debug("%s %s", method, path)
        try:
            response = await self.client.request(
                method,
                path,
                params=query or None,
                json=json,
                data=data,
                files=files,
                auth=auth,
                headers={"Accept": "application/json"},
            )
        except httpx.TransportError as exc:
            raise TargetStoreError(0, str(exc), method=method, path=path) from exc
        if not response.is_success:
            raise TargetStoreError(response.status_code, response.text, method=method, path=path)
        return response

    @staticmethod
    def _parse[T](adapter: TypeAdapter[T], response: httpx.Response) -> T:
        try:
            return adapter.validate_json(response.content)
        except ValidationError as exc:
            request = response.request
            raise TargetStoreError(
                response.status_code,
                f"Unexpected response body: {response.text[:500]}",
                method=request.method,
                path=request.url.path,
            ) from exc

    async def _lookup[T](
        self, path: str, adapter: TypeAdapter[list[T]], params: dict[str, str | int]
    ) -> list[T]:
        try:
            response = await self._request("GET", path, params=params)
        except TargetStoreError as exc:
            if exc.is_not_found:
                return []
            raise
        return self._parse(adapter, response)

    async def _first_id(self, path: str, **params: str | int) -> TargetId | None:
        matches = await self._lookup(path, ENTITY_LIST, {"per_page": LOOKUP_PAGE_SIZE, **params})
        return matches[0].id if matches else None

    async def _send(self, method: str, path: str, payload: object) -> TargetId:
        response = await self._request(method, path, json=payload)
        return self._parse(ENTITY, response).id

    # catalog

    async def find_product_by_sku(self, sku: str) -> TargetId | None:
        return await self._first_id(f"{WC_API}/products", sku=sku)

    async def find_product_by_slug(self, slug: str) -> TargetId | None:
        return await self._first_id(f"{WC_API}/products", slug=slug)

    async def create_product(self, payload: JsonObject) -> TargetId:
        return await self._send("POST", f"{WC_API}/products", payload)

    async def update_product(self, product_id: TargetId, payload: JsonObject) -> TargetId:
        return await self._send("PUT", f"{WC_API}/products/{product_id}", payload)

    async def find_taxonomy_by_slug(self, resource: str, slug: str) -> TargetId | None:
        return await self._first_id(f"{WC_API}/products/{_segment(resource)}", slug=slug)

    async def create_taxonomy(self, resource: str, payload: JsonObject) -> TargetId:
        return await self._send("POST", f"{WC_API}/products/{_segment(resource)}", payload)

    async def list_attributes(self) -> list[RemoteTerm]:
        terms = await self._lookup(
            f"{WC_API}/products/attributes", TERM_LIST, {"per_page": LISTING_PAGE_SIZE}
        )
        return [to_remote_term(term) for term in terms]

    async def create_attribute(self, payload: JsonObject) -> TargetId:
        return await self._send("POST", f"{WC_API}/products/attributes", payload)

    async def list_attribute_terms(self, attribute_id: TargetId) -> list[RemoteTerm]:
        terms = await self._lookup(
            f"{WC_API}/products/attributes/{attribute_id}/terms",
            TERM_LIST,
            {"per_page": LISTING_PAGE_SIZE},
        )
        return [to_remote_term(term) for term in terms]

    async def create_attribute_term(self, attribute_id: TargetId, payload: JsonObject) -> TargetId:
        return await self._send(
            "POST", f"{WC_API}/products/attributes/{attribute_id}/terms", payload
        )

    async def upload_media(self, path: Path, content_type: str) -> TargetId:
        files: FormFiles = [("file", (path.name, path.read_bytes(), content_type))]
        response = await self._request("POST", MEDIA_PATH, files=files)
        return self._parse(MEDIA, response).id

    # people and sales

    async def find_customer_by_email(self, email: str) -> TargetId | None:
        return await self._first_id(f"{WC_API}/customers", email=email)

    async def search_customers(self, term: str) -> list[RemoteCustomer]:
        customers = await self._lookup(
            f"{WC_API}/customers", CUSTOMER_LIST, {"per_page": LOOKUP_PAGE_SIZE, "search": term}
        )
        return [to_remote_customer(customer) for customer in customers]

    async def create_customer(self, payload: JsonObject) -> TargetId:
        return await self._send("POST", f"{WC_API}/customers", payload)

    async def update_customer(self, customer_id: TargetId, payload: JsonObject) -> TargetId:
        return await self._send("PUT", f"{WC_API}/customers/{customer_id}", payload)

    async def find_coupon_by_code(self, code: str) -> TargetId | None:
        return await self._first_id(f"{WC_API}/coupons", code=code)

    async def create_coupon(self, payload: JsonObject) -> TargetId:
        return await self._send("POST", f"{WC_API}/coupons", payload)

    async def update_coupon(self, coupon_id: TargetId, payload: JsonObject) -> TargetId:
        return await self._send("PUT", f"{WC_API}/coupons/{coupon_id}", payload)

    async def search_orders(self, term: str) -> list[RemoteOrder]:
        orders = await self._lookup(
            f"{WC_API}/orders", ORDER_LIST, {"per_page": LOOKUP_PAGE_SIZE, "search": term}
        )
        return [to_remote_order(order) for order in orders]

    async def create_order(self, payload: JsonObject) -> TargetId:
        return await self._send("POST", f"{WC_API}/orders", payload)

    # configuration

    async def update_settings_group(self, group_id: str, updates: Sequence[JsonObject]) -> None:
        await self._request("PUT", f"{WC_API}/settings/{_segment(group_id)}", json=list(updates))

    async def update_shipping_zone(self, zone_id: int, payload: JsonObject) -> None:
        await self._request("PUT", f"{WC_API}/shipping/zones/{zone_id}", json=payload)

    async def replace_shipping_zone_locations(
        self, zone_id: int, locations: Sequence[JsonObject]
    ) -> None:
        await self._request(
            "PUT", f"{WC_API}/shipping/zones/{zone_id}/locations", json=list(locations)
        )

    async def update_shipping_zone_method(
        self, zone_id: int, instance_id: int, payload: JsonObject
    ) -> None:
        await self._request(
            "PUT", f"{WC_API}/shipping/zones/{zone_id}/methods/{instance_id}", json=payload
        )

    async def create_shipping_zone_method(self, zone_id: int, payload: JsonObject) -> None:
        await self._request("POST", f"{WC_API}/shipping/zones/{zone_id}/methods", json=payload)

    async def update_payment_gateway(self, gateway_id: str, payload: JsonObject) -> None:
        path = f"{WC_API}/payment_gateways/{_segment(gateway_id)}"
        await self._request("PUT", path, json=payload)

    # extensions

    async def install_bundle(self, path: str, upload: BundleUpload) -> None:
        files: FormFiles = []
        if upload.options_json is not None:
            files.append(("options", (None, upload.options_json.encode(), "application/json")))
        if upload.manifest_json is not None:
            files.append(("manifest", (None, upload.manifest_json.encode(), "application/json")))
        if upload.archive_path is not None:
            archive = upload.archive_path
            files.append(("archive", (archive.name, archive.read_bytes(), "application/zip")))
        await self._request("POST", path, data={"slug": upload.slug}, files=files)


__all__ = [
    "LISTING_PAGE_SIZE",
    "LOOKUP_PAGE_SIZE",
    "MEDIA_PATH",
    "WC_API",
    "WooCommerceStore",
    "default_client_factory",
    "target_resilience",
]
