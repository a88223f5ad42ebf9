"""Create or update products and remember their target ids."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .identity import IdentityMap
from .keys import attribute_key, attribute_value, normalize_slug, taxonomy_key
from .payloads import AttributeAssignment, IdRef, ProductPayload, RemoteImage
from .pricing import resolve_price, resolve_sale_price, resolve_stock_status
from .report import Outcome, ReportKind
from .taxonomy import TaxonomyResource

if TYPE_CHECKING:
    from collections.abc import Iterable

    from storeclone.domain.model import Product, TaxonomyRef

    from .context import ReplicationContext
    from .identity import TaxonomyKey
    from .media import MediaUploader

log = logging.getLogger(__name__)

DEFAULT_PRODUCT_TYPE = "simple"
PUBLISHED_STATUS = "publish"


@dataclass(slots=True)
class ProductReconciler:
    context: ReplicationContext
    media: MediaUploader

    async def reconcile_all(self, products: Iterable[Product]) -> None:
        for product in products:
            self.context.checkpoint(ReportKind.PRODUCT.value)
            target_id = await self.reconcile(product)
            self.context.identity.products.record(product.id, target_id)

    async def reconcile(self, product: Product) -> int:
        """Upsert ``product`` and return its target id.

        Existing products are matched by SKU first and by normalized slug
        second, never by source id.
        """

        existing = await self.find_existing(product)
        payload = await self.build_payload(product)
        store = self.context.store

        if existing is not None:
            self.context.progress(f"Updating product '{product.label}' (ID {existing}).")
            target_id = await store.update_product(existing, payload.to_json())
            self.context.report.record(ReportKind.PRODUCT, Outcome.UPDATED)
            return target_id

        self.context.progress(f"Creating product '{product.label}'.")
        target_id = await store.create_product(payload.to_json())
        self.context.report.record(ReportKind.PRODUCT, Outcome.CREATED)
        return target_id

    async def find_existing(self, product: Product) -> int | None:
        store = self.context.store
        if product.sku and product.sku.strip():
            by_sku = await store.find_product_by_sku(product.sku)
            if by_sku is not None:
                return by_sku
        slug = normalize_slug(product.slug)
        if slug is not None:
            return await store.find_product_by_slug(slug)
        return None

    async def build_payload(self, product: Product) -> ProductPayload:
        taxonomies = self.context.identity.taxonomies
        product_type = product.type if product.type and product.type.strip() else None
        return ProductPayload(
            name=product.name,
            slug=normalize_slug(product.slug),
            type=product_type or DEFAULT_PRODUCT_TYPE,
            sku=product.sku,
            status=PUBLISHED_STATUS,
            regular_price=resolve_price(product.prices),
            sale_price=resolve_sale_price(product.prices),
            description=product.description,
            short_description=product.short_description,
            stock_status=resolve_stock_status(product),
            categories=taxonomy_refs(product.categories, TaxonomyResource.CATEGORIES, taxonomies),
            tags=taxonomy_refs(product.tags, TaxonomyResource.TAGS, taxonomies),
            attributes=attribute_assignments(product, taxonomies),
            images=await self._images(product),
        )

    async def _images(self, product: Product) -> list[IdRef | RemoteImage]:
        images: list[IdRef | RemoteImage] = []
        for path in product.local_image_paths:
            if not path.strip():
                continue
            media_id = await self.media.upload(path)
            if media_id is not None:
                images.append(IdRef(id=media_id))
        if images:
            return images
        return [
            RemoteImage(src=image.src, alt=image.alt)
            for image in product.images
            if image.src and image.src.strip()
        ]


def taxonomy_refs(
    refs: Iterable[TaxonomyRef],
    resource: TaxonomyResource,
    taxonomies: IdentityMap[TaxonomyKey],
) -> list[IdRef]:
    """Target references for ``refs``; refs without a known target term are dropped."""

    result: list[IdRef] = []
    for ref in refs:
        key = taxonomy_key(ref.slug, ref.name)
        if key is None:
            continue
        target_id = taxonomies.get((resource.value, key))
        if target_id is not None:
            result.append(IdRef(id=target_id))
    return result


def attribute_assignments(
    product: Product, taxonomies: IdentityMap[TaxonomyKey]
) -> list[AttributeAssignment]:
    groups: dict[str, list[str]] = {}
    seen: dict[str, set[str]] = {}
    for attribute in product.attributes:
        key = attribute_key(attribute)
        if key is None or (TaxonomyResource.ATTRIBUTES.value, key) not in taxonomies:
            continue
        options = groups.setdefault(key, [])
        folded = seen.setdefault(key, set())
        value = attribute_value(attribute)
        if value is None or value.casefold() in folded:
            continue
        folded.add(value.casefold())
        options.append(value)

    assignments: list[AttributeAssignment] = []
    for key, options in groups.items():
        attribute_id = taxonomies.get((TaxonomyResource.ATTRIBUTES.value, key))
        if not options or attribute_id is None:
            continue
        assignments.append(AttributeAssignment(id=attribute_id, options=options))
    return assignments


def build_category_id_map(
    products: Iterable[Product], taxonomies: IdentityMap[TaxonomyKey]
) -> IdentityMap[int]:
    """Source category id to target category id, derived from every product's categories."""

    categories = IdentityMap[int]("category")
    for product in products:
        for ref in product.categories:
            if ref.id <= 0:
                continue
            key = taxonomy_key(ref.slug, ref.name)
            if key is None:
                continue
            target_id = taxonomies.get((TaxonomyResource.CATEGORIES.value, key))
            if target_id is not None:
                categories.record(ref.id, target_id)
    log.debug("Derived %d category id mappings", len(categories))
    return categories
