"""Catalog entities captured from the source storefront."""

from __future__ import annotations

from dataclasses import dataclass, field

from storeclone.domain.model.primitives import SourceId  # noqa: TC001


@dataclass(slots=True, frozen=True)
class PriceInfo:
    regular_price: str | None = None
    sale_price: str | None = None
    price: str | None = None
    currency_code: str | None = None
    currency_minor_unit: int | None = None


@dataclass(slots=True, frozen=True)
class TaxonomyRef:
    """Category or tag reference as the source store reported it."""

    id: SourceId = 0
    name: str | None = None
    slug: str | None = None


@dataclass(slots=True, frozen=True)
class ProductAttribute:
    """One attribute value on a product.

    Store API and REST exports disagree on where the value lives, so every
    candidate field is kept and resolved later in priority order.
    """

    name: str | None = None
    taxonomy: str | None = None
    attribute_key: str | None = None  # e.g. "pa_color"
    option: str | None = None
    value: str | None = None
    term: str | None = None
    slug: str | None = None


@dataclass(slots=True, frozen=True)
class ProductImage:
    id: int = 0
    src: str | None = None
    alt: str | None = None


@dataclass(slots=True, kw_only=True)
class Product:
    id: SourceId = 0
    name: str | None = None
    slug: str | None = None
    sku: str | None = None
    type: str | None = None
    description: str | None = None
    short_description: str | None = None
    prices: PriceInfo | None = None
    stock_status: str | None = None
    is_in_stock: bool | None = None
    parent_id: SourceId | None = None
    categories: list[TaxonomyRef] = field(default_factory=list["TaxonomyRef"])
    tags: list[TaxonomyRef] = field(default_factory=list["TaxonomyRef"])
    attributes: list[ProductAttribute] = field(default_factory=list["ProductAttribute"])
    images: list[ProductImage] = field(default_factory=list["ProductImage"])
    local_image_paths: list[str] = field(default_factory=list[str])

    @property
    def label(self) -> str:
        return self.name or self.slug or str(self.id)
