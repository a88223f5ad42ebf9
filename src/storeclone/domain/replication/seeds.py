"""Pure scan of the catalog for taxonomy and attribute definitions to ensure."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .keys import attribute_key, attribute_slug, attribute_value, first_non_blank, taxonomy_key

if TYPE_CHECKING:
    from collections.abc import Iterable

    from storeclone.domain.model import Product, TaxonomyRef


@dataclass(slots=True, frozen=True)
class TaxonomySeed:
    key: str
    name: str
    slug: str


@dataclass(slots=True, frozen=True)
class AttributeSeed:
    key: str
    name: str
    slug: str
    terms: tuple[str, ...] = ()


def collect_taxonomy_seeds(refs: Iterable[TaxonomyRef]) -> tuple[TaxonomySeed, ...]:
    """One seed per distinct key; the first display name seen wins."""

    seeds: dict[str, TaxonomySeed] = {}
    for ref in refs:
        key = taxonomy_key(ref.slug, ref.name)
        if key is None or key in seeds:
            continue
        seeds[key] = TaxonomySeed(key=key, name=first_non_blank(ref.name) or key, slug=key)
    return tuple(seeds.values())


def collect_category_seeds(products: Iterable[Product]) -> tuple[TaxonomySeed, ...]:
    return collect_taxonomy_seeds(ref for product in products for ref in product.categories)


def collect_tag_seeds(products: Iterable[Product]) -> tuple[TaxonomySeed, ...]:
    return collect_taxonomy_seeds(ref for product in products for ref in product.tags)


def collect_attribute_seeds(products: Iterable[Product]) -> tuple[AttributeSeed, ...]:
    names: dict[str, str] = {}
    terms: dict[str, dict[str, str]] = {}
    for product in products:
        for attribute in product.attributes:
            key = attribute_key(attribute)
            if key is None:
                continue
            if key not in names:
                names[key] = first_non_blank(attribute.name, attribute.attribute_key) or key
                terms[key] = {}
            value = attribute_value(attribute)
            if value is not None:
                terms[key].setdefault(value.casefold(), value)

    seeds: list[AttributeSeed] = []
    for key, name in names.items():
        seeds.append(
            AttributeSeed(
                key=key,
                name=name,
                slug=attribute_slug(key) or key,
                terms=tuple(terms[key].values()),
            )
        )
    return tuple(seeds)
