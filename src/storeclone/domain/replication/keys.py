"""Natural key derivation used to match snapshot entities against the target."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from storeclone.domain.model import ProductAttribute

_NON_ALNUM = re.compile(r"[\W_]+")
_ATTRIBUTE_TAXONOMY_PREFIX = "pa_"


def normalize_slug(value: str | None) -> str | None:
    """Lowercase ``value`` and collapse each run of non-word characters into one dash.

    Letters and digits of any script are kept. Returns ``None`` for blank input
    or when no letter or digit survives.
    """

    if value is None or not value.strip():
        return None
    slug = _NON_ALNUM.sub("-", value.strip().lower()).strip("-")
    return slug or None


def taxonomy_key(slug: str | None, name: str | None) -> str | None:
    return normalize_slug(slug) or normalize_slug(name)


def attribute_key(attribute: ProductAttribute) -> str | None:
    for candidate in (attribute.attribute_key, attribute.taxonomy):
        if candidate and candidate.strip():
            return candidate.strip().lower()
    return normalize_slug(attribute.name)


def attribute_slug(key: str) -> str | None:
    """Slug of the attribute definition on the target (``pa_color`` becomes ``color``)."""

    if key.startswith(_ATTRIBUTE_TAXONOMY_PREFIX) and len(key) > len(_ATTRIBUTE_TAXONOMY_PREFIX):
        return key[len(_ATTRIBUTE_TAXONOMY_PREFIX) :]
    return normalize_slug(key)


def attribute_value(attribute: ProductAttribute) -> str | None:
    for candidate in (attribute.option, attribute.value, attribute.term, attribute.slug):
        if candidate and candidate.strip():
            return candidate.strip()
    return None


def first_non_blank(*values: str | None) -> str | None:
    for value in values:
        if value and value.strip():
            return value.strip()
    return None
