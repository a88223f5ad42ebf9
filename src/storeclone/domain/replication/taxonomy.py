"""Ensure categories, tags, attributes and attribute terms exist on the target."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from storeclone.domain.ports import TargetStoreError

from .keys import normalize_slug
from .payloads import TaxonomyPayload
from .report import Outcome, ReportKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .context import ReplicationContext
    from .seeds import AttributeSeed, TaxonomySeed

log = logging.getLogger(__name__)


class TaxonomyResource(StrEnum):
    CATEGORIES = "categories"
    TAGS = "tags"
    ATTRIBUTES = "attributes"

    @property
    def singular(self) -> str:
        return "category" if self is TaxonomyResource.CATEGORIES else self.value.removesuffix("s")


_REPORT_KINDS = {
    TaxonomyResource.CATEGORIES: ReportKind.CATEGORY,
    TaxonomyResource.TAGS: ReportKind.TAG,
    TaxonomyResource.ATTRIBUTES: ReportKind.ATTRIBUTE,
}


@dataclass(slots=True)
class TaxonomyReconciler:
    context: ReplicationContext

    async def ensure_all(self, resource: TaxonomyResource, seeds: Iterable[TaxonomySeed]) -> None:
        for seed in seeds:
            self.context.checkpoint(resource.value)
            target_id = await self.ensure_taxonomy(resource, seed)
            self.context.identity.taxonomies.record((resource.value, seed.key), target_id)

    async def ensure_taxonomy(self, resource: TaxonomyResource, seed: TaxonomySeed) -> int:
        """Return the target id for ``seed``, creating the term when the slug is unknown."""

        store = self.context.store
        existing = await store.find_taxonomy_by_slug(resource.value, seed.slug)
        if existing is not None:
            self.context.report.record(_REPORT_KINDS[resource], Outcome.SKIPPED)
            return existing

        self.context.progress(f"Creating {resource.singular} '{seed.name}'…")
        payload = TaxonomyPayload(name=seed.name, slug=seed.slug).to_json()
        try:
            created = await store.create_taxonomy(resource.value, payload)
        except TargetStoreError as exc:
            if not exc.is_conflict:
                raise
            self.context.progress(
                f"{resource.singular.capitalize()} '{seed.name}' may already exist "
                f"({exc.status_code}). Retrying fetch."
            )
            existing = await store.find_taxonomy_by_slug(resource.value, seed.slug)
            if existing is None:
                raise
            self.context.report.record(_REPORT_KINDS[resource], Outcome.SKIPPED)
            return existing
        self.context.report.record(_REPORT_KINDS[resource], Outcome.CREATED)
        return created

    async def ensure_attributes(self, seeds: Iterable[AttributeSeed]) -> None:
        for seed in seeds:
            self.context.checkpoint(TaxonomyResource.ATTRIBUTES.value)
            attribute_id = await self.ensure_attribute(seed)
            self.context.identity.taxonomies.record(
                (TaxonomyResource.ATTRIBUTES.value, seed.key), attribute_id
            )
            if seed.terms:
                await self.ensure_attribute_terms(attribute_id, seed)

    async def _find_attribute(self, slug: str) -> int | None:
        for attribute in await self.context.store.list_attributes():
            if attribute.slug is not None and attribute.slug.casefold() == slug.casefold():
                return attribute.id
        return None

    async def ensure_attribute(self, seed: AttributeSeed) -> int:
        existing = await self._find_attribute(seed.slug)
        if existing is not None:
            self.context.report.record(ReportKind.ATTRIBUTE, Outcome.SKIPPED)
            return existing

        self.context.progress(f"Creating attribute '{seed.name}'…")
        payload = TaxonomyPayload(name=seed.name, slug=seed.slug).to_json()
        try:
            created = await self.context.store.create_attribute(payload)
        except TargetStoreError as exc:
            if not exc.is_conflict:
                raise
            self.context.progress(
                f"Attribute '{seed.name}' create returned {exc.status_code}. Retrying fetch."
            )
            existing = await self._find_attribute(seed.slug)
            if existing is None:
                raise
            self.context.report.record(ReportKind.ATTRIBUTE, Outcome.SKIPPED)
            return existing
        self.context.report.record(ReportKind.ATTRIBUTE, Outcome.CREATED)
        return created

    async def ensure_attribute_terms(self, attribute_id: int, seed: AttributeSeed) -> None:
        """Create the terms of ``seed`` missing on the target.

        A rejected create is reported and skipped without re-fetching.
        """

        store = self.context.store
        for term in seed.terms:
            self.context.checkpoint(ReportKind.ATTRIBUTE_TERM.value)
            slug = normalize_slug(term)
            if slug is None:
                continue
            existing = await store.list_attribute_terms(attribute_id)
            if any(item.slug and item.slug.casefold() == slug for item in existing):
                self.context.report.record(ReportKind.ATTRIBUTE_TERM, Outcome.SKIPPED)
                continue

            self.context.progress(f"Creating attribute term '{term}' for '{seed.name}'…")
            payload = TaxonomyPayload(name=term, slug=slug).to_json()
            try:
                await store.create_attribute_term(attribute_id, payload)
            except TargetStoreError as exc:
                if not exc.is_conflict:
                    raise
                log.debug("Term %s of attribute %s rejected: %s", slug, attribute_id, exc.body)
                self.context.progress(
                    f"Attribute term '{term}' may already exist ({exc.status_code})."
                )
                self.context.report.record(ReportKind.ATTRIBUTE_TERM, Outcome.SKIPPED)
                continue
            self.context.report.record(ReportKind.ATTRIBUTE_TERM, Outcome.CREATED)
