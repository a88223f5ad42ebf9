"""Upload exported plugin and theme bundles to the companion install endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from storeclone.domain.model import BundleScope
from storeclone.domain.ports import BundleUpload, TargetStoreError

from .report import Outcome, ReportKind

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from storeclone.domain.model import ExtensionBundle

    from .context import ReplicationContext

log = logging.getLogger(__name__)


def install_endpoints(scope: BundleScope) -> tuple[str, ...]:
    """Candidate install paths in the order they are tried."""

    return (
        f"/wp-json/wc-scraper/v1/{scope.value}/install",
        f"/?rest_route=/wc-scraper/v1/{scope.value}/install",
    )


def _existing(path: Path) -> Path | None:
    return path if path.is_file() else None


def prepare_upload(bundle: ExtensionBundle) -> BundleUpload | None:
    """Read the bundle files; ``None`` when the directory holds none of them."""

    options = _existing(bundle.options_path)
    manifest = _existing(bundle.manifest_path)
    archive = _existing(bundle.archive_path)
    if options is None and manifest is None and archive is None:
        return None
    return BundleUpload(
        slug=bundle.slug,
        options_json=options.read_text(encoding="utf-8") if options else None,
        manifest_json=manifest.read_text(encoding="utf-8") if manifest else None,
        archive_path=archive,
    )


@dataclass(slots=True)
class BundleUploader:
    context: ReplicationContext
    scope: BundleScope = BundleScope.PLUGINS

    async def upload_all(self, bundles: Iterable[ExtensionBundle]) -> None:
        pending = list(bundles)
        if not pending:
            self.context.progress(f"No {self.scope.singular} bundles to upload.")
            return
        for bundle in pending:
            self.context.checkpoint(self.scope.value)
            if await self.upload(bundle):
                self.context.report.record(ReportKind.BUNDLE, Outcome.CREATED)
            else:
                self.context.report.record(ReportKind.BUNDLE, Outcome.SKIPPED)

    async def upload(self, bundle: ExtensionBundle) -> bool:
        """Try each install endpoint until one accepts the bundle.

        Returns whether the bundle was installed. Failures are reported and
        never raised.
        """

        scope = self.scope.singular
        if not bundle.directory.is_dir():
            self.context.progress(
                f"Skipping {scope} '{bundle.slug}': directory not found ({bundle.directory})."
            )
            return False

        try:
            upload = prepare_upload(bundle)
        except OSError as exc:
            log.warning("Could not read %s bundle %s: %s", scope, bundle.slug, exc)
            self.context.progress(f"Skipping {scope} '{bundle.slug}': {exc}")
            return False
        if upload is None:
            self.context.progress(
                f"Skipping {scope} '{bundle.slug}': no bundle files found in {bundle.directory}."
            )
            return False

        for endpoint in install_endpoints(self.scope):
            try:
                await self.context.store.install_bundle(endpoint, upload)
            except TargetStoreError as exc:
                if exc.is_not_found:
                    log.debug("Install endpoint %s not available", endpoint)
                    continue
                self.context.progress(f"{scope} upload failed ({exc.status_code}): {exc.body}")
                return False
            self.context.progress(f"Uploaded {scope} bundle '{bundle.slug}'.")
            return True

        self.context.progress(f"No {scope} upload endpoint accepted '{bundle.slug}'.")
        return False
