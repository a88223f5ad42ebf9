"""Upload local product images once per run."""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from storeclone.domain.ports import TargetStoreError

from .report import Outcome, ReportKind

if TYPE_CHECKING:
    from .context import ReplicationContext

log = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def guess_content_type(path: Path) -> str:
    content_type, _encoding = mimetypes.guess_type(path.name)
    return content_type or DEFAULT_CONTENT_TYPE


@dataclass(slots=True)
class MediaUploader:
    """Memoizes uploads by absolute path so each file is transferred at most once."""

    context: ReplicationContext
    _uploaded: dict[Path, int] = field(default_factory=dict[Path, int])

    async def upload(self, path: str | Path) -> int | None:
        resolved = Path(path).expanduser().absolute()
        cached = self._uploaded.get(resolved)
        if cached is not None:
            return cached

        if not resolved.is_file():
            self.context.progress(f"Image file missing: {path}")
            self.context.report.record(ReportKind.MEDIA, Outcome.SKIPPED)
            return None

        self.context.progress(f"Uploading media {resolved.name}…")
        try:
            media_id = await self.context.store.upload_media(resolved, guess_content_type(resolved))
        except (TargetStoreError, OSError) as exc:
            log.warning("Media upload of %s failed: %s", resolved, exc)
            self.context.progress(f"Media upload failed: {exc}")
            self.context.report.record(ReportKind.MEDIA, Outcome.SKIPPED)
            return None

        self._uploaded[resolved] = media_id
        self.context.report.record(ReportKind.MEDIA, Outcome.CREATED)
        return media_id

    def __len__(self) -> int:
        return len(self._uploaded)
