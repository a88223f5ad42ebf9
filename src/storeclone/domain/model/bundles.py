"""Plugin and theme bundles exported next to a snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class BundleScope(StrEnum):
    PLUGINS = "plugins"
    THEMES = "themes"

    @property
    def singular(self) -> str:
        return self.value.removesuffix("s")


MANIFEST_FILE_NAME = "manifest.json"
OPTIONS_FILE_NAME = "options.json"
ARCHIVE_FILE_NAME = "archive.zip"


@dataclass(slots=True, frozen=True)
class ExtensionBundle:
    slug: str
    directory: Path

    @property
    def manifest_path(self) -> Path:
        return self.directory / MANIFEST_FILE_NAME

    @property
    def options_path(self) -> Path:
        return self.directory / OPTIONS_FILE_NAME

    @property
    def archive_path(self) -> Path:
        return self.directory / ARCHIVE_FILE_NAME
