from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pytest

from storeclone.config import MissingConfigurationError
from storeclone.domain.model import BundleScope, ExtensionBundle, SourceCatalogSnapshot
from storeclone.domain.replication import ReplicationReport
from storeclone.ui import cli as cli_module

if TYPE_CHECKING:
    from pathlib import Path

    from storeclone.config import TargetStoreConfig


@dataclass
class RecordedCalls:
    replicated: list[tuple[SourceCatalogSnapshot, dict[str, object]]] = field(
        default_factory=list[tuple[SourceCatalogSnapshot, dict[str, object]]]
    )
    uploaded: list[tuple[list[ExtensionBundle], dict[str, object]]] = field(
        default_factory=list[tuple[list[ExtensionBundle], dict[str, object]]]
    )


@pytest.fixture
def patched_cli(monkeypatch: pytest.MonkeyPatch, target_config: TargetStoreConfig) -> RecordedCalls:
    calls = RecordedCalls()

    def fake_replicate(snapshot: SourceCatalogSnapshot, **kwargs: object) -> ReplicationReport:
        calls.replicated.append((snapshot, kwargs))
        return ReplicationReport()

    def fake_upload(bundles: list[ExtensionBundle], **kwargs: object) -> ReplicationReport:
        calls.uploaded.append((list(bundles), kwargs))
        return ReplicationReport()

    monkeypatch.setattr(cli_module, "get_target_config", lambda: target_config)
    monkeypatch.setattr(cli_module, "replicate_snapshot", fake_replicate)
    monkeypatch.setattr(cli_module, "upload_bundles", fake_upload)
    monkeypatch.setattr(cli_module, "load_dotenv", lambda: False)
    return calls


def test_replicate_loads_snapshot_and_runs(
    patched_cli: RecordedCalls,
    target_config: TargetStoreConfig,
    tmp_path: Path,
) -> None:
    cli_module.main(["replicate", str(tmp_path)])

    ((snapshot, kwargs),) = patched_cli.replicated
    assert isinstance(snapshot, SourceCatalogSnapshot)
    assert snapshot.is_empty
    assert kwargs == {"config": target_config}
    assert patched_cli.uploaded == []


def test_replicate_with_bundles_uploads_both_scopes(
    patched_cli: RecordedCalls, tmp_path: Path
) -> None:
    plugin = tmp_path / "plugins" / "woo-extras"
    plugin.mkdir(parents=True)
    (plugin / "manifest.json").write_text("{}", encoding="utf-8")

    cli_module.main(["replicate", str(tmp_path), "--with-bundles"])

    scopes = [kwargs["scope"] for _bundles, kwargs in patched_cli.uploaded]
    assert scopes == [BundleScope.PLUGINS, BundleScope.THEMES]
    plugin_bundles, _kwargs = patched_cli.uploaded[0]
    assert [bundle.slug for bundle in plugin_bundles] == ["woo-extras"]


def test_bundle_command_uploads_discovered_bundles(
    patched_cli: RecordedCalls, tmp_path: Path
) -> None:
    theme = tmp_path / "themes" / "storefront-child"
    theme.mkdir(parents=True)
    (theme / "archive.zip").write_bytes(b"PK\x03\x04")

    cli_module.main(["themes", str(tmp_path)])

    ((bundles, kwargs),) = patched_cli.uploaded
    assert [bundle.slug for bundle in bundles] == ["storefront-child"]
    assert kwargs["scope"] is BundleScope.THEMES
    assert patched_cli.replicated == []


@pytest.mark.parametrize("command", ["replicate", "plugins"])
def test_missing_snapshot_directory_exits_with_usage_code(
    patched_cli: RecordedCalls, tmp_path: Path, command: str
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([command, str(tmp_path / "absent")])

    assert excinfo.value.code == 2
    assert patched_cli.replicated == []
    assert patched_cli.uploaded == []


def test_missing_configuration_exits_with_usage_code(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    def missing() -> TargetStoreConfig:
        raise MissingConfigurationError(["STORECLONE_BASE_URL"])

    monkeypatch.setattr(cli_module, "get_target_config", missing)
    monkeypatch.setattr(cli_module, "load_dotenv", lambda: False)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["replicate", str(tmp_path)])

    assert excinfo.value.code == 2


def test_unexpected_failure_exits_with_error_code(
    patched_cli: RecordedCalls,
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    def broken(_snapshot: SourceCatalogSnapshot, **_kwargs: object) -> ReplicationReport:
        raise RuntimeError("store went away")

    monkeypatch.setattr(cli_module, "replicate_snapshot", broken)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["replicate", str(tmp_path)])

    assert excinfo.value.code == 1


def test_unknown_command_is_rejected_by_parser() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["mirror"])

    assert excinfo.value.code == 2
