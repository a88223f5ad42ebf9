from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from storeclone.adapters.snapshot import SnapshotLoadError, discover_bundles, load_snapshot
from storeclone.app import replicate_snapshot, upload_bundles
from storeclone.config import ConfigurationError, configure_logging, get_target_config
from storeclone.domain.model import BundleScope

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Replicate a captured storefront into WooCommerce")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log request and matching details (DEBUG level)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    replicate = subparsers.add_parser(
        "replicate",
        help="Provision configuration, taxonomies, products, customers, coupons and orders",
    )
    replicate.add_argument("snapshot_dir", type=Path, help="Directory holding the snapshot files")
    replicate.add_argument(
        "--with-bundles",
        action="store_true",
        help="Also upload plugin and theme bundles found in the snapshot",
    )

    for scope in BundleScope:
        bundles = subparsers.add_parser(scope.value, help=f"Upload {scope.singular} bundles")
        bundles.add_argument(
            "snapshot_dir",
            type=Path,
            help=f"Directory holding a {scope.value}/ folder of bundles",
        )

    return parser.parse_args(list(argv))


def _run_replicate(args: argparse.Namespace) -> None:
    config = get_target_config()
    snapshot = load_snapshot(args.snapshot_dir)
    replicate_snapshot(snapshot, config=config)
    if not args.with_bundles:
        return
    for scope, bundles in (
        (BundleScope.PLUGINS, snapshot.plugin_bundles),
        (BundleScope.THEMES, snapshot.theme_bundles),
    ):
        upload_bundles(bundles, scope=scope, config=config)


def _run_bundles(args: argparse.Namespace, scope: BundleScope) -> None:
    config = get_target_config()
    directory: Path = args.snapshot_dir.expanduser()
    if not directory.is_dir():
        raise SnapshotLoadError(directory, "snapshot directory not found")
    upload_bundles(discover_bundles(directory, scope), scope=scope, config=config)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
    load_dotenv()

    try:
        if parsed_args.command == "replicate":
            _run_replicate(parsed_args)
        else:
            _run_bundles(parsed_args, BundleScope(parsed_args.command))
    except (ValueError, ConfigurationError, SnapshotLoadError):
        log.exception("Invalid configuration or snapshot")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during replication")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
