"""Read a snapshot directory into a ``SourceCatalogSnapshot``."""

from __future__ import annotations

from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from storeclone.domain.model import BundleScope, ExtensionBundle, SourceCatalogSnapshot

from .schema import (
    SnapshotConfiguration,
    SnapshotCoupon,
    SnapshotCustomer,
    SnapshotOrder,
    SnapshotProduct,
    SnapshotSubscription,
)
from .translator import (
    to_configuration,
    to_coupon,
    to_customer,
    to_order,
    to_product,
    to_subscription,
)

if TYPE_CHECKING:
    from storeclone.domain.model import StoreConfiguration

log = getLogger(__name__)

PRODUCTS_FILE = "products"
CUSTOMERS_FILE = "customers"
COUPONS_FILE = "coupons"
ORDERS_FILE = "orders"
SUBSCRIPTIONS_FILE = "subscriptions"
CONFIGURATION_FILE = "configuration.json"


class SnapshotLoadError(RuntimeError):
    """Raised when a snapshot file cannot be read or does not match its schema."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"{path.name}: {reason}")


def _read_lines[T](path: Path, adapter: TypeAdapter[T]) -> list[T]:
    records: list[T] = []
    with path.open("rb") as handle:
        for number, line in enumerate(handle, start=1):
            if not line.strip():
                continue
            try:
                records.append(adapter.validate_json(line))
            except ValidationError as exc:
                raise SnapshotLoadError(path, f"line {number}: {exc}") from exc
    return records


def _read_records[T](directory: Path, stem: str, item: type[T]) -> list[T]:
    """Records from ``<stem>.json`` (array) or ``<stem>.jsonl`` (one object per line)."""

    array_path = directory / f"{stem}.json"
    lines_path = directory / f"{stem}.jsonl"
    if array_path.is_file():
        path = array_path
    elif lines_path.is_file():
        path = lines_path
    else:
        log.debug("No %s file in %s", stem, directory)
        return []

    try:
        if path is lines_path:
            return _read_lines(path, TypeAdapter(item))
        return TypeAdapter(list[item]).validate_json(path.read_bytes())
    except ValidationError as exc:
        raise SnapshotLoadError(path, str(exc)) from exc
    except OSError as exc:
        raise SnapshotLoadError(path, str(exc)) from exc


def _read_configuration(directory: Path) -> StoreConfiguration | None:
    path = directory / CONFIGURATION_FILE
    if not path.is_file():
        return None
    try:
        payload = SnapshotConfiguration.model_validate_json(path.read_bytes())
    except ValidationError as exc:
        raise SnapshotLoadError(path, str(exc)) from exc
    except OSError as exc:
        raise SnapshotLoadError(path, str(exc)) from exc
    return to_configuration(payload)


def discover_bundles(directory: Path, scope: BundleScope) -> list[ExtensionBundle]:
    """One bundle per subdirectory of ``<directory>/<scope>``, ordered by slug."""

    root = directory / scope.value
    if not root.is_dir():
        return []
    return [
        ExtensionBundle(slug=child.name, directory=child)
        for child in sorted(root.iterdir())
        if child.is_dir()
    ]


def load_snapshot(directory: str | Path) -> SourceCatalogSnapshot:
    """Load every known snapshot file below ``directory``; missing files are empty."""

    root = Path(directory).expanduser()
    if not root.is_dir():
        raise SnapshotLoadError(root, "snapshot directory not found")

    snapshot = SourceCatalogSnapshot(
        products=[
            to_product(item, root) for item in _read_records(root, PRODUCTS_FILE, SnapshotProduct)
        ],
        customers=[
            to_customer(item) for item in _read_records(root, CUSTOMERS_FILE, SnapshotCustomer)
        ],
        coupons=[to_coupon(item) for item in _read_records(root, COUPONS_FILE, SnapshotCoupon)],
        orders=[to_order(item) for item in _read_records(root, ORDERS_FILE, SnapshotOrder)],
        subscriptions=[
            to_subscription(item)
            for item in _read_records(root, SUBSCRIPTIONS_FILE, SnapshotSubscription)
        ],
        configuration=_read_configuration(root),
        plugin_bundles=discover_bundles(root, BundleScope.PLUGINS),
        theme_bundles=discover_bundles(root, BundleScope.THEMES),
    )
    log.info(
        "Loaded snapshot from %s: %d products, %d customers, %d coupons, %d orders",
        root,
        len(snapshot.products),
        len(snapshot.customers),
        len(snapshot.coupons),
        len(snapshot.orders),
    )
    return snapshot
