from __future__ import annotations

import asyncio
import threading

import pytest

from storeclone.domain.model import (
    SourceCatalogSnapshot,
    StoreConfiguration,
    StoreSetting,
    Subscription,
    TaxonomyRef,
    TextSetting,
)
from storeclone.domain.replication import (
    ReplicationCancelledError,
    ReplicationEngine,
    ReplicationReport,
    ReportKind,
)
from tests.helpers.catalog import color, make_coupon, make_customer, make_order, make_product
from tests.support.fake_store import FakeTargetStore

SHIRTS = TaxonomyRef(id=5, name="Shirts", slug="shirts")
CURRENCY = StoreSetting(id="woocommerce_currency", group_id="general", value=TextSetting("EUR"))


def _catalog_snapshot() -> SourceCatalogSnapshot:
    return SourceCatalogSnapshot(
        products=[
            make_product(1, categories=[SHIRTS], attributes=[color("Red")]),
            make_product(
                2,
                name="Oxford Shirt",
                categories=[SHIRTS],
                tags=[TaxonomyRef(name="Cotton")],
                attributes=[color("red "), color("Blue")],
            ),
        ],
        customers=[make_customer(7)],
        coupons=[make_coupon(product_ids=[1, 99], product_categories=[5])],
    )


def _run(
    store: FakeTargetStore,
    snapshot: SourceCatalogSnapshot,
    progress: list[str] | None = None,
    cancel_event: threading.Event | None = None,
) -> ReplicationReport:
    sink = progress.append if progress is not None else (lambda _message: None)
    engine = ReplicationEngine(store=store, progress=sink, cancel_event=cancel_event)
    return asyncio.run(engine.run(snapshot))


def test_full_run_provisions_in_dependency_order() -> None:
    store = FakeTargetStore()
    snapshot = _catalog_snapshot()
    snapshot.orders = [make_order(product_id=1, customer_id=7, coupon_code="SUMMER10")]

    report = _run(store, snapshot)

    assert list(dict.fromkeys(store.creates)) == [
        "create_taxonomy",
        "create_attribute",
        "create_attribute_term",
        "create_product",
        "create_customer",
        "create_coupon",
        "create_order",
    ]
    (coupon_id,) = store.coupons
    (category_id,) = store.taxonomies["categories"]
    coupon = store.coupons[coupon_id]
    assert coupon["product_categories"] == [category_id]
    assert len(coupon["product_ids"]) == 1
    (order,) = store.orders.values()
    assert order.payload["coupon_lines"] == [
        {"code": "SUMMER10", "discount": "2.00", "coupon_id": coupon_id}
    ]
    assert report.identity_sizes["products"] == 2
    assert report.for_kind(ReportKind.ORDER).created == 1


def test_second_run_creates_nothing() -> None:
    store = FakeTargetStore()
    snapshot = _catalog_snapshot()

    _run(store, snapshot)
    counts_after_first = (
        len(store.products),
        len(store.customers),
        len(store.coupons),
        len(store.attributes),
        {resource: len(terms) for resource, terms in store.taxonomies.items()},
        {attribute: len(terms) for attribute, terms in store.attribute_terms.items()},
    )
    store.calls.clear()

    report = _run(store, snapshot)

    assert store.creates == []
    assert counts_after_first == (
        len(store.products),
        len(store.customers),
        len(store.coupons),
        len(store.attributes),
        {resource: len(terms) for resource, terms in store.taxonomies.items()},
        {attribute: len(terms) for attribute, terms in store.attribute_terms.items()},
    )
    assert all(counts.created == 0 for counts in report.counts.values())
    assert report.for_kind(ReportKind.PRODUCT).updated == 2


def test_attribute_variants_collapse_to_one_option() -> None:
    store = FakeTargetStore()

    _run(store, _catalog_snapshot())

    (attribute_id,) = store.attributes
    assert [term["name"] for term in store.attribute_terms[attribute_id].values()] == [
        "Red",
        "Blue",
    ]
    second = next(p for p in store.products.values() if p["name"] == "Oxford Shirt")
    assert second["attributes"] == [{"id": attribute_id, "options": ["red", "Blue"]}]


def test_non_latin_category_is_created_once_and_linked() -> None:
    store = FakeTargetStore()
    shoes = TaxonomyRef(id=9, name="Обувь")
    snapshot = SourceCatalogSnapshot(products=[make_product(3, name="Ботинки", categories=[shoes])])

    _run(store, snapshot)
    store.calls.clear()
    _run(store, snapshot)

    (category_id,) = store.taxonomies["categories"]
    assert store.taxonomies["categories"][category_id]["slug"] == "обувь"
    (product,) = store.products.values()
    assert product["categories"] == [{"id": category_id}]
    assert store.creates == []


def test_empty_snapshot_does_nothing() -> None:
    store = FakeTargetStore()
    progress: list[str] = []
    snapshot = SourceCatalogSnapshot(configuration=StoreConfiguration(store_settings=[CURRENCY]))

    report = _run(store, snapshot, progress)

    assert report.empty
    assert store.calls == []
    assert progress == ["No artifacts to provision."]


def test_configuration_applied_before_catalog() -> None:
    store = FakeTargetStore()
    snapshot = _catalog_snapshot()
    snapshot.configuration = StoreConfiguration(store_settings=[CURRENCY])

    _run(store, snapshot)

    assert store.calls[0] == "update_settings_group"


def test_subscriptions_are_reported_and_skipped() -> None:
    store = FakeTargetStore()
    progress: list[str] = []
    snapshot = SourceCatalogSnapshot(subscriptions=[Subscription(id=1), Subscription(id=2)])

    report = _run(store, snapshot, progress)

    assert store.calls == []
    assert progress == [
        "Skipping 2 subscriptions (provisioning not implemented).",
        "Provisioning complete.",
    ]
    assert report.for_kind(ReportKind.SUBSCRIPTION).skipped == 2


def test_order_skip_does_not_touch_the_store() -> None:
    store = FakeTargetStore()
    progress: list[str] = []

    _run(store, SourceCatalogSnapshot(orders=[make_order(product_id=1)]), progress)

    assert store.calls == []
    assert progress == [
        "Skipping order '1042': no line items could be mapped.",
        "Provisioning complete.",
    ]


def test_cancellation_stops_before_next_entity() -> None:
    store = FakeTargetStore()
    cancel = threading.Event()
    progress: list[str] = []

    def cancel_after_first_product(message: str) -> None:
        progress.append(message)
        if message.startswith("Creating product"):
            cancel.set()

    engine = ReplicationEngine(
        store=store, progress=cancel_after_first_product, cancel_event=cancel
    )

    with pytest.raises(ReplicationCancelledError) as excinfo:
        asyncio.run(engine.run(_catalog_snapshot()))

    assert excinfo.value.stage == "products"
    assert store.count("create_product") == 1
    assert store.customers == {}
