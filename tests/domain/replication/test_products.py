from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from storeclone.domain.model import ProductImage, TaxonomyRef
from storeclone.domain.replication import ReportKind
from storeclone.domain.replication.media import MediaUploader
from storeclone.domain.replication.products import (
    ProductReconciler,
    attribute_assignments,
    build_category_id_map,
)
from tests.helpers.catalog import color, make_product

if TYPE_CHECKING:
    from pathlib import Path

    from storeclone.domain.replication import ReplicationContext
    from tests.support.fake_store import FakeTargetStore


def _reconciler(context: ReplicationContext) -> ProductReconciler:
    return ProductReconciler(context, MediaUploader(context))


def test_sku_match_wins_over_slug(
    context: ReplicationContext, fake_store: FakeTargetStore, progress_messages: list[str]
) -> None:
    fake_store.products[500] = {"sku": "SHIRT-1", "slug": "old-slug"}
    fake_store.products[501] = {"sku": "OTHER", "slug": "linen-shirt"}
    product = make_product(1, sku="SHIRT-1", slug="Linen Shirt")

    target_id = asyncio.run(_reconciler(context).reconcile(product))

    assert target_id == 500
    assert fake_store.count("find_product_by_slug") == 0
    assert fake_store.count("create_product") == 0
    assert progress_messages == ["Updating product 'Linen Shirt' (ID 500)."]
    assert fake_store.products[500]["slug"] == "linen-shirt"


def test_slug_is_normalized_before_lookup(
    context: ReplicationContext, fake_store: FakeTargetStore
) -> None:
    fake_store.products[77] = {"slug": "linen-shirt"}
    product = make_product(1, sku="UNKNOWN", slug="Linen  Shirt!")

    assert asyncio.run(_reconciler(context).reconcile(product)) == 77
    assert fake_store.calls[:2] == ["find_product_by_sku", "find_product_by_slug"]


def test_new_product_is_created_and_recorded(
    context: ReplicationContext, fake_store: FakeTargetStore, progress_messages: list[str]
) -> None:
    asyncio.run(_reconciler(context).reconcile_all([make_product(3, name="Wool Scarf")]))

    (created_id,) = fake_store.products
    assert context.identity.products.get(3) == created_id
    assert progress_messages == ["Creating product 'Wool Scarf'."]
    assert context.report.for_kind(ReportKind.PRODUCT).created == 1
    payload = fake_store.products[created_id]
    assert payload["regular_price"] == "19.99"
    assert payload["type"] == "simple"
    assert payload["status"] == "publish"


def test_unmapped_category_is_dropped_from_payload(context: ReplicationContext) -> None:
    context.identity.taxonomies.record(("categories", "shirts"), 12)
    product = make_product(
        categories=[TaxonomyRef(id=1, name="Shirts"), TaxonomyRef(id=2, name="Unknown")]
    )

    payload = asyncio.run(_reconciler(context).build_payload(product)).to_json()

    assert payload["categories"] == [{"id": 12}]
    assert "tags" not in payload


def test_attribute_values_grouped_and_deduplicated(context: ReplicationContext) -> None:
    context.identity.taxonomies.record(("attributes", "pa_color"), 4)
    product = make_product(attributes=[color("Red"), color("red "), color("Size", key="pa_size")])

    assignments = attribute_assignments(product, context.identity.taxonomies)

    assert [(item.id, item.options) for item in assignments] == [(4, ["Red"])]


def test_same_local_image_uploaded_once(
    context: ReplicationContext, fake_store: FakeTargetStore, tmp_path: Path
) -> None:
    image = tmp_path / "shirt.jpg"
    image.write_bytes(b"\xff\xd8\xff")
    products = [
        make_product(1, local_image_paths=[str(image)]),
        make_product(2, local_image_paths=[str(image), " "]),
    ]

    asyncio.run(_reconciler(context).reconcile_all(products))

    assert fake_store.count("upload_media") == 1
    (media_id,) = fake_store.media
    assert [payload["images"] for payload in fake_store.products.values()] == [
        [{"id": media_id}],
        [{"id": media_id}],
    ]


def test_missing_local_image_falls_back_to_remote_images(
    context: ReplicationContext,
    fake_store: FakeTargetStore,
    progress_messages: list[str],
    tmp_path: Path,
) -> None:
    product = make_product(local_image_paths=[str(tmp_path / "gone.png")])
    product.images = [ProductImage(src="https://cdn.example.test/a.png", alt="Front")]

    asyncio.run(_reconciler(context).reconcile(product))

    assert fake_store.count("upload_media") == 0
    (payload,) = fake_store.products.values()
    assert payload["images"] == [{"src": "https://cdn.example.test/a.png", "alt": "Front"}]
    assert f"Image file missing: {tmp_path / 'gone.png'}" in progress_messages


def test_failed_upload_does_not_abort_product(
    context: ReplicationContext,
    fake_store: FakeTargetStore,
    progress_messages: list[str],
    tmp_path: Path,
) -> None:
    image = tmp_path / "shirt.webp"
    image.write_bytes(b"RIFF")
    fake_store.fail_once("upload_media", 413, "too large")

    asyncio.run(_reconciler(context).reconcile(make_product(local_image_paths=[str(image)])))

    assert fake_store.count("create_product") == 1
    assert any(message.startswith("Media upload failed:") for message in progress_messages)
    assert context.report.for_kind(ReportKind.MEDIA).skipped == 1


def test_category_id_map_skips_unknown_and_zero_ids(context: ReplicationContext) -> None:
    taxonomies = context.identity.taxonomies
    taxonomies.record(("categories", "shirts"), 12)
    products = [
        make_product(
            categories=[
                TaxonomyRef(id=5, name="Shirts", slug="shirts"),
                TaxonomyRef(id=0, name="Shirts"),
                TaxonomyRef(id=6, name="Unknown"),
            ]
        )
    ]

    categories = build_category_id_map(products, taxonomies)

    assert categories.items() == [(5, 12)]
