from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path

import pytest

from storeclone.adapters.snapshot import (
    SnapshotLoadError,
    discover_bundles,
    load_snapshot,
    split_image_paths,
)
from storeclone.domain.model import BundleScope, FlagSetting, NumberSetting, TextSetting


def _write(path: Path, payload: object) -> None:
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_products_are_translated(tmp_path: Path) -> None:
    _write(
        tmp_path / "products.json",
        [
            {
                "id": 17,
                "name": "Linen Shirt",
                "slug": "linen-shirt",
                "sku": None,
                "parent": 0,
                "prices": {
                    "regular_price": "1999",
                    "sale_price": 1499,
                    "currency_code": "EUR",
                    "currency_minor_unit": 2,
                },
                "is_in_stock": True,
                "categories": [{"id": 5, "name": "Shirts", "slug": "shirts"}],
                "attributes": [{"name": "Color", "attribute": "pa_color", "value": "Red"}],
                "images": [{"id": 3, "src": "https://cdn.example.test/a.jpg", "alt": None}],
                "image_file_paths": "media/a.jpg; /abs/b.jpg",
                "unknown_field": {"ignored": True},
            }
        ],
    )

    snapshot = load_snapshot(tmp_path)

    (product,) = snapshot.products
    assert product.id == 17
    assert product.sku is None
    assert product.parent_id == 0
    assert product.prices is not None
    assert product.prices.sale_price == "1499"
    assert product.prices.currency_minor_unit == 2
    assert product.categories[0].slug == "shirts"
    assert product.attributes[0].attribute_key == "pa_color"
    assert product.images[0].alt is None
    assert product.local_image_paths == [str(tmp_path / "media" / "a.jpg"), "/abs/b.jpg"]


def test_jsonl_files_and_missing_files(tmp_path: Path) -> None:
    lines = [
        {"id": 1, "email": "ada@example.test", "meta_data": [{"key": "vip", "value": True}]},
        {"id": 2, "username": "grace", "billing": {"city": "Arlington", "postcode": 22201}},
    ]
    (tmp_path / "customers.jsonl").write_text(
        "\n".join(json.dumps(line) for line in lines) + "\n\n", encoding="utf-8"
    )

    snapshot = load_snapshot(tmp_path)

    assert [customer.id for customer in snapshot.customers] == [1, 2]
    assert snapshot.customers[0].meta_data[0].value is True
    billing = snapshot.customers[1].billing
    assert billing is not None
    assert billing.postcode == "22201"
    assert snapshot.products == []
    assert snapshot.orders == []
    assert snapshot.configuration is None


def test_orders_keep_lines_and_meta(tmp_path: Path) -> None:
    _write(
        tmp_path / "orders.json",
        [
            {
                "id": 21,
                "number": 1042,
                "status": "processing",
                "customer_id": 0,
                "line_items": [{"product_id": 17, "quantity": 2, "total": "39.98"}],
                "coupon_lines": [{"code": "summer10", "discount": "4.00"}],
                "tax_lines": [{"rate_id": 1, "label": "VAT", "compound": False}],
                "meta_data": [{"key": "_source", "value": {"channel": "web"}}],
            }
        ],
    )

    (order,) = load_snapshot(tmp_path).orders

    assert order.number == "1042"
    assert order.line_items[0].quantity == 2
    assert order.coupon_lines[0].code == "summer10"
    assert order.tax_lines[0].compound is False
    assert order.meta_data[0].value == {"channel": "web"}


def test_configuration_is_translated(tmp_path: Path) -> None:
    _write(
        tmp_path / "configuration.json",
        {
            "store_settings": [
                {"id": "woocommerce_currency", "group_id": "general", "value": "EUR"},
                {"id": "woocommerce_calc_taxes", "group_id": "general", "value": True},
                {"id": "", "group_id": "general", "value": "dropped"},
            ],
            "shipping_zones": [
                {
                    "id": 1,
                    "name": "Germany",
                    "locations": [{"code": "DE", "type": "country"}, {"code": "DE"}],
                    "methods": [
                        {
                            "instance_id": 4,
                            "method_id": "flat_rate",
                            "enabled": True,
                            "settings": {"cost": {"id": "cost", "value": 4.9}},
                        }
                    ],
                }
            ],
            "payment_gateways": [{"id": "bacs", "enabled": True}, {"title": "no id"}],
        },
    )

    configuration = load_snapshot(tmp_path).configuration

    assert configuration is not None
    assert [setting.value for setting in configuration.store_settings] == [
        TextSetting("EUR"),
        FlagSetting(True),
    ]
    (zone,) = configuration.shipping_zones
    assert [(location.code, location.type) for location in zone.locations] == [("DE", "country")]
    assert zone.methods[0].settings == {"cost": NumberSetting(Decimal("4.9"))}
    assert [gateway.id for gateway in configuration.payment_gateways] == ["bacs"]


def test_bundles_are_discovered(tmp_path: Path) -> None:
    (tmp_path / "plugins" / "b-plugin").mkdir(parents=True)
    (tmp_path / "plugins" / "a-plugin").mkdir()
    (tmp_path / "plugins" / "notes.txt").write_text("x", encoding="utf-8")

    snapshot = load_snapshot(tmp_path)

    assert [bundle.slug for bundle in snapshot.plugin_bundles] == ["a-plugin", "b-plugin"]
    assert snapshot.theme_bundles == []
    assert discover_bundles(tmp_path, BundleScope.THEMES) == []


def test_invalid_file_names_the_culprit(tmp_path: Path) -> None:
    _write(tmp_path / "coupons.json", [{"id": "not-a-number"}])

    with pytest.raises(SnapshotLoadError) as excinfo:
        load_snapshot(tmp_path)

    assert str(excinfo.value).startswith("coupons.json: ")


def test_invalid_jsonl_line_reports_line_number(tmp_path: Path) -> None:
    (tmp_path / "orders.jsonl").write_text('{"id": 1}\n{"id": [1]}\n', encoding="utf-8")

    with pytest.raises(SnapshotLoadError, match="orders.jsonl: line 2"):
        load_snapshot(tmp_path)


def test_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(SnapshotLoadError, match="snapshot directory not found"):
        load_snapshot(tmp_path / "nope")


def test_split_image_paths_accepts_lists_and_separators(tmp_path: Path) -> None:
    assert split_image_paths(None, tmp_path) == []
    assert split_image_paths("a.jpg,\nb.jpg;;", tmp_path) == [
        str(tmp_path / "a.jpg"),
        str(tmp_path / "b.jpg"),
    ]
    assert split_image_paths(["c.jpg", " "], tmp_path) == [str(tmp_path / "c.jpg")]
