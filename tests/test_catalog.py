"""
Tests for supplier catalog reduction.
"""

import logging
from decimal import Decimal

import pytest
from cost_sync.processor.catalog import (
    CatalogFormatError,
    build_supplier_map,
    flatten_supplier_rows,
)


class TestFlattenSupplierRows:
    """Tests for flatten_supplier_rows function."""

    def test_flattens_nested_arrays_in_order(self):
        catalog = {"supplierList": [
            [{"supplierProductId": "A", "price": 1}],
            [{"supplierProductId": "B", "price": 2}, {"supplierProductId": "C", "price": 3}],
        ]}

        rows = flatten_supplier_rows(catalog)

        assert [r["supplierProductId"] for r in rows] == ["A", "B", "C"]

    @pytest.mark.parametrize("catalog", [
        {},
        {"supplierList": None},
        {"supplierList": {"supplierProductId": "A"}},
        {"supplierList": "A"},
        [],
        None,
    ])
    def test_unexpected_shape_raises(self, catalog):
        with pytest.raises(CatalogFormatError):
            flatten_supplier_rows(catalog)

    def test_skips_non_list_inner_values(self):
        catalog = {"supplierList": [
            None,
            "junk",
            {"supplierProductId": "X", "price": 9},
            [{"supplierProductId": "A", "price": 1}, "junk"],
        ]}

        rows = flatten_supplier_rows(catalog)

        assert rows == [{"supplierProductId": "A", "price": 1}]


class TestBuildSupplierMap:
    """Tests for build_supplier_map function."""

    def test_maps_product_id_to_price(self):
        catalog = {"supplierList": [[{"supplierProductId": "FR320", "price": 12.50}]]}

        supplier_map = build_supplier_map(catalog)

        assert list(supplier_map) == ["FR320"]
        assert supplier_map["FR320"].price == Decimal("12.5")

    def test_float_price_has_no_binary_drift(self):
        catalog = {"supplierList": [[{"supplierProductId": "A", "price": 0.1}]]}

        supplier_map = build_supplier_map(catalog)

        assert supplier_map["A"].price == Decimal("0.1")

    def test_string_price_is_accepted(self):
        catalog = {"supplierList": [[{"supplierProductId": "A", "price": "4.20"}]]}

        assert build_supplier_map(catalog)["A"].price == Decimal("4.20")

    def test_last_duplicate_wins_across_inner_arrays(self):
        catalog = {"supplierList": [
            [{"supplierProductId": "A", "price": 1}],
            [{"supplierProductId": "A", "price": 2}],
        ]}

        supplier_map = build_supplier_map(catalog)

        assert supplier_map["A"].price == Decimal("2")

    def test_duplicate_with_different_price_is_warned(self, caplog):
        catalog = {"supplierList": [
            [{"supplierProductId": "A", "price": 1}],
            [{"supplierProductId": "A", "price": 2}],
        ]}

        with caplog.at_level(logging.WARNING, logger="cost_sync.processor.catalog"):
            build_supplier_map(catalog)

        assert "Duplicate supplierProductId 'A'" in caplog.text

    def test_duplicate_with_same_price_is_not_warned(self, caplog):
        catalog = {"supplierList": [
            [{"supplierProductId": "A", "price": "1.50"}],
            [{"supplierProductId": "A", "price": 1.5}],
        ]}

        with caplog.at_level(logging.WARNING, logger="cost_sync.processor.catalog"):
            build_supplier_map(catalog)

        assert "Duplicate" not in caplog.text

    def test_rows_without_product_id_are_ignored(self):
        catalog = {"supplierList": [[
            {"price": 1},
            {"supplierProductId": "", "price": 2},
            {"supplierProductId": None, "price": 3},
        ]]}

        assert build_supplier_map(catalog) == {}

    @pytest.mark.parametrize("price", [None, "abc", -1, "NaN"])
    def test_rows_with_invalid_price_are_skipped(self, price):
        catalog = {"supplierList": [[
            {"supplierProductId": "BAD", "price": price},
            {"supplierProductId": "GOOD", "price": 1},
        ]]}

        supplier_map = build_supplier_map(catalog)

        assert list(supplier_map) == ["GOOD"]

    def test_numeric_product_id_becomes_string(self):
        catalog = {"supplierList": [[{"supplierProductId": 1234, "price": 5}]]}

        assert "1234" in build_supplier_map(catalog)

    @pytest.mark.parametrize("product_id, key", [(320.0, "320"), (1234, "1234"), (12.5, "12.5")])
    def test_float_product_id_keys_like_json_object(self, product_id, key):
        catalog = {"supplierList": [[{"supplierProductId": product_id, "price": 5}]]}

        assert list(build_supplier_map(catalog)) == [key]

    def test_malformed_catalog_gives_empty_map_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="cost_sync.processor.catalog"):
            supplier_map = build_supplier_map({"products": []})

        assert supplier_map == {}
        assert "Unexpected Finale data format" in caplog.text
