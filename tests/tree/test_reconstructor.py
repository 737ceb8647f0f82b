"""Tests for TableReconstructor."""

from __future__ import annotations

import random

import pytest

from zobject_table.schemata.forms import to_hybrid
from zobject_table.tree.flattener import TableFlattener
from zobject_table.tree.reconstructor import TableReconstructor
from zobject_table.tree.row import Row, RowValue

OBJECT = RowValue.OBJECT
ARRAY = RowValue.ARRAY


@pytest.fixture
def reconstructor() -> TableReconstructor:
    return TableReconstructor()


@pytest.fixture
def flattener() -> TableFlattener:
    return TableFlattener()


# ---------------------------------------------------------------------------
# Round trips
# ---------------------------------------------------------------------------


class TestRoundTrip:
    @pytest.mark.parametrize(
        "zobject",
        [
            "the stringy one",
            "Z12345",
            {"Z1K1": "Z11", "Z11K1": {"Z1K1": "Z60", "Z60K1": "pang"}, "Z11K2": "Gñeee"},
            {
                "Z1K1": "Z2",
                "Z2K1": "Z0",
                "Z2K2": ["Z6", "one", "two"],
                "Z2K3": {"Z1K1": "Z12", "Z12K1": ["Z11"]},
            },
        ],
    )
    def test_object_round_trip(
        self,
        flattener: TableFlattener,
        reconstructor: TableReconstructor,
        zobject: object,
    ) -> None:
        rows = flattener.flatten(zobject)
        assert reconstructor.reconstruct(rows, 0) == to_hybrid(zobject)

    def test_list_root_round_trip(
        self, flattener: TableFlattener, reconstructor: TableReconstructor
    ) -> None:
        zobject = ["Z6", "stringful", "stringlord"]
        rows = flattener.flatten(zobject)
        assert reconstructor.reconstruct(rows, 0, root_is_array=True) == to_hybrid(zobject)

    def test_row_order_does_not_matter(
        self, flattener: TableFlattener, reconstructor: TableReconstructor
    ) -> None:
        zobject = {"Z1K1": "Z11", "Z11K1": "Z1002", "Z11K2": ["Z6", "a", "b", "c"]}
        rows = flattener.flatten(zobject)
        shuffled = rows[:]
        random.Random(7).shuffle(shuffled)
        assert reconstructor.reconstruct(shuffled, 0) == to_hybrid(zobject)

    def test_rows_are_not_modified(
        self, flattener: TableFlattener, reconstructor: TableReconstructor
    ) -> None:
        rows = flattener.flatten({"Z1K1": "Z11", "Z11K2": "hi"})
        snapshot = [Row(r.id, r.key, r.value, r.parent) for r in rows]
        reconstructor.reconstruct(rows, 0)
        assert rows == snapshot


# ---------------------------------------------------------------------------
# Sub-trees and detached roots
# ---------------------------------------------------------------------------


class TestSubTrees:
    def test_rebuild_from_inner_row(
        self, flattener: TableFlattener, reconstructor: TableReconstructor
    ) -> None:
        rows = flattener.flatten({"Z1K1": "Z11", "Z11K2": "hi"})
        inner = next(row for row in rows if row.key == "Z11K2")
        assert reconstructor.reconstruct(rows, inner.id) == {"Z1K1": "Z6", "Z6K1": "hi"}

    def test_rebuild_inner_array(
        self, flattener: TableFlattener, reconstructor: TableReconstructor
    ) -> None:
        rows = flattener.flatten({"Z1K1": "Z12", "Z12K1": ["Z11"]})
        inner = next(row for row in rows if row.key == "Z12K1")
        assert reconstructor.reconstruct(rows, inner.id, root_is_array=True) == [
            {"Z1K1": "Z9", "Z9K1": "Z11"}
        ]

    def test_detached_roots_are_rebuilt_independently(
        self, flattener: TableFlattener, reconstructor: TableReconstructor
    ) -> None:
        first = flattener.flatten("first")
        second = flattener.flatten("second", starting_id=4)
        rows = first + second
        assert reconstructor.reconstruct(rows, 0) == {"Z1K1": "Z6", "Z6K1": "first"}
        assert reconstructor.reconstruct(rows, 4) == {"Z1K1": "Z6", "Z6K1": "second"}

    def test_none_root_unwraps_the_keyless_root_row(
        self, flattener: TableFlattener, reconstructor: TableReconstructor
    ) -> None:
        rows = flattener.flatten("hi")
        assert reconstructor.reconstruct(rows, None) == {"Z1K1": "Z6", "Z6K1": "hi"}

    def test_none_root_unwraps_an_array_root(
        self, flattener: TableFlattener, reconstructor: TableReconstructor
    ) -> None:
        rows = flattener.flatten(["Z6"])
        assert reconstructor.reconstruct(rows, None) == [{"Z1K1": "Z9", "Z9K1": "Z6"}]


# ---------------------------------------------------------------------------
# Empty and edge cases
# ---------------------------------------------------------------------------


class TestEdgeCases:
    def test_no_children_returns_none(self, reconstructor: TableReconstructor) -> None:
        rows = [Row(0, None, OBJECT, None)]
        assert reconstructor.reconstruct(rows, 0) is None

    def test_no_children_array_returns_empty_list(
        self, reconstructor: TableReconstructor
    ) -> None:
        rows = [Row(0, None, ARRAY, None)]
        assert reconstructor.reconstruct(rows, 0, root_is_array=True) == []

    def test_empty_table(self, reconstructor: TableReconstructor) -> None:
        assert reconstructor.reconstruct([], 0) is None

    def test_unknown_root_id(self, reconstructor: TableReconstructor) -> None:
        rows = [Row(0, None, OBJECT, None), Row(1, "Z1K1", "Z6", 0)]
        assert reconstructor.reconstruct(rows, 99) is None

    def test_nested_empty_containers(self, reconstructor: TableReconstructor) -> None:
        rows = [
            Row(0, None, OBJECT, None),
            Row(1, "Z1K1", "Z12", 0),
            Row(2, "Z12K1", ARRAY, 0),
            Row(3, "Z12K2", OBJECT, 0),
        ]
        assert reconstructor.reconstruct(rows, 0) == {
            "Z1K1": "Z12",
            "Z12K1": [],
            "Z12K2": {},
        }

    def test_array_children_ordered_by_index_key(
        self, reconstructor: TableReconstructor
    ) -> None:
        rows = [
            Row(0, None, ARRAY, None),
            Row(5, "2", "c", 0),
            Row(3, "10", "d", 0),
            Row(1, "0", "a", 0),
            Row(9, "1", "b", 0),
        ]
        assert reconstructor.reconstruct(rows, 0, root_is_array=True) == [
            "a",
            "b",
            "c",
            "d",
        ]

    def test_terminal_with_empty_key_is_kept(
        self, reconstructor: TableReconstructor
    ) -> None:
        rows = [Row(0, None, OBJECT, None), Row(1, "", "value", 0)]
        assert reconstructor.reconstruct(rows, 0) == {"": "value"}
