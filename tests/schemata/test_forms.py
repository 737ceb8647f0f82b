"""Tests for the canonical/hybrid form converters."""

from __future__ import annotations

from typing import Any

import pytest

from zobject_table.schemata.forms import (
    canonical_to_hybrid,
    hybrid_to_canonical,
    to_canonical,
    to_hybrid,
)


def ref(zid: str) -> dict[str, str]:
    return {"Z1K1": "Z9", "Z9K1": zid}


def string(value: str) -> dict[str, str]:
    return {"Z1K1": "Z6", "Z6K1": value}


def normal_list(item_type: Any, *items: Any) -> dict[str, Any]:
    """Build a list in head/tail normal form."""
    list_type = {"Z1K1": "Z7", "Z7K1": "Z881", "Z881K1": item_type}
    node: dict[str, Any] = {"Z1K1": list_type}
    for item in reversed(items):
        node = {"Z1K1": list_type, "K1": item, "K2": node}
    return node


LABEL_CANONICAL = {"Z1K1": "Z11", "Z11K1": "Z1002", "Z11K2": "hi"}
LABEL_HYBRID = {"Z1K1": ref("Z11"), "Z11K1": ref("Z1002"), "Z11K2": string("hi")}


# ---------------------------------------------------------------------------
# to_canonical
# ---------------------------------------------------------------------------


class TestToCanonical:
    def test_string_collapses(self) -> None:
        assert to_canonical(string("hello")) == "hello"

    def test_reference_collapses(self) -> None:
        assert to_canonical(ref("Z11")) == "Z11"

    @pytest.mark.parametrize("value", ["Z123", "Z", "Z0"])
    def test_string_that_reads_like_a_reference_stays_wrapped(self, value: str) -> None:
        assert to_canonical(string(value)) == string(value)

    def test_string_holding_a_key_collapses(self) -> None:
        assert to_canonical(string("Z1K1")) == "Z1K1"

    def test_reference_with_invalid_id_degrades_to_empty(self) -> None:
        assert to_canonical(ref("hello")) == ""

    def test_missing_values_degrade_to_empty(self) -> None:
        assert to_canonical({"Z1K1": "Z6"}) == ""
        assert to_canonical({"Z1K1": "Z9"}) == ""

    def test_nested_object(self) -> None:
        assert to_canonical(LABEL_HYBRID) == LABEL_CANONICAL

    def test_list_is_mapped(self) -> None:
        assert to_canonical([ref("Z6"), string("a"), string("b")]) == ["Z6", "a", "b"]

    def test_normal_form_list(self) -> None:
        zlist = normal_list("Z6", "a", "b")
        assert to_canonical(zlist) == ["Z6", "a", "b"]

    def test_normal_form_list_with_hybrid_references(self) -> None:
        list_type = {"Z1K1": ref("Z7"), "Z7K1": ref("Z881"), "Z881K1": ref("Z11")}
        zlist = {
            "Z1K1": list_type,
            "K1": LABEL_HYBRID,
            "K2": {"Z1K1": list_type},
        }
        assert to_canonical(zlist) == ["Z11", LABEL_CANONICAL]

    def test_empty_normal_form_list_without_item_type(self) -> None:
        assert to_canonical({"Z1K1": {"Z1K1": "Z7", "Z7K1": "Z881"}}) == [""]

    def test_quote_payload_is_canonicalized(self) -> None:
        quote = {"Z1K1": ref("Z99"), "Z99K1": LABEL_HYBRID}
        assert to_canonical(quote) == {"Z1K1": "Z99", "Z99K1": LABEL_CANONICAL}

    def test_quote_without_payload(self) -> None:
        assert to_canonical({"Z1K1": "Z99"}) == {"Z1K1": "Z99"}

    @pytest.mark.parametrize("value", [None, 5, True, "plain"])
    def test_scalars_pass_through(self, value: Any) -> None:
        assert to_canonical(value) == value

    @pytest.mark.parametrize(
        "zobject",
        [
            LABEL_HYBRID,
            string("Z123"),
            normal_list("Z6", "a"),
            {"Z1K1": ref("Z99"), "Z99K1": string("x")},
            [ref("Z6"), string("Z1")],
        ],
    )
    def test_idempotent(self, zobject: Any) -> None:
        once = to_canonical(zobject)
        assert to_canonical(once) == once

    def test_input_is_not_modified(self) -> None:
        zobject = {"Z1K1": ref("Z11"), "Z11K2": string("hi")}
        to_canonical(zobject)
        assert zobject == {"Z1K1": ref("Z11"), "Z11K2": string("hi")}


# ---------------------------------------------------------------------------
# to_hybrid
# ---------------------------------------------------------------------------


class TestToHybrid:
    @pytest.mark.parametrize("value", ["Z11", "Z0", "Z10001"])
    def test_reference_strings_are_wrapped_as_references(self, value: str) -> None:
        assert to_hybrid(value) == ref(value)

    @pytest.mark.parametrize("value", ["hello", "Z", "Z1K1", "", "z11"])
    def test_other_strings_are_wrapped_as_strings(self, value: str) -> None:
        assert to_hybrid(value) == string(value)

    def test_nested_object(self) -> None:
        assert to_hybrid(LABEL_CANONICAL) == LABEL_HYBRID

    def test_list_stays_a_list(self) -> None:
        assert to_hybrid(["Z6", "a"]) == [ref("Z6"), string("a")]

    def test_persistent_id_is_wrapped_as_string(self) -> None:
        assert to_hybrid({"Z1K1": "Z2", "Z2K1": "Z10001"}) == {
            "Z1K1": ref("Z2"),
            "Z2K1": string("Z10001"),
        }

    def test_wrapped_string_is_not_rewrapped(self) -> None:
        assert to_hybrid(string("Z123")) == string("Z123")
        assert to_hybrid(ref("Z11")) == ref("Z11")

    def test_quote_payload_is_kept_raw(self) -> None:
        quote = {"Z1K1": "Z99", "Z99K1": LABEL_CANONICAL}
        assert to_hybrid(quote) == {"Z1K1": ref("Z99"), "Z99K1": LABEL_CANONICAL}

    @pytest.mark.parametrize("value", [None, 3, False])
    def test_scalars_pass_through(self, value: Any) -> None:
        assert to_hybrid(value) == value

    @pytest.mark.parametrize(
        "zobject",
        [
            LABEL_CANONICAL,
            ["Z6", "a", "Z6"],
            {"Z1K1": "Z2", "Z2K1": "Z0", "Z2K2": "x"},
            {"Z1K1": "Z99", "Z99K1": "Z11"},
        ],
    )
    def test_idempotent(self, zobject: Any) -> None:
        once = to_hybrid(zobject)
        assert to_hybrid(once) == once


# ---------------------------------------------------------------------------
# Combined
# ---------------------------------------------------------------------------


class TestRoundTrip:
    @pytest.mark.parametrize(
        "canonical",
        [
            LABEL_CANONICAL,
            ["Z6", "one", "two"],
            {"Z1K1": "Z12", "Z12K1": ["Z11", LABEL_CANONICAL]},
            {"Z1K1": "Z7", "Z7K1": "Z801", "Z801K1": "some text"},
        ],
    )
    def test_canonical_survives_hybrid_round_trip(self, canonical: Any) -> None:
        assert to_canonical(to_hybrid(canonical)) == canonical

    def test_store_layer_aliases(self) -> None:
        assert hybrid_to_canonical is to_canonical
        assert canonical_to_hybrid is to_hybrid
