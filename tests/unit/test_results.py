"""Tests for compute_results: ordering, limits and copying."""

from typing import Any

from firestore_mock.core.results import compute_results
from firestore_mock.models.records import FieldOrder

XY_DOCS: dict[str, dict[str, Any]] = {
    "a": {"x": 1, "y": 2},
    "b": {"x": 1, "y": 1},
    "c": {"x": 0, "y": 5},
}


def test_empty_and_missing_data_give_empty_results() -> None:
    assert compute_results(None) == {}
    assert compute_results({}) == {}
    assert compute_results({}, [FieldOrder("x")], 3) == {}


def test_unordered_results_keep_insertion_order() -> None:
    assert list(compute_results(XY_DOCS)) == ["a", "b", "c"]


def test_multi_key_ordering_uses_first_key_as_primary() -> None:
    results = compute_results(XY_DOCS, [FieldOrder("x"), FieldOrder("y")])

    assert list(results) == ["c", "b", "a"]


def test_descending_key_reverses_only_that_key() -> None:
    results = compute_results(XY_DOCS, [FieldOrder("x", "desc"), FieldOrder("y")])

    assert list(results) == ["b", "a", "c"]


def test_ties_keep_insertion_order() -> None:
    docs = {"first": {"x": 1}, "second": {"x": 1}, "third": {"x": 0}}

    assert list(compute_results(docs, [FieldOrder("x")])) == ["third", "first", "second"]


def test_limit_caps_unordered_results() -> None:
    docs = {f"d{i}": {"i": i} for i in range(5)}

    assert list(compute_results(docs, limit=2)) == ["d0", "d1"]


def test_limit_applies_after_ordering() -> None:
    docs = {f"d{i}": {"i": i} for i in range(5)}

    results = compute_results(docs, [FieldOrder("i", "desc")], limit=2)

    assert list(results) == ["d4", "d3"]


def test_zero_or_negative_limit_means_unlimited() -> None:
    assert len(compute_results(XY_DOCS, limit=0)) == 3
    assert len(compute_results(XY_DOCS, limit=-1)) == 3


def test_missing_fields_sort_last_ascending_and_first_descending() -> None:
    docs = {
        "missing": {"other": 1},
        "null": {"score": None},
        "high": {"score": 9},
        "low": {"score": 1},
    }

    ascending = compute_results(docs, [FieldOrder("score")])
    descending = compute_results(docs, [FieldOrder("score", "desc")])

    assert list(ascending) == ["low", "high", "null", "missing"]
    assert list(descending) == ["missing", "null", "high", "low"]


def test_orders_by_nested_field_paths() -> None:
    docs = {"a": {"address": {"city": "Oslo"}}, "b": {"address": {"city": "Bergen"}}}

    assert list(compute_results(docs, [FieldOrder("address.city")])) == ["b", "a"]


def test_results_are_deep_copies() -> None:
    docs = {"a": {"tags": ["x"]}}

    results = compute_results(docs)
    results["a"]["tags"].append("y")

    assert docs["a"]["tags"] == ["x"]
