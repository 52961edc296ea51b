"""Tests for field-path lookup, equality and comparison."""

import pytest

from firestore_mock.core.fields import MISSING, compare_values, get_field, values_equal


def test_get_field_resolves_nested_paths() -> None:
    doc = {"address": {"city": "Oslo", "zip": "0150"}, "tags": ["a", "b"]}

    assert get_field(doc, "address.city") == "Oslo"
    assert get_field(doc, "tags.1") == "b"
    assert get_field(doc, "address") == {"city": "Oslo", "zip": "0150"}


@pytest.mark.parametrize("path", ["missing", "address.country", "tags.5", "tags.x", "name.first"])
def test_get_field_returns_missing_for_unresolvable_paths(path: str) -> None:
    doc = {"name": "Alice", "address": {"city": "Oslo"}, "tags": ["a"]}

    assert get_field(doc, path) is MISSING


def test_get_field_distinguishes_none_from_missing() -> None:
    assert get_field({"a": None}, "a") is None
    assert get_field({}, "a") is MISSING


def test_values_equal_is_deep() -> None:
    assert values_equal({"a": [1, {"b": 2}]}, {"a": [1, {"b": 2}]})
    assert not values_equal({"a": [1, {"b": 2}]}, {"a": [1, {"b": 3}]})
    assert not values_equal({"a": 1}, {"a": 1, "b": 2})


def test_values_equal_never_matches_bools_to_numbers() -> None:
    assert not values_equal(True, 1)
    assert not values_equal(0, False)
    assert not values_equal({"flag": True}, {"flag": 1})
    assert values_equal(False, False)
    assert values_equal(1, 1.0)


def test_values_equal_matches_nan_to_nan() -> None:
    assert values_equal(float("nan"), float("nan"))
    assert values_equal({"score": [float("nan")]}, {"score": [float("nan")]})
    assert not values_equal(float("nan"), 0.0)
    assert not values_equal(1.5, float("nan"))


def test_compare_values_orders_regular_values_then_none_then_missing() -> None:
    assert compare_values(1, 2) == -1
    assert compare_values("b", "a") == 1
    assert compare_values(5, None) == -1
    assert compare_values(None, MISSING) == -1
    assert compare_values(MISSING, 0) == 1
    assert compare_values(None, None) == 0
    assert compare_values(MISSING, MISSING) == 0


def test_compare_values_treats_incomparable_types_as_equal() -> None:
    assert compare_values("a", 1) == 0
    assert compare_values({"a": 1}, {"b": 2}) == 0
