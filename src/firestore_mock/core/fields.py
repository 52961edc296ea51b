"""Field-path lookup, equality and ordering of document values."""

import math
from collections.abc import Mapping, Sequence
from typing import Any, Final


class _Missing:
    """Marker for a field path that does not resolve on a document."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()


def get_field(document: Any, field_path: str) -> Any:
    """Resolve a dotted field path (``"address.city"``) against a document.

    Numeric segments index into lists (``"tags.0"``). Returns ``MISSING`` when
    any segment cannot be resolved.
    """
    current = document
    for segment in field_path.split("."):
        if isinstance(current, Mapping):
            if segment not in current:
                return MISSING
            current = current[segment]
        elif isinstance(current, Sequence) and not isinstance(current, str | bytes):
            if not segment.isdigit() or int(segment) >= len(current):
                return MISSING
            current = current[int(segment)]
        else:
            return MISSING
    return current


def values_equal(left: Any, right: Any) -> bool:
    """Deep equality for filter values.

    Unlike ``==``, booleans never match numbers, at any nesting depth, and
    NaN matches NaN.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        if left.keys() != right.keys():
            return False
        return all(values_equal(left[key], right[key]) for key in left)
    if isinstance(left, list | tuple) and isinstance(right, list | tuple):
        if len(left) != len(right):
            return False
        return all(values_equal(a, b) for a, b in zip(left, right, strict=True))
    if isinstance(left, float) and isinstance(right, float) and math.isnan(left):
        return math.isnan(right)
    try:
        return bool(left == right)
    except TypeError:
        return False


def _rank(value: Any) -> int:
    # ordinary values < None < MISSING
    if value is MISSING:
        return 2
    if value is None:
        return 1
    return 0


def compare_values(left: Any, right: Any) -> int:
    """Three-way ascending comparison used for ``order_by``.

    Ordinary values sort before ``None``, which sorts before ``MISSING``.
    Values that cannot be ordered against each other (``"a"`` vs ``1``)
    compare as equal, so a stable sort keeps their input order.
    """
    left_rank, right_rank = _rank(left), _rank(right)
    if left_rank != right_rank:
        return -1 if left_rank < right_rank else 1
    if left_rank:
        return 0
    try:
        if left > right:
            return 1
        if left < right:
            return -1
    except TypeError:
        return 0
    return 0
