"""Turn a document mapping plus ordering and limit into an ordered result."""

import functools
from collections.abc import Mapping, Sequence
from typing import Any

from firestore_mock.config import DESCENDING
from firestore_mock.core.data import clone
from firestore_mock.core.fields import compare_values, get_field
from firestore_mock.models.records import FieldOrder


def _compare_documents(
    orders: Sequence[FieldOrder], left: tuple[str, Any], right: tuple[str, Any]
) -> int:
    for order in orders:
        result = compare_values(
            get_field(left[1], order.field_path), get_field(right[1], order.field_path)
        )
        if result:
            return -result if order.direction == DESCENDING else result
    return 0


def compute_results(
    data: Mapping[str, Any] | None,
    orders: Sequence[FieldOrder] = (),
    limit: int = 0,
) -> dict[str, Any]:
    """Compute the ordered, capped result mapping for a query.

    Args:
        data: Document id -> document mapping (``None`` means no data).
        orders: ``order_by`` clauses, first one primary.
        limit: Maximum number of documents; zero or negative means no cap.

    Returns:
        A new dict in result order. Documents are deep copies.

    Ordering follows ``core.fields.compare_values``: ascending puts regular
    values first, then ``None``, then documents missing the field; descending
    is the exact reverse. The sort is stable, so ties keep insertion order.
    """
    if not data:
        return {}

    items: list[tuple[str, Any]] = list(data.items())
    if orders:
        compare = functools.partial(_compare_documents, orders)
        items = sorted(items, key=functools.cmp_to_key(compare))
    if limit > 0:
        items = items[:limit]
    return {key: clone(document) for key, document in items}
