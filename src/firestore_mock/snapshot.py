"""Read-only snapshots handed to callers of ``get`` and ``on_snapshot``."""

from collections.abc import Callable, Iterator, Mapping
from typing import Any

from firestore_mock.core.data import clone
from firestore_mock.core.fields import MISSING, get_field


class DocumentSnapshot:
    """The contents of one document at the time it was read."""

    def __init__(self, doc_id: str, reference: Any, data: Any = None) -> None:
        self.id = doc_id
        self.reference = reference
        self._data = clone(data)

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Any:
        """Return a copy of the document data, or None if it does not exist."""
        return clone(self._data)

    def get(self, field_path: str) -> Any:
        """Return a single field. Raises KeyError when the field is absent."""
        value = get_field(self._data, field_path)
        if value is MISSING:
            msg = f"{field_path!r} is not present in document {self.id!r}"
            raise KeyError(msg)
        return clone(value)

    def __repr__(self) -> str:
        return f"DocumentSnapshot(id={self.id!r}, exists={self.exists!r})"


class QuerySnapshot:
    """Results of a query, in result order.

    ``results=None`` builds an explicitly empty snapshot (the query had no
    data at all), which ``is_explicitly_empty`` tells apart from a query
    whose filters simply matched nothing.
    """

    def __init__(self, query: Any, results: Mapping[str, Any] | None = None) -> None:
        self.query = query
        self.is_explicitly_empty = results is None
        self.docs: list[DocumentSnapshot] = [
            DocumentSnapshot(key, query._document_ref(key), data)
            for key, data in (results or {}).items()
        ]

    @property
    def size(self) -> int:
        return len(self.docs)

    @property
    def empty(self) -> bool:
        return not self.docs

    def for_each(self, callback: Callable[[DocumentSnapshot], Any]) -> None:
        for doc in self.docs:
            callback(doc)

    def __iter__(self) -> Iterator[DocumentSnapshot]:
        return iter(self.docs)

    def __len__(self) -> int:
        return len(self.docs)

    def __repr__(self) -> str:
        return f"QuerySnapshot(query={str(self.query)!r}, size={self.size})"
