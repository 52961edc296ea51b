"""Collection and document references backed by the collection's mapping."""

from collections.abc import Mapping
from concurrent.futures import Future
from typing import Any

from firestore_mock.core.data import DELETE_FIELD, auto_id, clean_data, clone
from firestore_mock.core.node import TreeNode, settle
from firestore_mock.errors import InvalidArgumentError, NotFoundError
from firestore_mock.query import MockQuery
from firestore_mock.snapshot import DocumentSnapshot


class MockCollectionReference(MockQuery):
    """A collection: a query over all of its documents, plus writes.

    Writes go through the shared queue and change this collection's data in
    place, so listeners on the collection see them after the next flush.
    Queries derived with ``where``/``order_by``/``limit`` keep the data they
    were created with.
    """

    def document(self, doc_id: str | None = None) -> "MockDocumentReference":
        """Return a reference to ``doc_id`` (a new random id when omitted)."""
        if doc_id is None:
            doc_id = auto_id()
        if not doc_id or "/" in doc_id:
            msg = f"invalid document id {doc_id!r} in {self.path}"
            raise InvalidArgumentError(msg)
        child = self.children.get(doc_id)
        if not isinstance(child, MockDocumentReference):
            child = MockDocumentReference(f"{self.path}/{doc_id}", self, doc_id)
            self.children[doc_id] = child
        return child

    doc = document

    def add(self, data: Mapping[str, Any]) -> "Future[MockDocumentReference]":
        """Queue the creation of a document with a generated id."""
        error = self._next_error("add")
        payload = clone(data)
        doc_id = auto_id()
        future: Future[MockDocumentReference] = Future()

        def write() -> MockDocumentReference:
            self._write_document(doc_id, payload)
            return self.document(doc_id)

        self._defer("add", (payload,), lambda: settle(future, error, write))
        return future

    def _document_ref(self, doc_id: str) -> "MockDocumentReference":
        return self.document(doc_id)

    def _read_document(self, doc_id: str) -> Any:
        return clone((self.data or {}).get(doc_id))

    def _write_document(self, doc_id: str, data: Mapping[str, Any]) -> None:
        if self.data is None:
            self.data = {}
        self.data[doc_id] = clean_data(clone(data))

    def _remove_document(self, doc_id: str) -> None:
        if self.data:
            self.data.pop(doc_id, None)


class MockDocumentReference(TreeNode):
    """One document in a collection. All operations are queued."""

    def __init__(self, path: str, collection: MockCollectionReference, doc_id: str) -> None:
        super().__init__(path, collection, doc_id)
        # A document reference is useless without its collection, so keep it alive.
        self._collection = collection

    def collection(self, collection_id: str) -> MockCollectionReference:
        """Return a sub-collection of this document."""
        child = self.children.get(collection_id)
        if not isinstance(child, MockCollectionReference):
            path = f"{self.path}/{collection_id}"
            child = MockCollectionReference(path, None, self, collection_id)
            self.children[collection_id] = child
        return child

    def get(self) -> "Future[DocumentSnapshot]":
        error = self._next_error("get")
        future: Future[DocumentSnapshot] = Future()

        def read() -> DocumentSnapshot:
            data = self._collection._read_document(self._doc_id)
            return DocumentSnapshot(self._doc_id, self, data)

        self._defer("get", (), lambda: settle(future, error, read))
        return future

    def set(self, data: Mapping[str, Any], merge: bool = False) -> "Future[None]":
        """Replace the document, or merge into it with ``merge=True``."""
        error = self._next_error("set")
        # Sentinels survive the copy; they are resolved when the write runs.
        payload = clone(data)
        future: Future[None] = Future()

        def write() -> None:
            current = self._collection._read_document(self._doc_id)
            if merge and isinstance(current, dict):
                self._collection._write_document(self._doc_id, _merge(current, payload))
            else:
                self._collection._write_document(self._doc_id, payload)

        self._defer("set", (payload,), lambda: settle(future, error, write))
        return future

    def update(self, data: Mapping[str, Any]) -> "Future[None]":
        """Change individual fields. Keys may be dotted paths (``"address.city"``).

        The future fails with NotFoundError if the document does not exist.
        """
        error = self._next_error("update")
        payload = clone(data)
        future: Future[None] = Future()

        def write() -> None:
            current = self._collection._read_document(self._doc_id)
            if current is None:
                msg = f"No document to update: {self.path}"
                raise NotFoundError(msg)
            for field_path, value in payload.items():
                _set_field(current, field_path, value)
            self._collection._write_document(self._doc_id, current)

        self._defer("update", (payload,), lambda: settle(future, error, write))
        return future

    def delete(self) -> "Future[None]":
        error = self._next_error("delete")
        future: Future[None] = Future()
        self._defer(
            "delete",
            (),
            lambda: settle(future, error, lambda: self._collection._remove_document(self._doc_id)),
        )
        return future

    @property
    def _doc_id(self) -> str:
        return str(self.id)

    def __repr__(self) -> str:
        return f"MockDocumentReference(path={self.path!r})"


def _merge(current: dict[str, Any], updates: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge ``updates`` into ``current``; nested mappings merge key by key."""
    for key, value in updates.items():
        if value is DELETE_FIELD:
            current.pop(key, None)
        elif isinstance(value, Mapping) and isinstance(current.get(key), dict):
            _merge(current[key], value)
        else:
            current[key] = clone(value)
    return current


def _set_field(document: dict[str, Any], field_path: str, value: Any) -> None:
    *parents, leaf = field_path.split(".")
    target = document
    for segment in parents:
        nested = target.get(segment)
        if not isinstance(nested, dict):
            nested = {}
            target[segment] = nested
        target = nested
    if value is DELETE_FIELD:
        target.pop(leaf, None)
    else:
        target[leaf] = clone(value)
