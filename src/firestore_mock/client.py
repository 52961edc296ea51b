"""Top-level mock client."""

from collections.abc import Mapping
from typing import Any

from firestore_mock.collection import MockCollectionReference, MockDocumentReference
from firestore_mock.config import DEFAULT_ROOT_PATH
from firestore_mock.core.data import clean_data, clone
from firestore_mock.core.node import TreeNode
from firestore_mock.errors import InvalidArgumentError


class MockFirestore(TreeNode):
    """Root of a mock tree. Owns the operation queue every reference shares.

    Args:
        data: Optional seed data, ``{collection_id: {doc_id: document}}``.
    """

    def __init__(self, data: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        super().__init__(DEFAULT_ROOT_PATH)
        self._seed: dict[str, Any] = clean_data(clone(data)) or {}

    def collection(self, collection_id: str) -> MockCollectionReference:
        """Return the (cached) reference for a top-level collection."""
        if not collection_id or "/" in collection_id:
            msg = f"invalid collection id {collection_id!r}"
            raise InvalidArgumentError(msg)
        child = self.children.get(collection_id)
        if not isinstance(child, MockCollectionReference):
            child = MockCollectionReference(
                f"{self.path}{collection_id}", self._seed.get(collection_id), self, collection_id
            )
            self.children[collection_id] = child
        return child

    def document(self, document_path: str) -> MockDocumentReference:
        """Resolve ``"collection/doc[/collection/doc...]"`` to a document reference."""
        segments = document_path.strip("/").split("/")
        if len(segments) % 2:
            msg = f"document path needs an even number of segments: {document_path!r}"
            raise InvalidArgumentError(msg)
        doc = self.collection(segments[0]).document(segments[1])
        for collection_id, doc_id in zip(segments[2::2], segments[3::2], strict=True):
            doc = doc.collection(collection_id).document(doc_id)
        return doc

    def __repr__(self) -> str:
        return f"MockFirestore(collections={sorted(self.children)!r})"
