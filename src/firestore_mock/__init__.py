"""In-memory Firestore query double for unit tests."""

from firestore_mock.client import MockFirestore
from firestore_mock.collection import MockCollectionReference, MockDocumentReference
from firestore_mock.core.data import DELETE_FIELD, SERVER_TIMESTAMP
from firestore_mock.core.queue import OperationQueue
from firestore_mock.errors import InvalidArgumentError, MockFirestoreError, NotFoundError
from firestore_mock.logging_config import configure_logging
from firestore_mock.query import MockQuery
from firestore_mock.snapshot import DocumentSnapshot, QuerySnapshot
from firestore_mock.stream import DocumentStream

__all__ = [
    "DELETE_FIELD",
    "SERVER_TIMESTAMP",
    "DocumentSnapshot",
    "DocumentStream",
    "InvalidArgumentError",
    "MockCollectionReference",
    "MockDocumentReference",
    "MockFirestore",
    "MockFirestoreError",
    "MockQuery",
    "NotFoundError",
    "OperationQueue",
    "QuerySnapshot",
    "configure_logging",
]
