"""Shared test fixtures."""

from collections.abc import Iterator
from typing import Any

import pytest
from loguru import logger

from firestore_mock import MockCollectionReference, MockFirestore
from tests.unit.fakes import USERS


@pytest.fixture
def db() -> MockFirestore:
    """Return a client seeded with a five-document users collection."""
    return MockFirestore({"users": USERS})


@pytest.fixture
def users(db: MockFirestore) -> MockCollectionReference:
    return db.collection("users")


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Capture loguru output as ``"LEVEL message"`` strings."""
    messages: list[str] = []

    def sink(message: Any) -> None:
        record = message.record
        messages.append(f"{record['level'].name} {record['message']}")

    handler_id = logger.add(sink, level="DEBUG")
    yield messages
    logger.remove(handler_id)
