"""Protocols for the collaborators the query engine talks to."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CollectionParentProtocol(Protocol):
    """Anything that can hand out child collection references (client, document)."""

    def collection(self, collection_id: str) -> Any:
        """Return the collection reference with the given id."""
        ...


@runtime_checkable
class SnapshotObserverProtocol(Protocol):
    """Observer object accepted by ``on_snapshot``."""

    def on_next(self, snapshot: Any) -> None:
        """Receive a new query snapshot."""
        ...

    def on_error(self, error: BaseException) -> None:
        """Receive an error instead of a snapshot."""
        ...
