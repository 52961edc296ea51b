"""In-memory query: filtering, ordering, limits, reads and snapshot listeners.

Every transformation (``where``, ``order_by``, ``limit``) returns a new
``MockQuery``; the node it was called on never changes. Reads are queued on
the tree's shared ``OperationQueue`` and only complete when it is flushed.
"""

from collections.abc import Callable, Mapping
from concurrent.futures import Future
from typing import Any

from loguru import logger

from firestore_mock.config import (
    ASCENDING,
    DESCENDING,
    DIRECTION_ALIASES,
    SUPPORTED_OPERATORS,
)
from firestore_mock.core.data import clean_data, clone
from firestore_mock.core.fields import get_field, values_equal
from firestore_mock.core.node import TreeNode, settle
from firestore_mock.core.results import compute_results
from firestore_mock.errors import InvalidArgumentError
from firestore_mock.models.records import FieldOrder, SnapshotListener
from firestore_mock.protocols import CollectionParentProtocol, SnapshotObserverProtocol
from firestore_mock.snapshot import QuerySnapshot
from firestore_mock.stream import DocumentStream


class MockQuery(TreeNode):
    """A query over an in-memory document mapping."""

    ASCENDING = ASCENDING
    DESCENDING = DESCENDING

    def __init__(
        self,
        path: str | None = None,
        data: Mapping[str, Any] | None = None,
        parent: TreeNode | None = None,
        name: str | None = None,
    ) -> None:
        super().__init__(path, parent, name)
        self.orders: tuple[FieldOrder, ...] = ()
        self.limited = 0
        self._set_data(data)

    def _set_data(self, data: Mapping[str, Any] | None) -> None:
        self.data: dict[str, Any] | None = clean_data(clone(data))

    def _get_data(self) -> dict[str, Any] | None:
        return clone(self.data)

    def _derive(
        self,
        data: Mapping[str, Any] | None,
        orders: tuple[FieldOrder, ...] = (),
        limited: int = 0,
    ) -> "MockQuery":
        query = MockQuery(self.path, data, self.parent, self.id)
        # A root query has no parent to inherit from; share its queue explicitly.
        query.queue = self.queue
        query.flush_delay = self.flush_delay
        query.orders = orders
        query.limited = limited
        return query

    def where(self, field_path: str, op: str, value: Any) -> "MockQuery":
        """Keep documents whose ``field_path`` equals ``value``.

        Only ``==`` is simulated. Any other operator logs a warning and
        returns this query unchanged, i.e. the entire dataset. The new query
        starts without ordering or limit.
        """
        if op not in SUPPORTED_OPERATORS:
            logger.warning(
                "Unsupported where() operator {!r} on {}, returning entire dataset", op, self.path
            )
            return self

        if not self.data:
            return self._derive(None)
        matches = {
            key: clone(document)
            for key, document in self.data.items()
            if values_equal(get_field(document, field_path), value)
        }
        return self._derive(matches)

    def order_by(self, field_path: str, direction: str = ASCENDING) -> "MockQuery":
        """Add a sort key; earlier keys take precedence."""
        normalized = DIRECTION_ALIASES.get(direction)
        if normalized is None:
            logger.warning("Unknown order_by() direction {!r}, sorting ascending", direction)
            normalized = ASCENDING
        orders = (*self.orders, FieldOrder(field_path, normalized))
        return self._derive(self._get_data(), orders, self.limited)

    def limit(self, count: int) -> "MockQuery":
        """Cap the number of results. Zero or negative means no cap."""
        return self._derive(self._get_data(), self.orders, count)

    def get(self) -> "Future[QuerySnapshot]":
        """Queue a read; the future completes when the queue is flushed."""
        error = self._next_error("get")
        future: Future[QuerySnapshot] = Future()

        def read() -> QuerySnapshot:
            ref = self._snapshot_ref()
            if self.data:
                return QuerySnapshot(ref, self._results())
            return QuerySnapshot(ref)

        self._defer("get", (), lambda: settle(future, error, read))
        return future

    def stream(self) -> DocumentStream:
        """Read the results as a push stream of ``data`` / ``end`` / ``error`` events."""
        return DocumentStream(self.get())

    def on_snapshot(
        self,
        options_or_observer_or_on_next: Any,
        observer_or_on_next_or_on_error: Any = None,
        on_error: Callable[[BaseException], None] | None = None,
    ) -> Callable[[], None]:
        """Listen for result changes.

        Accepted call shapes::

            query.on_snapshot(on_next, on_error)
            query.on_snapshot(observer)  # has on_next() / on_error()
            query.on_snapshot({"include_metadata_changes": True}, on_next, on_error)

        The listener is called once after the next flush with the current
        results, then after every later flush whose results differ (always,
        with ``include_metadata_changes``).

        Returns:
            A callable that stops the listener.
        """
        listener = _normalize_listener(
            options_or_observer_or_on_next, observer_or_on_next_or_on_error, on_error
        )
        subscription = SnapshotSubscription(self, listener, self._next_error("on_snapshot"))
        return subscription.start()

    def _results(self) -> dict[str, Any]:
        return compute_results(self.data, self.orders, self.limited)

    def _snapshot_ref(self) -> "MockQuery":
        parent = self.parent
        if isinstance(parent, CollectionParentProtocol) and self.id is not None:
            ref: MockQuery = parent.collection(self.id)
            return ref
        return self

    def _document_ref(self, doc_id: str) -> Any:
        """Reference for a result document; plain queries have none."""
        return None

    def __repr__(self) -> str:
        name = type(self).__name__
        return f"{name}(path={self.path!r}, orders={self.orders!r}, limit={self.limited!r})"


class SnapshotSubscription:
    """State of one ``on_snapshot`` listener.

    Keeps the last delivered results and only calls ``on_next`` again when a
    flush produces different ones.
    """

    def __init__(
        self, query: MockQuery, listener: SnapshotListener, error: BaseException | None
    ) -> None:
        self.query = query
        self.listener = listener
        self.error = error
        self.baseline = query._results()
        self.active = False
        # Drain that ran the forced first publish; None until it has run.
        self._initial_drain: int | None = None
        self._remove_hook: Callable[[], None] | None = None

    def start(self) -> Callable[[], None]:
        self.active = True
        self.deliver(forced=True)
        self._remove_hook = self.query.queue.on_post_flush(self.deliver)
        return self.unsubscribe

    def unsubscribe(self) -> None:
        self.active = False
        if self._remove_hook is not None:
            self._remove_hook()
            self._remove_hook = None

    def deliver(self, forced: bool = False) -> None:
        """Run once at registration (forced) and after every flush."""
        if not self.active:
            return
        if self.error is not None:
            self._call(self.listener.on_error, self.error)
            return
        if forced:
            # The first snapshot is a read like any other: it waits for a flush.
            self.query._defer("on_snapshot", (), lambda: self._publish(forced=True))
            return
        if self._initial_drain is None:
            return
        self._publish(forced=False)

    def _publish(self, *, forced: bool) -> None:
        if not self.active:
            return
        drain = self.query.queue.drains
        # Metadata-only deliveries skip the drain that carried the first snapshot.
        metadata = self.listener.include_metadata_changes and self._initial_drain != drain
        if forced:
            self._initial_drain = drain
        results = self.query._results()
        # values_equal treats NaN as equal to itself, so NaN fields are not a change.
        changed = not values_equal(list(results.items()), list(self.baseline.items()))
        if changed or forced or metadata:
            self.baseline = results
            self._call(self.listener.on_next, QuerySnapshot(self.query._snapshot_ref(), results))

    def _call(self, callback: Callable[[Any], None] | None, value: Any) -> None:
        if callback is None:
            logger.error("Snapshot listener on {} has no error callback: {!r}", self.query, value)
            return
        try:
            callback(value)
        except Exception:
            logger.exception("Snapshot listener on {} failed", self.query)


def _split_callbacks(
    next_or_observer: Any, on_error: Callable[[BaseException], None] | None
) -> tuple[Callable[[Any], None], Callable[[BaseException], None] | None]:
    if callable(next_or_observer):
        return next_or_observer, on_error
    if isinstance(next_or_observer, SnapshotObserverProtocol):
        return next_or_observer.on_next, next_or_observer.on_error
    msg = f"on_snapshot() needs a callback or an observer, got {next_or_observer!r}"
    raise InvalidArgumentError(msg)


def _normalize_listener(first: Any, second: Any, third: Any) -> SnapshotListener:
    """Resolve the three ``on_snapshot`` call shapes into one record."""
    if isinstance(first, Mapping):
        include = first.get("include_metadata_changes", first.get("includeMetadataChanges", False))
        on_next, on_error = _split_callbacks(second, third)
        return SnapshotListener(on_next, on_error, bool(include))
    on_next, on_error = _split_callbacks(first, second)
    return SnapshotListener(on_next, on_error)
