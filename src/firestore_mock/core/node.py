"""Plumbing shared by every node of a mock client tree."""

import weakref
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any, Self, TypeVar

from loguru import logger

from firestore_mock.config import DEFAULT_ROOT_PATH
from firestore_mock.core.data import extract_name
from firestore_mock.core.queue import FlushDelay, OperationQueue
from firestore_mock.models.records import PendingOperation


T = TypeVar("T")


def settle(future: "Future[T]", error: BaseException | None, produce: Callable[[], T]) -> None:
    """Complete a deferred operation's future.

    Fails with ``error`` when one was injected, otherwise resolves with what
    ``produce`` returns (or fails with what it raises). Cancelled futures are
    left alone.
    """
    if not future.set_running_or_notify_cancel():
        return
    if error is not None:
        future.set_exception(error)
        return
    try:
        result = produce()
    except Exception as exc:
        future.set_exception(exc)
        return
    future.set_result(result)


def _same_delay(left: FlushDelay, right: FlushDelay) -> bool:
    # True == 1 and False == 0, so compare types as well.
    return type(left) is type(right) and left == right


class TreeNode:
    """A node of the client tree: client, collection, document or query.

    The root creates the operation queue; every descendant shares it by
    reference. Parents are held weakly, children strongly.
    """

    def __init__(
        self,
        path: str | None = None,
        parent: "TreeNode | None" = None,
        name: str | None = None,
    ) -> None:
        self.path = path or DEFAULT_ROOT_PATH
        self.id = name if parent is not None else extract_name(self.path)
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self.queue: OperationQueue = parent.queue if parent is not None else OperationQueue()
        self.flush_delay: FlushDelay = parent.flush_delay if parent is not None else False
        self.children: dict[str, TreeNode] = {}
        self.errors: dict[str, BaseException] = {}

    @property
    def parent(self) -> "TreeNode | None":
        return self._parent_ref() if self._parent_ref is not None else None

    def flush(self, delay: FlushDelay = None) -> Self:
        """Drain the shared queue (every node's pending operations, not just ours)."""
        self.queue.flush(delay)
        return self

    def auto_flush(self, delay: FlushDelay = True) -> Self:
        """Flush automatically after every queued operation, tree-wide.

        ``auto_flush(False)`` turns it off again. The setting is pushed to all
        children and up to the parent so the whole tree stays consistent.
        """
        if delay is None:
            delay = True
        if not _same_delay(self.flush_delay, delay):
            self.flush_delay = delay
            for child in list(self.children.values()):
                child.auto_flush(delay)
            parent = self.parent
            if parent is not None:
                parent.auto_flush(delay)
        return self

    def get_flush_queue(self) -> list[PendingOperation]:
        return self.queue.get_events()

    def fail_next(self, method: str, error: BaseException) -> Self:
        """Make the next call to ``method`` on this node fail with ``error``."""
        self.errors[method] = error
        return self

    def _next_error(self, method: str) -> BaseException | None:
        error = self.errors.pop(method, None)
        if error is not None:
            logger.debug("Injecting {!r} into {}.{}()", error, self.path, method)
        return error

    def _defer(self, method: str, args: tuple[Any, ...], callback: Callable[[], None]) -> None:
        self.queue.push(PendingOperation(callback=callback, ref=self, method=method, args=args))
        if self.flush_delay is not False:
            self.flush(self.flush_delay)

    def __str__(self) -> str:
        return self.path
