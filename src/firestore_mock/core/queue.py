"""Shared queue of deferred operations, drained on demand.

Every node of one client tree shares a single queue. Requests (``get``,
``add``, ``set``...) are pushed here and only take effect when somebody
flushes, which is how the mock simulates backend latency under test control.
"""

import threading
import uuid
from collections.abc import Callable

from loguru import logger

from firestore_mock.config import NEXT_TICK_DELAY
from firestore_mock.errors import InvalidArgumentError
from firestore_mock.models.records import PendingOperation

FlushDelay = bool | float | None


class OperationQueue:
    """FIFO of pending operations plus post-flush hooks."""

    def __init__(self) -> None:
        self._events: list[PendingOperation] = []
        self._hooks: dict[str, Callable[[], None]] = {}
        self._lock = threading.RLock()
        self.drains = 0

    def push(self, operation: PendingOperation) -> None:
        """Append an operation; it runs at the next flush."""
        with self._lock:
            self._events.append(operation)

    def get_events(self) -> list[PendingOperation]:
        """Return the operations still waiting for a flush."""
        with self._lock:
            return list(self._events)

    def on_post_flush(self, hook: Callable[[], None]) -> Callable[[], None]:
        """Run ``hook`` after every future flush.

        Returns:
            A callable that removes the hook again. Calling it twice is harmless.
        """
        hook_id = uuid.uuid4().hex
        with self._lock:
            self._hooks[hook_id] = hook

        def unsubscribe() -> None:
            with self._lock:
                self._hooks.pop(hook_id, None)

        return unsubscribe

    def flush(self, delay: FlushDelay = None) -> None:
        """Drain the queue now, on the next tick, or after ``delay`` seconds.

        Args:
            delay: ``None``/``False`` drains synchronously before returning,
                ``True`` schedules the drain for the next tick, a number
                schedules it after that many seconds.
        """
        if delay is None or delay is False:
            self._drain()
            return

        seconds = NEXT_TICK_DELAY if delay is True else float(delay)
        if seconds < 0:
            msg = f"flush delay must not be negative, got {delay!r}"
            raise InvalidArgumentError(msg)
        timer = threading.Timer(seconds, self._drain)
        timer.daemon = True
        timer.start()

    def _drain(self) -> None:
        with self._lock:
            # Operations pushed while draining wait for the next round.
            pending, self._events = self._events, []
            self.drains += 1
            logger.debug("Flushing {} queued operations", len(pending))
            while pending:
                operation = pending.pop(0)
                try:
                    operation.callback()
                except Exception:
                    self._events[:0] = pending
                    raise

            for hook in list(self._hooks.values()):
                try:
                    hook()
                except Exception:
                    logger.exception("Post-flush hook failed")
