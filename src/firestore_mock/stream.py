"""Push-style stream over the documents of a query result."""

import threading
from collections.abc import Callable
from concurrent.futures import Future
from typing import Any

from loguru import logger

from firestore_mock.errors import InvalidArgumentError
from firestore_mock.snapshot import QuerySnapshot

STREAM_EVENTS: tuple[str, ...] = ("data", "end", "error")


class DocumentStream:
    """Emits ``data`` once per document, then ``end``; or ``error`` if the read fails.

    Events are recorded, so a handler attached after the read settled is
    still called with everything it missed, in the original order.
    """

    def __init__(self, future: "Future[QuerySnapshot]") -> None:
        self._handlers: dict[str, list[Callable[..., Any]]] = {name: [] for name in STREAM_EVENTS}
        self._emitted: list[tuple[str, tuple[Any, ...]]] = []
        self._lock = threading.RLock()
        future.add_done_callback(self._settle)

    def on(self, event: str, handler: Callable[..., Any]) -> "DocumentStream":
        """Attach a handler. ``data`` gets a DocumentSnapshot, ``error`` the exception."""
        if event not in self._handlers:
            msg = f"unknown stream event {event!r}, expected one of {STREAM_EVENTS!r}"
            raise InvalidArgumentError(msg)
        with self._lock:
            self._handlers[event].append(handler)
            missed = [args for name, args in self._emitted if name == event]
        # Handlers run without the lock held; they may flush the queue.
        for args in missed:
            self._call(handler, event, args)
        return self

    def _settle(self, future: "Future[QuerySnapshot]") -> None:
        error = future.exception()
        if error is not None:
            self._emit("error", error)
            return
        for doc in future.result():
            self._emit("data", doc)
        self._emit("end")

    def _emit(self, event: str, *args: Any) -> None:
        with self._lock:
            self._emitted.append((event, args))
            handlers = list(self._handlers[event])
        for handler in handlers:
            self._call(handler, event, args)

    @staticmethod
    def _call(handler: Callable[..., Any], event: str, args: tuple[Any, ...]) -> None:
        try:
            handler(*args)
        except Exception:
            logger.exception("Stream handler for {!r} failed", event)
