"""Value records shared by the query engine."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from firestore_mock.config import ASCENDING


@dataclass(frozen=True)
class FieldOrder:
    """One ``order_by`` clause."""

    field_path: str
    direction: str = ASCENDING


@dataclass(frozen=True)
class PendingOperation:
    """A deferred operation waiting in the queue for the next flush."""

    callback: Callable[[], None]
    ref: Any
    method: str
    args: tuple[Any, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SnapshotListener:
    """Normalized ``on_snapshot`` arguments."""

    on_next: Callable[[Any], None]
    on_error: Callable[[BaseException], None] | None = None
    include_metadata_changes: bool = False
