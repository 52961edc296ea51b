"""Document data helpers: copying, sanitizing, ids and path names."""

import copy
import re
import secrets
from datetime import UTC, datetime
from typing import Any

from firestore_mock.config import AUTO_ID_ALPHABET, AUTO_ID_LENGTH

_NAME_PATTERN = re.compile(r"/([^.$\[\]#/]+)$")


class Sentinel:
    """Placeholder value with special meaning on write (see ``clean_data``)."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Sentinel({self.name})"

    # Sentinels are compared by identity, so copies must be the same object.
    def __copy__(self) -> "Sentinel":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "Sentinel":
        return self


DELETE_FIELD = Sentinel("DELETE_FIELD")
SERVER_TIMESTAMP = Sentinel("SERVER_TIMESTAMP")


def clone(value: Any) -> Any:
    """Deep copy with no shared mutable state."""
    return copy.deepcopy(value)


def clean_data(raw: Any) -> Any:
    """Normalize document data before it is stored.

    - ``DELETE_FIELD`` values are dropped from mappings and lists.
    - ``SERVER_TIMESTAMP`` becomes the current UTC time.
    - Tuples become lists.

    Applying it twice gives the same result as applying it once.
    """
    if raw is SERVER_TIMESTAMP:
        return datetime.now(UTC)
    if isinstance(raw, dict):
        return {key: clean_data(value) for key, value in raw.items() if value is not DELETE_FIELD}
    if isinstance(raw, list | tuple):
        return [clean_data(item) for item in raw if item is not DELETE_FIELD]
    return raw


def extract_name(path: str | None) -> str | None:
    """Return the last segment of a path, or None when there is none.

    >>> extract_name("Mock://users/alice")
    'alice'
    >>> extract_name("Mock://") is None
    True
    """
    match = _NAME_PATTERN.search(path or "")
    return match.group(1) if match else None


def auto_id() -> str:
    """Generate a random document id."""
    return "".join(secrets.choice(AUTO_ID_ALPHABET) for _ in range(AUTO_ID_LENGTH))
