"""Configuration constants for firestore-mock."""

# Path given to root nodes created without one.
DEFAULT_ROOT_PATH: str = "Mock://"

# Only equality filters are simulated; everything else returns the full dataset.
SUPPORTED_OPERATORS: frozenset[str] = frozenset({"=="})

# Sort directions. The upper-case spellings mirror the real client's constants.
ASCENDING: str = "asc"
DESCENDING: str = "desc"
DIRECTION_ALIASES: dict[str, str] = {
    "asc": ASCENDING,
    "ASCENDING": ASCENDING,
    "desc": DESCENDING,
    "DESCENDING": DESCENDING,
}

# Generated document ids look like the ones the real client produces.
AUTO_ID_LENGTH: int = 20
AUTO_ID_ALPHABET: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"

# Seconds to wait when a flush is scheduled for the "next tick".
NEXT_TICK_DELAY: float = 0.0
