"""Logging configuration for firestore-mock."""

import sys

from loguru import logger

LOG_FORMAT = "{level.icon} [firestore-mock] {name}: {message}"


def configure_logging(*, verbose: bool = False, mock_level: str | None = None) -> None:
    """Configure loguru with appropriate level.

    Args:
        verbose: Log DEBUG and up instead of INFO and up.
        mock_level: Separate level for records from ``firestore_mock`` itself,
            e.g. ``"WARNING"`` to hide queue chatter while debugging the code
            under test, or ``"DEBUG"`` to trace flushes without verbose output
            from everything else.
    """
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    levels = {"": level, "firestore_mock": mock_level or level}
    logger.add(sys.stderr, level=0, filter=levels, format=LOG_FORMAT)
