"""Errors raised by the mock itself.

Injected test errors (see ``MockQuery.fail_next``) are whatever exception the
test registers; the classes here cover misuse of the mock and the few failure
modes the real backend reports on its own.
"""


class MockFirestoreError(Exception):
    """Base error type for firestore-mock."""


class NotFoundError(MockFirestoreError, LookupError):
    """Raised when updating a document that does not exist."""


class InvalidArgumentError(MockFirestoreError, ValueError):
    """Raised for arguments the mock cannot act on (negative delays, bad ids...)."""
