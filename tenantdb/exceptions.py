"""
Custom exceptions for the data-access layer.
"""


class RepositoryError(Exception):
    """Base exception for repository errors."""
    pass


class NotFoundError(RepositoryError):
    """Raised when an update or delete targets a key with no matching record."""

    def __init__(self, label: str, key):
        self.label = label
        self.key = key
        super().__init__(f"No {label} found for {key!r}.")


class PersistenceError(RepositoryError):
    """Raised when the data store rejects or fails to execute an operation.

    The message is always generic; the underlying cause is logged where it
    happens and never attached to the exception.
    """
    pass


class InvalidQueryError(PersistenceError):
    """Raised when a caller asks for an undeclared field, filter, sort key or relation."""
    pass
