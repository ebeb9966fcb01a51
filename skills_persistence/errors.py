from __future__ import annotations


class PersistenceError(Exception):
    """Base class for every error raised by the persistence layer."""


class StorageError(PersistenceError):
    """A read or write against the document store failed."""


class StorageUnavailableError(StorageError):
    """The storage root could not be reached or created."""


class DocumentNotFoundError(StorageError):
    def __init__(self, collection: str, key: str):
        super().__init__(f"{collection}/{key} not found")
        self.collection = collection
        self.key = key


class DocumentExistsError(StorageError):
    def __init__(self, collection: str, key: str):
        super().__init__(f"{collection}/{key} already exists")
        self.collection = collection
        self.key = key


class VersionConflictError(PersistenceError):
    """
    Raised when a conditional write finds a different version than the one read.
    The caller may re-read and retry; nothing was written.
    """

    def __init__(self, key: str, expected: int | None, actual: int | None):
        super().__init__(f"version conflict on {key}: expected {expected}, found {actual}")
        self.key = key
        self.expected = expected
        self.actual = actual


class InvalidInputError(PersistenceError, ValueError):
    pass
