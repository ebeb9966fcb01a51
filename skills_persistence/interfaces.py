from __future__ import annotations

from typing import Any, Mapping, Protocol


class KeyValueDocumentStore(Protocol):
    """
    A single JSON-like document persisted under a key.
    """

    def load(self) -> dict[str, Any] | None:
        """Load and return the full document, or None if it does not exist."""
        ...

    def save(self, doc: dict[str, Any]) -> None:
        """Persist the full document atomically, replacing any previous one."""
        ...

    def create(self, doc: dict[str, Any]) -> None:
        """Persist the document only if none exists yet (raises DocumentExistsError)."""
        ...

    def delete(self) -> None:
        """Remove the document (raises DocumentNotFoundError if absent)."""
        ...


class DocumentCollection(Protocol):
    """
    Minimal DB-friendly interface: a named set of documents addressed by string key.
    """

    name: str

    def find_one(self, key: str) -> dict[str, Any] | None: ...

    def find(self, criteria: Mapping[str, Any] | None = None) -> list[dict[str, Any]]: ...

    def upsert(self, key: str, doc: dict[str, Any]) -> None: ...

    def insert(self, key: str, doc: dict[str, Any]) -> None: ...

    def replace_if(self, key: str, doc: dict[str, Any], *, field: str, expected: Any) -> None: ...

    def remove(self, key: str) -> None: ...

    def drop(self) -> None: ...
