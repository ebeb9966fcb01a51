from __future__ import annotations

import contextlib
import logging
import shutil
from pathlib import Path
from typing import Any, Iterator, Mapping

from .errors import (
    DocumentExistsError,
    DocumentNotFoundError,
    StorageError,
    StorageUnavailableError,
    VersionConflictError,
)
from .interfaces import DocumentCollection, KeyValueDocumentStore
from .json_store import atomic_write_json, exclusive_write_json, read_json
from .locks import GLOBAL_PATH_LOCKS
from .paths import (
    DOCUMENT_SUFFIX,
    collection_dir,
    database_dir,
    document_filename,
    ensure_dir,
    storage_root,
)

logger = logging.getLogger(__name__)


class DiskJsonDocumentStore(KeyValueDocumentStore):
    """
    Stores a single JSON document on disk at a fixed path.

    - Returns None for a missing document; unreadable or non-object JSON raises StorageError.
    - Writes atomically.
    """

    def __init__(self, path: Path, *, collection: str = "", key: str = ""):
        self._path = path
        self._collection = collection
        self._key = key or path.stem

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any] | None:
        try:
            raw = read_json(self._path)
        except (OSError, ValueError) as exc:
            logger.error("Failed to read %s: %s", self._path, exc)
            raise StorageError(f"cannot read {self._collection}/{self._key}") from exc
        if raw is None:
            return None
        if not isinstance(raw, dict):
            raise StorageError(f"{self._collection}/{self._key} is not a JSON object")
        return raw

    def save(self, doc: dict[str, Any]) -> None:
        lock = GLOBAL_PATH_LOCKS.lock_for(self._path)
        with lock:
            self._write(doc)

    def create(self, doc: dict[str, Any]) -> None:
        try:
            created = exclusive_write_json(self._path, doc)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Failed to insert %s: %s", self._path, exc)
            raise StorageError(f"cannot insert {self._collection}/{self._key}") from exc
        if not created:
            raise DocumentExistsError(self._collection, self._key)

    def compare_and_save(self, doc: dict[str, Any], *, field: str, expected: Any) -> None:
        lock = GLOBAL_PATH_LOCKS.lock_for(self._path)
        with lock:
            current = self.load()
            actual = current.get(field) if current is not None else None
            if current is None or actual != expected:
                raise VersionConflictError(self._key, expected, actual)
            self._write(doc)

    def delete(self) -> None:
        lock = GLOBAL_PATH_LOCKS.lock_for(self._path)
        with lock:
            try:
                self._path.unlink()
            except FileNotFoundError:
                raise DocumentNotFoundError(self._collection, self._key) from None
            except OSError as exc:
                logger.error("Failed to remove %s: %s", self._path, exc)
                raise StorageError(f"cannot remove {self._collection}/{self._key}") from exc

    def _write(self, doc: dict[str, Any]) -> None:
        try:
            atomic_write_json(self._path, doc)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Failed to write %s: %s", self._path, exc)
            raise StorageError(f"cannot write {self._collection}/{self._key}") from exc


class DiskCollection(DocumentCollection):
    """
    A directory of JSON documents, one file per key.

    A collection taken from a session stops working once that session closes.
    """

    def __init__(self, name: str, directory: Path, session: DiskSession | None = None):
        self.name = name
        self._dir = directory
        self._session = session

    def _check_open(self) -> None:
        if self._session is not None and self._session.closed:
            raise StorageError(f"session for {self.name} is closed")

    @property
    def directory(self) -> Path:
        return self._dir

    def document(self, key: str) -> DiskJsonDocumentStore:
        self._check_open()
        return DiskJsonDocumentStore(self._dir / document_filename(key), collection=self.name, key=key)

    def find_one(self, key: str) -> dict[str, Any] | None:
        return self.document(key).load()

    def find(self, criteria: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        self._check_open()
        criteria = criteria or {}
        try:
            paths = sorted(self._dir.glob(f"*{DOCUMENT_SUFFIX}")) if self._dir.exists() else []
        except OSError as exc:
            logger.error("Failed to list collection %s: %s", self.name, exc)
            raise StorageError(f"cannot list {self.name}") from exc

        results: list[dict[str, Any]] = []
        for path in paths:
            doc = DiskJsonDocumentStore(path, collection=self.name).load()
            # removed between glob and read
            if doc is None:
                continue
            if all(doc.get(k) == v for k, v in criteria.items()):
                results.append(doc)
        return results

    def upsert(self, key: str, doc: dict[str, Any]) -> None:
        self.document(key).save(doc)

    def insert(self, key: str, doc: dict[str, Any]) -> None:
        self.document(key).create(doc)

    def replace_if(self, key: str, doc: dict[str, Any], *, field: str, expected: Any) -> None:
        self.document(key).compare_and_save(doc, field=field, expected=expected)

    def remove(self, key: str) -> None:
        self.document(key).delete()

    def drop(self) -> None:
        self._check_open()
        try:
            shutil.rmtree(self._dir)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.error("Failed to drop collection %s: %s", self.name, exc)
            raise StorageError(f"cannot drop {self.name}") from exc


class DiskSession:
    """
    Handle on an opened database. Once the owning `session()` block exits, neither
    the session nor any collection taken from it can be used.
    """

    def __init__(self, directory: Path):
        self._dir = directory
        self._open = True

    def collection(self, name: str) -> DiskCollection:
        if not self._open:
            raise StorageError("session is closed")
        return DiskCollection(name, collection_dir(self._dir, name), self)

    @property
    def closed(self) -> bool:
        return not self._open

    def close(self) -> None:
        self._open = False


class DiskDatabase:
    """
    A named database under a storage root.

    Layout: <root>/<database_name>/<collection>/<quoted key>.json
    """

    def __init__(self, connection_string: str, database_name: str):
        if not database_name or "/" in database_name or database_name in (".", ".."):
            raise ValueError(f"invalid database name: {database_name!r}")
        self._root = storage_root(connection_string)
        self._dir = database_dir(self._root, database_name)
        self.name = database_name

    @property
    def path(self) -> Path:
        return self._dir

    @contextlib.contextmanager
    def session(self) -> Iterator[DiskSession]:
        try:
            ensure_dir(self._dir)
        except OSError as exc:
            logger.error("Failed to open storage at %s: %s", self._dir, exc)
            raise StorageUnavailableError(f"cannot open database {self.name!r} at {self._root}") from exc

        session = DiskSession(self._dir)
        try:
            yield session
        finally:
            session.close()
