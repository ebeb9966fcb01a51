from __future__ import annotations

from pathlib import Path
from urllib.parse import quote, unquote, urlparse

DOCUMENT_SUFFIX = ".json"


def storage_root(connection_string: str) -> Path:
    """
    Resolve a connection string to a storage root directory.

    Accepts a plain path or a file:// URL ("file:///srv/skills",
    "file://localhost/srv/skills", "file://./data").
    """
    if connection_string.startswith("file://"):
        parsed = urlparse(connection_string)
        # file://./data parses "." as the netloc; localhost means this machine
        host = "" if parsed.netloc.lower() == "localhost" else parsed.netloc
        raw = unquote(host + parsed.path)
    else:
        raw = connection_string
    return Path(raw).expanduser()


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def database_dir(root: Path, database_name: str) -> Path:
    return root / database_name


def collection_dir(database_dir: Path, collection: str) -> Path:
    return database_dir / collection


def document_filename(key: str) -> str:
    # Keys are emails and free-text tags; anything path-like must be escaped.
    return quote(key, safe="@+-_") + DOCUMENT_SUFFIX


def key_from_filename(filename: str) -> str:
    return unquote(filename[: -len(DOCUMENT_SUFFIX)])
