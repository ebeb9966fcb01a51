from __future__ import annotations

import json
import os
import uuid
from pathlib import Path
from typing import Any


def read_json(path: Path) -> Any | None:
    """
    Read JSON from disk.

    Returns None for missing or empty files. Unreadable files and invalid JSON raise.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    if not raw.strip():
        return None
    return json.loads(raw)


def _write_tmp(path: Path, payload: Any, indent: int, sort_keys: bool) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=indent, sort_keys=sort_keys)
            f.write("\n")
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return tmp_path


def atomic_write_json(path: Path, payload: Any, *, indent: int = 2, sort_keys: bool = True) -> None:
    """
    Atomically write JSON to disk by writing to a temp file then replacing.
    """
    tmp_path = _write_tmp(path, payload, indent, sort_keys)
    try:
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def exclusive_write_json(path: Path, payload: Any, *, indent: int = 2, sort_keys: bool = True) -> bool:
    """
    Write JSON to `path` only if nothing exists there yet.

    The temp file is hard-linked onto the target, so the existence check and the
    write are one atomic step. Returns False if the target already existed.
    """
    tmp_path = _write_tmp(path, payload, indent, sort_keys)
    try:
        os.link(tmp_path, path)
    except FileExistsError:
        return False
    finally:
        tmp_path.unlink(missing_ok=True)
    return True
