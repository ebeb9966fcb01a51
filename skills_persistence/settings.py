from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Storage
    storage_url: str
    database_name: str

    # Key skill tags by their text as supplied (stores written by older versions)
    legacy_tag_keys: bool


def get_settings(env_file: str | None = "local.env") -> Settings:
    if env_file:
        load_dotenv(env_file)

    storage_url = os.getenv("SKILLS_STORAGE_URL", "file://./data").strip()
    database_name = os.getenv("SKILLS_DATABASE", "skills").strip()
    legacy_tag_keys = _env_bool("SKILLS_LEGACY_TAG_KEYS", False)

    return Settings(
        storage_url=storage_url,
        database_name=database_name,
        legacy_tag_keys=legacy_tag_keys,
    )
