from __future__ import annotations

from .configuration import ConfigurationRecord, ConfigurationRepository, DiskConfigurationRepository
from .data_access import DataAccess, DiskDataAccess
from .disk_store import DiskDatabase
from .errors import (
    DocumentExistsError,
    DocumentNotFoundError,
    InvalidInputError,
    PersistenceError,
    StorageError,
    StorageUnavailableError,
    VersionConflictError,
)
from .profiles import (
    DiskProfileRepository,
    ProfileRecord,
    ProfileRepository,
    ProfileUpdate,
    ProfileUpdateResult,
    SkillRecord,
    SkillSnapshot,
)
from .repositories import AsyncDataAccess, AsyncDiskDataAccess
from .settings import Settings, get_settings
from .skill_tags import DiskSkillTagRepository, SkillTagRepository
from .tags import clean_tag

__all__ = [
    "DataAccess",
    "DiskDataAccess",
    "AsyncDataAccess",
    "AsyncDiskDataAccess",
    "DiskDatabase",
    "ProfileRepository",
    "DiskProfileRepository",
    "ProfileRecord",
    "ProfileUpdate",
    "ProfileUpdateResult",
    "SkillRecord",
    "SkillSnapshot",
    "SkillTagRepository",
    "DiskSkillTagRepository",
    "ConfigurationRepository",
    "DiskConfigurationRepository",
    "ConfigurationRecord",
    "clean_tag",
    "Settings",
    "get_settings",
    "PersistenceError",
    "StorageError",
    "StorageUnavailableError",
    "DocumentNotFoundError",
    "DocumentExistsError",
    "VersionConflictError",
    "InvalidInputError",
]
