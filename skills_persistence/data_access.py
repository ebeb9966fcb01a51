from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable, Protocol

from .configuration import ConfigurationRecord, DiskConfigurationRepository
from .disk_store import DiskDatabase
from .profiles import DiskProfileRepository, ProfileRecord, ProfileUpdate, ProfileUpdateResult
from .settings import Settings
from .skill_tags import DiskSkillTagRepository


class DataAccess(Protocol):
    """
    Everything the skills directory reads from or writes to storage.
    """

    def list_profiles(self, email_address: str) -> list[ProfileRecord]: ...
    def get_profile(self, email_address: str) -> ProfileRecord | None: ...
    def update_profile(self, update: ProfileUpdate) -> ProfileUpdateResult: ...
    def delete_profile(self, email_address: str) -> bool: ...

    def list_skill_tags(self) -> list[str]: ...
    def add_skill_tags(self, tags: Iterable[str]) -> None: ...
    def delete_skill_tags(self, tags: Iterable[str]) -> None: ...

    def get_or_create_configuration(self) -> ConfigurationRecord: ...
    def delete_configuration(self) -> None: ...


class DiskDataAccess(DataAccess):
    """
    DataAccess over a DiskDatabase. The three repositories share the database
    handle and nothing else.
    """

    def __init__(
        self,
        connection_string: str,
        database_name: str,
        *,
        legacy_tag_keys: bool = False,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.database = DiskDatabase(connection_string, database_name)
        self.profiles = DiskProfileRepository(self.database, clock=clock)
        self.skill_tags = DiskSkillTagRepository(self.database, legacy_tag_keys=legacy_tag_keys)
        self.configuration = DiskConfigurationRepository(self.database)

    @classmethod
    def from_settings(cls, settings: Settings) -> "DiskDataAccess":
        return cls(settings.storage_url, settings.database_name, legacy_tag_keys=settings.legacy_tag_keys)

    def list_profiles(self, email_address: str) -> list[ProfileRecord]:
        return self.profiles.list_profiles(email_address)

    def get_profile(self, email_address: str) -> ProfileRecord | None:
        return self.profiles.get_profile(email_address)

    def update_profile(self, update: ProfileUpdate) -> ProfileUpdateResult:
        return self.profiles.update_profile(update)

    def delete_profile(self, email_address: str) -> bool:
        return self.profiles.delete_profile(email_address)

    def list_skill_tags(self) -> list[str]:
        return self.skill_tags.list_skill_tags()

    def add_skill_tags(self, tags: Iterable[str]) -> None:
        self.skill_tags.add_skill_tags(tags)

    def delete_skill_tags(self, tags: Iterable[str]) -> None:
        self.skill_tags.delete_skill_tags(tags)

    def get_or_create_configuration(self) -> ConfigurationRecord:
        return self.configuration.get_or_create_configuration()

    def delete_configuration(self) -> None:
        self.configuration.delete_configuration()
