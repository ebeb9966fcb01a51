from __future__ import annotations

import asyncio
from typing import Iterable, Protocol

from .configuration import ConfigurationRecord
from .data_access import DiskDataAccess
from .profiles import ProfileRecord, ProfileUpdate, ProfileUpdateResult


class AsyncDataAccess(Protocol):
    async def list_profiles(self, email_address: str) -> list[ProfileRecord]: ...
    async def get_profile(self, email_address: str) -> ProfileRecord | None: ...
    async def update_profile(self, update: ProfileUpdate) -> ProfileUpdateResult: ...
    async def delete_profile(self, email_address: str) -> bool: ...

    async def list_skill_tags(self) -> list[str]: ...
    async def add_skill_tags(self, tags: Iterable[str]) -> None: ...
    async def delete_skill_tags(self, tags: Iterable[str]) -> None: ...

    async def get_or_create_configuration(self) -> ConfigurationRecord: ...
    async def delete_configuration(self) -> None: ...


class AsyncDiskDataAccess(AsyncDataAccess):
    """
    Async wrapper around the disk-backed data access.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O.
    """

    def __init__(self, data_access: DiskDataAccess) -> None:
        self._da = data_access

    async def list_profiles(self, email_address: str) -> list[ProfileRecord]:
        return await asyncio.to_thread(self._da.list_profiles, email_address)

    async def get_profile(self, email_address: str) -> ProfileRecord | None:
        return await asyncio.to_thread(self._da.get_profile, email_address)

    async def update_profile(self, update: ProfileUpdate) -> ProfileUpdateResult:
        return await asyncio.to_thread(self._da.update_profile, update)

    async def delete_profile(self, email_address: str) -> bool:
        return await asyncio.to_thread(self._da.delete_profile, email_address)

    async def list_skill_tags(self) -> list[str]:
        return await asyncio.to_thread(self._da.list_skill_tags)

    async def add_skill_tags(self, tags: Iterable[str]) -> None:
        # materialize before leaving the event loop thread
        await asyncio.to_thread(self._da.add_skill_tags, list(tags))

    async def delete_skill_tags(self, tags: Iterable[str]) -> None:
        await asyncio.to_thread(self._da.delete_skill_tags, list(tags))

    async def get_or_create_configuration(self) -> ConfigurationRecord:
        return await asyncio.to_thread(self._da.get_or_create_configuration)

    async def delete_configuration(self) -> None:
        await asyncio.to_thread(self._da.delete_configuration)
