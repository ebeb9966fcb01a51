from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Protocol

from pydantic import BaseModel, Field

from .disk_store import DiskDatabase
from .errors import DocumentExistsError, DocumentNotFoundError, InvalidInputError, VersionConflictError

logger = logging.getLogger(__name__)

PROFILES = "profiles"


class SkillRecord(BaseModel):
    skill: str
    level: int


class SkillSnapshot(BaseModel):
    date: datetime | None = None
    skills: list[SkillRecord] = Field(default_factory=list)


class ProfileRecord(BaseModel):
    """
    Stored shape of a profile document (collection "profiles", keyed by email address):
      {
        "email_address": "bob@x.com",
        "domain": "x.com",
        "skills": [{"skill": "go", "level": 3}],
        "skills_history": [{"date": "...", "skills": [...]}],
        "availability": <any>,
        "version": 1,
        "last_updated": "2026-01-01T12:00:00Z"
      }
    """

    email_address: str
    domain: str = ""
    skills: list[SkillRecord] = Field(default_factory=list)
    skills_history: list[SkillSnapshot] = Field(default_factory=list)
    availability: Any = None
    version: int = 0
    last_updated: datetime | None = None


class ProfileUpdate(BaseModel):
    email_address: str
    skills: list[SkillRecord] = Field(default_factory=list)
    availability: Any = None


class ProfileUpdateResult(BaseModel):
    profile: ProfileRecord
    created: bool


def get_domain(email_address: str) -> str:
    local, sep, domain = email_address.partition("@")
    if not sep or not local or not domain or "@" in domain:
        raise InvalidInputError(f"not an email address: {email_address!r}")
    return domain.lower()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProfileRepository(Protocol):
    def list_profiles(self, email_address: str) -> list[ProfileRecord]:
        ...

    def get_profile(self, email_address: str) -> ProfileRecord | None:
        ...

    def update_profile(self, update: ProfileUpdate) -> ProfileUpdateResult:
        ...

    def delete_profile(self, email_address: str) -> bool:
        ...


class DiskProfileRepository(ProfileRepository):
    """
    Profiles live in one document per email address. There is no insert call:
    the first update creates the profile.

    Updates are read-modify-write guarded by the stored version. If another
    writer changed the profile between the read and the write, the update is
    rejected with VersionConflictError rather than overwriting it.
    """

    def __init__(self, database: DiskDatabase, *, clock: Callable[[], datetime] | None = None):
        self._db = database
        self._clock = clock or utc_now

    def list_profiles(self, email_address: str) -> list[ProfileRecord]:
        domain = get_domain(email_address)
        with self._db.session() as session:
            docs = session.collection(PROFILES).find({"domain": domain})
        return [ProfileRecord.model_validate(d) for d in docs]

    def get_profile(self, email_address: str) -> ProfileRecord | None:
        with self._db.session() as session:
            doc = session.collection(PROFILES).find_one(email_address)
        if doc is None:
            logger.debug("No profile for %s", email_address)
            return None
        return ProfileRecord.model_validate(doc)

    def update_profile(self, update: ProfileUpdate) -> ProfileUpdateResult:
        logger.info("Updating profile for %s", update.email_address)
        domain = get_domain(update.email_address)

        with self._db.session() as session:
            profiles = session.collection(PROFILES)

            existing = profiles.find_one(update.email_address)
            created = existing is None
            if created:
                logger.info("New profile for %s", update.email_address)
                profile = ProfileRecord(email_address=update.email_address)
            else:
                logger.debug("Found existing profile for %s", update.email_address)
                profile = ProfileRecord.model_validate(existing)
            read_version = profile.version

            # Current skills move to history only once they are superseded.
            if profile.skills:
                profile.skills_history.append(SkillSnapshot(date=profile.last_updated, skills=profile.skills))

            profile.skills = [SkillRecord(skill=s.skill.lower(), level=s.level) for s in update.skills]
            profile.availability = update.availability
            profile.version = read_version + 1
            profile.last_updated = self._clock().replace(microsecond=0)
            profile.domain = domain

            doc = profile.model_dump(mode="json")
            if created:
                try:
                    profiles.insert(update.email_address, doc)
                except DocumentExistsError:
                    logger.warning("Profile for %s was created concurrently", update.email_address)
                    winner = profiles.find_one(update.email_address) or {}
                    raise VersionConflictError(update.email_address, read_version, winner.get("version")) from None
            else:
                profiles.replace_if(update.email_address, doc, field="version", expected=read_version)

        return ProfileUpdateResult(profile=profile, created=created)

    def delete_profile(self, email_address: str) -> bool:
        with self._db.session() as session:
            try:
                session.collection(PROFILES).remove(email_address)
            except DocumentNotFoundError:
                logger.debug("No profile to delete for %s", email_address)
                return False
        return True
