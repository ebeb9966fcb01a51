from __future__ import annotations

import logging
from typing import Iterable, Protocol

from pydantic import BaseModel

from .disk_store import DiskDatabase
from .errors import DocumentNotFoundError
from .tags import clean_tag

logger = logging.getLogger(__name__)

SKILLS = "skills"


class SkillTagRecord(BaseModel):
    name: str


class SkillTagRepository(Protocol):
    def list_skill_tags(self) -> list[str]:
        ...

    def add_skill_tags(self, tags: Iterable[str]) -> None:
        ...

    def delete_skill_tags(self, tags: Iterable[str]) -> None:
        ...


class DiskSkillTagRepository(SkillTagRepository):
    """
    The shared vocabulary of skill tags, one document per tag.

    Documents are keyed by the normalized tag. With legacy_tag_keys=True they are
    keyed by the tag text as supplied instead (the stored name is still
    normalized), which matches stores written by earlier versions.

    Batches are not transactional: the first failing tag aborts the batch and
    tags already written stay written.
    """

    def __init__(self, database: DiskDatabase, *, legacy_tag_keys: bool = False):
        self._db = database
        self._legacy_tag_keys = legacy_tag_keys

    def _key(self, tag: str) -> str:
        return tag if self._legacy_tag_keys else clean_tag(tag)

    def list_skill_tags(self) -> list[str]:
        with self._db.session() as session:
            docs = session.collection(SKILLS).find()
        return [SkillTagRecord.model_validate(d).name for d in docs]

    def add_skill_tags(self, tags: Iterable[str]) -> None:
        with self._db.session() as session:
            skills = session.collection(SKILLS)
            for tag in tags:
                record = SkillTagRecord(name=clean_tag(tag))
                skills.upsert(self._key(tag), record.model_dump(mode="json"))

    def delete_skill_tags(self, tags: Iterable[str]) -> None:
        with self._db.session() as session:
            skills = session.collection(SKILLS)
            for tag in tags:
                try:
                    skills.remove(self._key(tag))
                except DocumentNotFoundError:
                    logger.debug("Skill tag %r was not stored", tag)
