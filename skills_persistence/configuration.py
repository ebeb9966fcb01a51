from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Protocol

from cryptography.fernet import Fernet
from pydantic import BaseModel, Field

from .disk_store import DiskDatabase
from .errors import DocumentExistsError, DocumentNotFoundError

logger = logging.getLogger(__name__)

CONFIGURATION = "configuration"
CONFIGURATION_KEY = "configuration"


def create_session_encryption_key() -> str:
    return Fernet.generate_key().decode("utf-8")


class ConfigurationRecord(BaseModel):
    session_encryption_key: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc).replace(microsecond=0))

    @classmethod
    def generate(cls) -> "ConfigurationRecord":
        return cls(session_encryption_key=create_session_encryption_key())

    def fernet(self) -> Fernet:
        return Fernet(self.session_encryption_key.encode("utf-8"))


class ConfigurationRepository(Protocol):
    def get_or_create_configuration(self) -> ConfigurationRecord:
        ...

    def delete_configuration(self) -> None:
        ...


class DiskConfigurationRepository(ConfigurationRepository):
    """
    Singleton application configuration, created lazily on first access.

    Several processes may bootstrap at once: each attempts an insert-if-absent,
    losers see DocumentExistsError and read back the winner's document, so all
    of them end up with the same session encryption key.
    """

    def __init__(self, database: DiskDatabase):
        self._db = database

    def _get(self) -> ConfigurationRecord | None:
        with self._db.session() as session:
            doc = session.collection(CONFIGURATION).find_one(CONFIGURATION_KEY)
        return ConfigurationRecord.model_validate(doc) if doc is not None else None

    def _attempt_to_create(self) -> None:
        record = ConfigurationRecord.generate()
        with self._db.session() as session:
            try:
                session.collection(CONFIGURATION).insert(CONFIGURATION_KEY, record.model_dump(mode="json"))
            except DocumentExistsError:
                logger.debug("Configuration was created concurrently; using the existing one")
                return
        logger.info("Created application configuration")

    def get_or_create_configuration(self) -> ConfigurationRecord:
        configuration = self._get()
        if configuration is not None:
            return configuration

        self._attempt_to_create()
        configuration = self._get()
        if configuration is None:
            # deleted again between insert and read
            raise DocumentNotFoundError(CONFIGURATION, CONFIGURATION_KEY)
        return configuration

    def delete_configuration(self) -> None:
        # Drops the whole collection, not just the singleton document.
        with self._db.session() as session:
            session.collection(CONFIGURATION).drop()
        logger.info("Deleted application configuration")
