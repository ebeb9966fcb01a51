from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


class FakeClock:
    """Returns `start`, then advances one minute per call."""

    def __init__(self, start: datetime):
        self.now = start
        self.calls = 0

    def __call__(self) -> datetime:
        value = self.now
        self.now = self.now + timedelta(minutes=1)
        self.calls += 1
        return value


@pytest.fixture
def clock() -> FakeClock:
    # sub-second part checks the truncation
    return FakeClock(datetime(2026, 1, 5, 9, 30, 0, 750000, tzinfo=timezone.utc))


@pytest.fixture
def storage_dir(tmp_path: Path) -> Path:
    """
    Storage root for a test; never touches a real ./data.
    """
    return tmp_path / "store"


@pytest.fixture
def database(storage_dir: Path):
    from skills_persistence.disk_store import DiskDatabase

    return DiskDatabase(str(storage_dir), "skills")


@pytest.fixture
def data_access(storage_dir: Path, clock: FakeClock):
    from skills_persistence.data_access import DiskDataAccess

    return DiskDataAccess(str(storage_dir), "skills", clock=clock)
