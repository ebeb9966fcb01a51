from __future__ import annotations

import pytest

from skills_persistence.disk_store import DiskCollection
from skills_persistence.errors import StorageError
from skills_persistence.skill_tags import DiskSkillTagRepository


def test_add_and_list_skill_tags(data_access):
    data_access.add_skill_tags(["Go Lang", "Rust", "go lang"])

    assert sorted(data_access.list_skill_tags()) == ["go-lang", "rust"]


def test_list_skill_tags_empty(data_access):
    assert data_access.list_skill_tags() == []


def test_delete_skill_tags_by_any_spelling(data_access):
    data_access.add_skill_tags(["Go Lang", "Rust"])

    data_access.delete_skill_tags(["GO LANG"])

    assert data_access.list_skill_tags() == ["rust"]


def test_delete_unknown_skill_tag_is_not_an_error(data_access):
    data_access.delete_skill_tags(["never-added"])
    assert data_access.list_skill_tags() == []


def test_tags_with_path_characters(data_access):
    data_access.add_skill_tags(["C/C++", "..", "Node.js"])

    assert sorted(data_access.list_skill_tags()) == ["..", "c/c++", "node.js"]

    data_access.delete_skill_tags(["c/c++"])
    assert sorted(data_access.list_skill_tags()) == ["..", "node.js"]


def test_legacy_keys_use_original_text(database):
    repo = DiskSkillTagRepository(database, legacy_tag_keys=True)

    repo.add_skill_tags(["Go Lang", "go lang"])

    # two keys, same normalized name
    assert repo.list_skill_tags() == ["go-lang", "go-lang"]
    with database.session() as session:
        assert session.collection("skills").find_one("Go Lang") == {"name": "go-lang"}

    repo.delete_skill_tags(["go lang"])
    assert repo.list_skill_tags() == ["go-lang"]


def test_add_skill_tags_aborts_on_first_failure(data_access, monkeypatch: pytest.MonkeyPatch):
    real_upsert = DiskCollection.upsert

    def flaky_upsert(self, key, doc):
        if key == "rust":
            raise StorageError("disk full")
        real_upsert(self, key, doc)

    monkeypatch.setattr(DiskCollection, "upsert", flaky_upsert)

    with pytest.raises(StorageError):
        data_access.add_skill_tags(["go", "rust", "zig"])

    # no rollback of "go"; "zig" never written
    assert data_access.list_skill_tags() == ["go"]


def test_delete_skill_tags_aborts_on_storage_failure(data_access, monkeypatch: pytest.MonkeyPatch):
    data_access.add_skill_tags(["go", "rust", "zig"])
    real_remove = DiskCollection.remove

    def flaky_remove(self, key):
        if key == "rust":
            raise StorageError("permission denied")
        real_remove(self, key)

    monkeypatch.setattr(DiskCollection, "remove", flaky_remove)

    with pytest.raises(StorageError):
        data_access.delete_skill_tags(["go", "rust", "zig"])

    assert sorted(data_access.list_skill_tags()) == ["rust", "zig"]
