from __future__ import annotations

import pytest

from skills_persistence.tags import clean_tag


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Go Lang", "go-lang"),
        ("python", "python"),
        ("  Spaced  Out ", "--spaced--out-"),
        ("C++", "c++"),
        ("", ""),
        ("Already-Clean", "already-clean"),
    ],
)
def test_clean_tag(raw, expected):
    assert clean_tag(raw) == expected


@pytest.mark.parametrize("raw", ["Go Lang", "MACHINE learning", "a b c", "x"])
def test_clean_tag_is_idempotent(raw):
    assert clean_tag(clean_tag(raw)) == clean_tag(raw)


def test_clean_tag_only_replaces_spaces():
    # tabs and underscores are left alone
    assert clean_tag("Data\tScience_Ops") == "data\tscience_ops"
