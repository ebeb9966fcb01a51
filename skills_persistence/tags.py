from __future__ import annotations


def clean_tag(tag: str) -> str:
    """Lowercase a skill tag and replace spaces with hyphens ("Go Lang" -> "go-lang")."""
    return tag.lower().replace(" ", "-")
