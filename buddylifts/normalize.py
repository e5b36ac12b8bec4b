"""Normalization: exercise display names."""

from __future__ import annotations


def normalize_exercise_name(name: str) -> str:
    """
    Canonical display name: trim, collapse whitespace, capitalize each word.
    "  bench   PRESS " -> "Bench Press".
    """
    return " ".join(word[:1].upper() + word[1:].lower() for word in name.split())
