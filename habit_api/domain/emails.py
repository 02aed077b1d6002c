"""Email normalization used for every account lookup and write."""
from __future__ import annotations


def normalize_email(value: str | None) -> str:
    return (value or "").strip().lower()
