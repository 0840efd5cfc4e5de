from __future__ import annotations

from collections.abc import Iterable
from typing import List


def coerce_string_list(value: object) -> List[str]:
    """Convert arbitrary model-provided content into a clean list of strings."""

    if value is None:
        return []
    if isinstance(value, str):
        candidate = value.strip()
        return [candidate] if candidate else []
    if isinstance(value, Iterable):
        cleaned: List[str] = []
        for item in value:
            if item is None:
                continue
            candidate = str(item).strip()
            if candidate:
                cleaned.append(candidate)
        return cleaned
    raise TypeError("Expected a string or iterable of strings")


def none_to_list(value: object) -> object:
    return [] if value is None else value
