from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogEntry:
    kind: str  # "service", "print" or "info"
    name: str
    aliases: tuple[str, ...] = ()
    price: float | None = None
    duration_minutes: int | None = None
    size: str | None = None
    requirements: str | None = None
    photo_count: str | None = None
    dress_code_women: str | None = None
    dress_code_men: str | None = None
    line: str | None = None
    notes: str | None = None
