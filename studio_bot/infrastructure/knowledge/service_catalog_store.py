from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from studio_bot.application.ports.service_catalog import ServiceCatalogPort
from studio_bot.application.utils.message_rules import normalize_text
from studio_bot.domain.entities.service_catalog import CatalogEntry


class ServiceCatalogStore(ServiceCatalogPort):
    def __init__(self, entries: list[CatalogEntry] | None = None) -> None:
        self._entries = list(entries or [])
        self._keys = [
            (entry, [normalize_text(alias) for alias in (entry.name, *entry.aliases) if alias])
            for entry in self._entries
        ]

    @classmethod
    def from_file(cls, path: str) -> "ServiceCatalogStore":
        logger = logging.getLogger(__name__)
        file_path = Path(path)
        if not file_path.exists():
            logger.warning("Catalog file not found; catalog lookups disabled", extra={"reason": str(file_path)})
            return cls()
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.error("Error loading catalog", extra={"error": str(e)})
            return cls()

        entries = [_to_entry(item) for item in raw.get("items", []) if isinstance(item, dict) and item.get("name")]
        logger.info("Catalog indexed", extra={"reason": f"{len(entries)} items"})
        return cls(entries)

    def find(self, text: str) -> CatalogEntry | None:
        """Entry whose longest alias appears in the text."""
        query = normalize_text(text)
        if not query:
            return None
        best: CatalogEntry | None = None
        best_len = 0
        for entry, keys in self._keys:
            for key in keys:
                if key and key in query and len(key) > best_len:
                    best, best_len = entry, len(key)
        return best

    def __len__(self) -> int:
        return len(self._entries)


def _to_entry(item: dict[str, Any]) -> CatalogEntry:
    price = item.get("price")
    duration = item.get("duration_minutes")
    photo_count = item.get("photo_count")
    return CatalogEntry(
        kind=str(item.get("kind") or "service"),
        name=str(item["name"]),
        aliases=tuple(str(a) for a in item.get("aliases", []) or []),
        price=float(price) if isinstance(price, (int, float)) else None,
        duration_minutes=int(duration) if isinstance(duration, int) else None,
        size=item.get("size"),
        requirements=item.get("requirements"),
        photo_count=str(photo_count) if photo_count not in (None, "") else None,
        dress_code_women=item.get("dress_code_women"),
        dress_code_men=item.get("dress_code_men"),
        line=item.get("line"),
        notes=item.get("notes"),
    )
