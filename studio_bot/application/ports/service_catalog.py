from __future__ import annotations

from abc import ABC, abstractmethod

from studio_bot.domain.entities.service_catalog import CatalogEntry


class ServiceCatalogPort(ABC):
    @abstractmethod
    def find(self, text: str) -> CatalogEntry | None:
        """Best catalog entry mentioned in free text, or None."""
        raise NotImplementedError
