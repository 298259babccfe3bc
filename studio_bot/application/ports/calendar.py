from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from studio_bot.domain.entities.appointment import CalendarEvent


class CalendarPort(ABC):
    @abstractmethod
    def is_configured(self) -> bool:
        """True when credentials and target calendar are present. Must not touch the network."""
        raise NotImplementedError

    @abstractmethod
    async def insert_event(self, event: CalendarEvent, timezone: str) -> CalendarEvent:
        """Insert event. Returns the stored event (with id). Raises CalendarUpstreamError."""
        raise NotImplementedError

    @abstractmethod
    async def list_events(self, time_min: datetime, time_max: datetime) -> list[CalendarEvent]:
        """List single events in [time_min, time_max] ordered by start time."""
        raise NotImplementedError

    @abstractmethod
    async def delete_event(self, event_id: str) -> None:
        """Delete event by provider id. Raises CalendarUpstreamError."""
        raise NotImplementedError
