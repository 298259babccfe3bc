from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime

from studio_bot.application.exceptions import CalendarUpstreamError
from studio_bot.application.ports.calendar import CalendarPort
from studio_bot.domain.entities.appointment import CalendarEvent


class MockCalendar(CalendarPort):
    """In-memory calendar for dev/local runs and tests. Records every call."""

    def __init__(self, configured: bool = True, fail: bool = False) -> None:
        self._events: dict[str, CalendarEvent] = {}
        self._configured = configured
        self._fail = fail
        self._next_id = 1
        self.inserted: list[CalendarEvent] = []
        self.deleted: list[str] = []
        self.list_calls: list[tuple[datetime, datetime]] = []
        self._logger = logging.getLogger(__name__)

    def is_configured(self) -> bool:
        return self._configured

    def add(self, event: CalendarEvent) -> CalendarEvent:
        """Seed an event directly, bypassing call recording."""
        stored = replace(event, id=event.id or self._new_id())
        self._events[stored.id] = stored
        return stored

    async def insert_event(self, event: CalendarEvent, timezone: str) -> CalendarEvent:
        self._check()
        stored = self.add(replace(event, id=None))
        self.inserted.append(stored)
        self._logger.info(
            "Mock calendar event created",
            extra={
                "event_id": stored.id,
                "start": stored.start.isoformat() if stored.start else None,
                "title": stored.summary,
            },
        )
        return stored

    async def list_events(self, time_min: datetime, time_max: datetime) -> list[CalendarEvent]:
        self._check()
        self.list_calls.append((time_min, time_max))
        in_range = [e for e in self._events.values() if e.start is not None and time_min <= e.start <= time_max]
        return sorted(in_range, key=lambda e: e.start)

    async def delete_event(self, event_id: str) -> None:
        self._check()
        if event_id not in self._events:
            raise CalendarUpstreamError(f"Event {event_id} not found")
        del self._events[event_id]
        self.deleted.append(event_id)
        self._logger.info("Mock calendar event cancelled", extra={"event_id": event_id})

    @property
    def events(self) -> list[CalendarEvent]:
        return list(self._events.values())

    def _check(self) -> None:
        if self._fail:
            raise CalendarUpstreamError("Mock calendar failure")

    def _new_id(self) -> str:
        event_id = f"mock_event_{self._next_id}"
        self._next_id += 1
        return event_id
