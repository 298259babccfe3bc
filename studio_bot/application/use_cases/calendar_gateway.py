from __future__ import annotations

import logging
from datetime import datetime, time, timedelta
from typing import Callable
from zoneinfo import ZoneInfo

from studio_bot.application.ports.calendar import CalendarPort
from studio_bot.application.utils.date_parser import format_local, parse_booking_datetime
from studio_bot.application.utils.phone_match import matches_phone
from studio_bot.domain.entities.appointment import AppointmentSummary, CalendarEvent


class CalendarGateway:
    """
    Appointment operations on top of a raw calendar.

    Every operation checks the calendar configuration first and reports
    failure as False / [] instead of raising.
    """

    def __init__(
        self,
        calendar: CalendarPort,
        timezone: ZoneInfo,
        duration_minutes: int = 60,
        test_duration_minutes: int = 30,
        list_window_days: int = 30,
        business_name: str = "the studio",
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._calendar = calendar
        self._timezone = timezone
        self._duration = timedelta(minutes=duration_minutes)
        self._test_duration = timedelta(minutes=test_duration_minutes)
        self._list_window = timedelta(days=list_window_days)
        self._business_name = business_name
        self._now = now or (lambda: datetime.now(timezone))
        self._logger = logging.getLogger(__name__)

    async def create(self, when: str, session_type: str | None, phone: str | None, name: str | None = None) -> bool:
        if not self._calendar.is_configured():
            self._logger.warning("Calendar not configured; create skipped")
            return False

        local = parse_booking_datetime(when)
        if local is None:
            self._logger.error("Create called with invalid datetime", extra={"reason": when})
            return False

        start = local.replace(tzinfo=self._timezone)
        event = CalendarEvent(
            summary=f"Session {session_type or 'photo'} - {name or 'WhatsApp client'}",
            description=self._describe(name, phone),
            start=start,
            end=start + self._duration,
        )
        return await self._insert(event)

    async def cancel(self, when: str, phone: str | None) -> bool:
        if not self._calendar.is_configured():
            self._logger.warning("Calendar not configured; cancel skipped")
            return False

        local = parse_booking_datetime(when)
        if local is None:
            return False
        target = format_local(local)

        day_start = datetime.combine(local.date(), time(0, 0, 0), tzinfo=self._timezone)
        day_end = datetime.combine(local.date(), time(23, 59, 59), tzinfo=self._timezone)

        try:
            events = await self._calendar.list_events(day_start, day_end)
            for event in events:
                if self._local_start(event) != target or not matches_phone(event, phone):
                    continue
                # first match wins; same-slot duplicates are not disambiguated
                await self._calendar.delete_event(event.id or "")
                self._logger.info("Appointment cancelled", extra={"event_id": event.id, "reason": target})
                return True
        except Exception as e:
            self._logger.error("Error cancelling appointment", extra={"error": str(e)})
            return False

        self._logger.info("No appointment matched cancel request", extra={"reason": target})
        return False

    async def list_upcoming(self, phone: str | None) -> list[AppointmentSummary]:
        if not self._calendar.is_configured():
            self._logger.warning("Calendar not configured; list skipped")
            return []

        now = self._now()
        try:
            events = await self._calendar.list_events(now, now + self._list_window)
        except Exception as e:
            self._logger.error("Error listing appointments", extra={"error": str(e)})
            return []

        return [
            AppointmentSummary(datetime=self._local_start(event), summary=event.summary or "Appointment")
            for event in events
            if matches_phone(event, phone)
        ]

    async def create_test_event(self, name: str | None = None, phone: str | None = None) -> bool:
        if not self._calendar.is_configured():
            self._logger.warning("Calendar not configured; test event skipped")
            return False

        start = self._now().astimezone(self._timezone).replace(second=0, microsecond=0) + timedelta(hours=1)
        event = CalendarEvent(
            summary=f"Test event - {name or 'WhatsApp client'}",
            description=self._describe(name, phone),
            start=start,
            end=start + self._test_duration,
        )
        return await self._insert(event)

    async def _insert(self, event: CalendarEvent) -> bool:
        try:
            created = await self._calendar.insert_event(event, timezone=self._timezone.key)
        except Exception as e:
            self._logger.error("Error creating appointment", extra={"error": str(e)})
            return False
        self._logger.info("Appointment created", extra={"event_id": created.id, "title": created.summary})
        return True

    def _describe(self, name: str | None, phone: str | None) -> str:
        lines = [f"Session booked through the {self._business_name} assistant."]
        if name:
            lines.append(f"Name: {name}")
        lines.append(f"Phone: {phone or ''}")
        return "\n".join(lines)

    def _local_start(self, event: CalendarEvent) -> str:
        if event.start is None:
            return ""
        return format_local(event.start.astimezone(self._timezone))
