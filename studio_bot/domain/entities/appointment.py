from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CalendarEvent:
    summary: str
    description: str
    start: datetime | None
    end: datetime | None
    id: str | None = None


@dataclass(frozen=True)
class AppointmentSummary:
    datetime: str  # local "YYYY-MM-DD HH:mm", empty for all-day events
    summary: str
