from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

SATURDAY = 5
SUNDAY = 6

Window = tuple[float, float]  # (open, close) in local decimal hours, both ends inclusive

_WINDOW_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})-(\d{1,2}):(\d{2})$")


@dataclass(frozen=True)
class BusinessHours:
    weekday: tuple[Window, ...] = ((8.0, 12.5), (14.0, 18.0))
    saturday: tuple[Window, ...] = ((8.0, 12.5),)
    sunday: tuple[Window, ...] = ()

    def windows_for(self, weekday: int) -> tuple[Window, ...]:
        if weekday == SUNDAY:
            return self.sunday
        if weekday == SATURDAY:
            return self.saturday
        return self.weekday

    def is_open(self, local: datetime) -> bool:
        """True if the local wall-clock time falls inside an opening window."""
        decimal_hour = local.hour + local.minute / 60
        return any(start <= decimal_hour <= end for start, end in self.windows_for(local.weekday()))

    def table(self) -> str:
        return (
            f"Mon-Fri: {_format_windows(self.weekday)} · "
            f"Sat: {_format_windows(self.saturday)} · "
            f"Sun: {_format_windows(self.sunday)}"
        )


DEFAULT_BUSINESS_HOURS = BusinessHours()


def is_business_hours(local: datetime, hours: BusinessHours = DEFAULT_BUSINESS_HOURS) -> bool:
    return hours.is_open(local)


def is_business_open_now(
    timezone: ZoneInfo, now: datetime | None = None, hours: BusinessHours = DEFAULT_BUSINESS_HOURS
) -> bool:
    return hours.is_open(_local_now(timezone, now))


def is_sunday(timezone: ZoneInfo, now: datetime | None = None) -> bool:
    return _local_now(timezone, now).weekday() == SUNDAY


def parse_windows(raw: str) -> tuple[Window, ...]:
    """Parse "8:00-12:30,14:00-18:00" into decimal-hour windows. Empty means closed."""
    windows: list[Window] = []
    for chunk in (raw or "").split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        match = _WINDOW_PATTERN.match(chunk)
        if not match:
            raise ValueError(f"Invalid business-hours window: {chunk!r}")
        h1, m1, h2, m2 = (int(g) for g in match.groups())
        start, end = h1 + m1 / 60, h2 + m2 / 60
        if not (0 <= start <= end <= 24) or m1 > 59 or m2 > 59:
            raise ValueError(f"Invalid business-hours window: {chunk!r}")
        windows.append((start, end))
    return tuple(windows)


def _local_now(timezone: ZoneInfo, now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(timezone)
    if now.tzinfo is None:
        return now
    return now.astimezone(timezone)


def _format_windows(windows: tuple[Window, ...]) -> str:
    if not windows:
        return "closed"
    return " and ".join(f"{_format_hour(start)}-{_format_hour(end)}" for start, end in windows)


def _format_hour(value: float) -> str:
    hours = int(value)
    minutes = round((value - hours) * 60)
    return f"{hours}:{minutes:02d}"
