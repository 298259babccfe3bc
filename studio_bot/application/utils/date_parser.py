from __future__ import annotations

import re
from datetime import datetime
from zoneinfo import ZoneInfo

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")

LOCAL_FORMAT = "%Y-%m-%d %H:%M"


def parse_booking_datetime(text: str) -> datetime | None:
    """
    Parse "YYYY-MM-DD H:mm" / "YYYY-MM-DD HH:mm" into a naive local datetime.

    Returns None on any format problem, including dates that do not exist
    on the calendar (e.g. 2025-02-30).
    """
    parts = (text or "").strip().split(" ")
    if len(parts) != 2:
        return None
    date_part, time_part = parts
    if not DATE_PATTERN.match(date_part):
        return None
    time_match = TIME_PATTERN.match(time_part)
    if not time_match:
        return None

    year, month, day = (int(p) for p in date_part.split("-"))
    try:
        return datetime(year, month, day, int(time_match.group(1)), int(time_match.group(2)))
    except ValueError:
        return None


def format_local(value: datetime) -> str:
    """Format as "YYYY-MM-DD HH:mm" (hour always zero-padded)."""
    return value.strftime(LOCAL_FORMAT)


def to_local(value: datetime, timezone: ZoneInfo) -> datetime:
    """Attach the business timezone to a naive value, or convert an aware one."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone)
    return value.astimezone(timezone)


def safe_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except Exception:
        return ZoneInfo("UTC")
