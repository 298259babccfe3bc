from __future__ import annotations

import re

from studio_bot.domain.entities.appointment import CalendarEvent


def phone_digits(phone: str | None) -> str:
    return re.sub(r"[^0-9]", "", phone or "")


def matches_phone(event: CalendarEvent, phone: str | None) -> bool:
    """
    Events carry no client-visible owner id, so ownership is inferred from
    the phone text embedded at creation: the full digit string or its last
    four digits must appear in the description or summary.
    """
    digits = phone_digits(phone)
    if not digits:
        return False
    last4 = digits[-4:]
    haystacks = ((event.description or "").lower(), (event.summary or "").lower())
    return any(digits in text or last4 in text for text in haystacks)
