from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class BookingStep(str, Enum):
    AWAITING_NAME = "awaiting_name"
    AWAITING_DATETIME = "awaiting_datetime"
    AWAITING_SESSION_TYPE = "awaiting_session_type"
    AWAITING_PHONE = "awaiting_phone"
    COMPLETE = "complete"


@dataclass(frozen=True)
class BookingFields:
    name: str | None = None
    datetime: str | None = None  # local "YYYY-MM-DD HH:mm"
    session_type: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class BookingDraft:
    sender_id: str
    step: BookingStep = BookingStep.AWAITING_NAME
    fields: BookingFields = field(default_factory=BookingFields)
    updated_at: float | None = None

    def advance(self, step: BookingStep, **values: str) -> "BookingDraft":
        return replace(self, step=step, fields=replace(self.fields, **values))
