from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class MenuOption(str, Enum):
    GREETING = "greeting"
    STUDIO_SERVICES = "studio_services"
    EVENT_PACKAGES = "event_packages"
    PHOTO_PRINTING = "photo_printing"
    ORDER_STATUS = "order_status"
    START_BOOKING = "start_booking"


@dataclass(frozen=True)
class BookRequest:
    when: datetime
    session_type: str
    phone: str


@dataclass(frozen=True)
class CancelRequest:
    when: datetime
    phone: str


@dataclass(frozen=True)
class ListRequest:
    phone: str


@dataclass(frozen=True)
class CommandParseError:
    verb: str  # "book" or "cancel"
    reason: str


@dataclass(frozen=True)
class OneShotCommand:
    result: BookRequest | CancelRequest | ListRequest | CommandParseError

    @property
    def ok(self) -> bool:
        return not isinstance(self.result, CommandParseError)


@dataclass(frozen=True)
class MenuSelection:
    option: MenuOption


@dataclass(frozen=True)
class DialogueInput:
    text: str


@dataclass(frozen=True)
class CancelDialogue:
    pass


@dataclass(frozen=True)
class Freeform:
    text: str


Command = MenuSelection | OneShotCommand | DialogueInput | CancelDialogue | Freeform
