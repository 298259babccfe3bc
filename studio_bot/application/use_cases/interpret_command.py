from __future__ import annotations

from studio_bot.application.utils.date_parser import parse_booking_datetime
from studio_bot.application.utils.message_rules import (
    BOOK_PREFIXES,
    CANCEL_PREFIXES,
    is_cancel_dialogue,
    is_list_appointments,
    match_menu_option,
    match_prefix,
)
from studio_bot.domain.entities.command import (
    BookRequest,
    CancelDialogue,
    CancelRequest,
    Command,
    CommandParseError,
    DialogueInput,
    Freeform,
    ListRequest,
    MenuSelection,
    OneShotCommand,
)

DEFAULT_SESSION_TYPE = "general session"


def interpret(text: str, sender_id: str, has_draft: bool) -> Command:
    """
    Classify one inbound message.

    Precedence: cancel keyword (with a draft) > dialogue continuation >
    one-shot book/cancel > list keyword > menu option (numeric, then
    synonyms) > free-form.
    """
    if has_draft:
        if is_cancel_dialogue(text):
            return CancelDialogue()
        return DialogueInput(text=text)

    command = parse_one_shot(text, sender_id)
    if command is not None:
        return command

    if is_list_appointments(text):
        return OneShotCommand(result=ListRequest(phone=sender_id))

    option = match_menu_option(text)
    if option is not None:
        return MenuSelection(option=option)

    return Freeform(text=text)


def parse_one_shot(text: str, sender_id: str) -> OneShotCommand | None:
    body = match_prefix(text, CANCEL_PREFIXES)
    if body is not None:
        return OneShotCommand(result=_parse_cancel(body, sender_id))

    body = match_prefix(text, BOOK_PREFIXES)
    if body is not None:
        return OneShotCommand(result=_parse_book(body, sender_id))

    return None


def _parse_book(body: str, sender_id: str) -> BookRequest | CommandParseError:
    fields = _split_fields(body)
    if len(fields) > 3:
        return CommandParseError(verb="book", reason="too_many_fields")

    when = parse_booking_datetime(fields[0])
    if when is None:
        return CommandParseError(verb="book", reason="invalid_datetime")

    session_type = _field(fields, 1) or DEFAULT_SESSION_TYPE
    phone = _field(fields, 2) or sender_id
    return BookRequest(when=when, session_type=session_type, phone=phone)


def _parse_cancel(body: str, sender_id: str) -> CancelRequest | CommandParseError:
    fields = _split_fields(body)
    if len(fields) > 2:
        return CommandParseError(verb="cancel", reason="too_many_fields")

    when = parse_booking_datetime(fields[0])
    if when is None:
        return CommandParseError(verb="cancel", reason="invalid_datetime")

    return CancelRequest(when=when, phone=_field(fields, 1) or sender_id)


def _split_fields(body: str) -> list[str]:
    return [part.strip() for part in body.split(";")]


def _field(fields: list[str], index: int) -> str:
    return fields[index] if index < len(fields) else ""
