"""
Tests for inbound message classification and the one-shot command grammar.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from studio_bot.application.use_cases.interpret_command import DEFAULT_SESSION_TYPE, interpret
from studio_bot.domain.entities.command import (
    BookRequest,
    CancelDialogue,
    CancelRequest,
    CommandParseError,
    DialogueInput,
    Freeform,
    ListRequest,
    MenuOption,
    MenuSelection,
    OneShotCommand,
)

SENDER = "50371112222"


def test_cancel_keyword_wins_while_draft_exists():
    assert interpret("cancel booking", SENDER, has_draft=True) == CancelDialogue()
    assert interpret("  Cancelar Cita ", SENDER, has_draft=True) == CancelDialogue()


def test_any_other_text_continues_the_dialogue():
    assert interpret("Jane Doe", SENDER, has_draft=True) == DialogueInput(text="Jane Doe")
    # structured and numeric input is dialogue input too
    assert interpret("5", SENDER, has_draft=True) == DialogueInput(text="5")
    assert interpret("book: 2025-11-15 15:00", SENDER, has_draft=True) == DialogueInput(
        text="book: 2025-11-15 15:00"
    )


def test_cancel_keyword_without_draft_is_not_a_dialogue_cancel():
    assert isinstance(interpret("cancel booking", SENDER, has_draft=False), Freeform)


def test_full_book_command():
    command = interpret("book: 2025-11-15 15:00; family session; 50370000000", SENDER, has_draft=False)
    assert command == OneShotCommand(
        result=BookRequest(when=datetime(2025, 11, 15, 15, 0), session_type="family session", phone="50370000000")
    )
    assert command.ok


def test_book_command_defaults():
    command = interpret("BOOK: 2025-11-16 03:00;;", SENDER, has_draft=False)
    assert command.result == BookRequest(
        when=datetime(2025, 11, 16, 3, 0), session_type=DEFAULT_SESSION_TYPE, phone=SENDER
    )

    command = interpret("cita: 2025-11-15 9:30", SENDER, has_draft=False)
    assert command.result == BookRequest(
        when=datetime(2025, 11, 15, 9, 30), session_type=DEFAULT_SESSION_TYPE, phone=SENDER
    )


def test_book_command_errors():
    too_many = interpret("book: 2025-11-15 15:00; a; b; c", SENDER, has_draft=False)
    assert too_many.result == CommandParseError(verb="book", reason="too_many_fields")
    assert not too_many.ok

    bad_date = interpret("book: tomorrow; family", SENDER, has_draft=False)
    assert bad_date.result == CommandParseError(verb="book", reason="invalid_datetime")


def test_cancel_command():
    command = interpret("cancel: 2025-11-15 15:00; 50370000000", SENDER, has_draft=False)
    assert command.result == CancelRequest(when=datetime(2025, 11, 15, 15, 0), phone="50370000000")

    command = interpret("cancelar: 2025-11-15 15:00", SENDER, has_draft=False)
    assert command.result == CancelRequest(when=datetime(2025, 11, 15, 15, 0), phone=SENDER)


def test_cancel_command_errors():
    command = interpret("cancel: 2025-11-15 15:00; 503; extra", SENDER, has_draft=False)
    assert command.result == CommandParseError(verb="cancel", reason="too_many_fields")

    command = interpret("cancel: 2025-13-01 10:00", SENDER, has_draft=False)
    assert command.result == CommandParseError(verb="cancel", reason="invalid_datetime")


def test_list_keywords():
    for text in ("my appointments", "Show my appointments", "mis citas", "VER MIS CITAS"):
        assert interpret(text, SENDER, has_draft=False) == OneShotCommand(result=ListRequest(phone=SENDER))


@pytest.mark.parametrize(
    "text, option",
    [
        ("1", MenuOption.STUDIO_SERVICES),
        (" 2 ", MenuOption.EVENT_PACKAGES),
        ("3", MenuOption.PHOTO_PRINTING),
        ("4", MenuOption.ORDER_STATUS),
        ("5", MenuOption.START_BOOKING),
        ("I'd like to book an appointment", MenuOption.START_BOOKING),
        ("hi, I want to book an appointment", MenuOption.START_BOOKING),
        ("Agendar cita por favor", MenuOption.START_BOOKING),
        ("Do you do weddings?", MenuOption.EVENT_PACKAGES),
        ("impresión fotográfica", MenuOption.PHOTO_PRINTING),
        ("order status", MenuOption.ORDER_STATUS),
        ("Hello", MenuOption.GREETING),
        ("Buenos días", MenuOption.GREETING),
    ],
)
def test_menu_selection(text, option):
    assert interpret(text, SENDER, has_draft=False) == MenuSelection(option=option)


@pytest.mark.parametrize("text", ["15", "this is a question about prices", "what do I need for a visa photo?", ""])
def test_freeform(text):
    assert interpret(text, SENDER, has_draft=False) == Freeform(text=text)
