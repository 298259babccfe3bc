from __future__ import annotations

import re
import unicodedata

from studio_bot.domain.entities.command import MenuOption

CANCEL_DIALOGUE_KEYWORDS = frozenset({"cancel booking", "cancelar cita"})

LIST_APPOINTMENTS_KEYWORDS = frozenset(
    {
        "my appointments",
        "show my appointments",
        "mis citas",
        "ver mis citas",
    }
)

BOOK_PREFIXES = ("book:", "cita:")
CANCEL_PREFIXES = ("cancel:", "cancelar:")

NUMERIC_OPTIONS = {
    "1": MenuOption.STUDIO_SERVICES,
    "2": MenuOption.EVENT_PACKAGES,
    "3": MenuOption.PHOTO_PRINTING,
    "4": MenuOption.ORDER_STATUS,
    "5": MenuOption.START_BOOKING,
}

# Checked in order; the greeting goes last so "hi, I want to book an
# appointment" starts the booking instead of showing the menu.
OPTION_SYNONYMS: tuple[tuple[MenuOption, tuple[str, ...]], ...] = (
    (
        MenuOption.START_BOOKING,
        (
            "book appointment",
            "book an appointment",
            "schedule appointment",
            "book a session",
            "agendar cita",
            "reservar cita",
            "reservar sesion",
        ),
    ),
    (MenuOption.STUDIO_SERVICES, ("studio services", "photo studio", "foto estudio", "fotoestudio")),
    (
        MenuOption.EVENT_PACKAGES,
        (
            "event packages",
            "social events",
            "wedding",
            "weddings",
            "baptism",
            "eventos sociales",
            "paquetes de eventos",
            "bodas",
            "bautizo",
            "15 anos",
        ),
    ),
    (
        MenuOption.PHOTO_PRINTING,
        ("photo printing", "print photos", "impresion fotografica", "imprimir fotos"),
    ),
    (
        MenuOption.ORDER_STATUS,
        ("order status", "check my order", "consultar orden", "estado de mi pedido"),
    ),
    (
        MenuOption.GREETING,
        (
            "hello",
            "hi",
            "hey",
            "good morning",
            "good afternoon",
            "good evening",
            "hola",
            "buenos dias",
            "buenas tardes",
            "buenas noches",
            "que tal",
        ),
    ),
)


def normalize_text(text: str) -> str:
    """Lowercase, strip accents and collapse whitespace."""
    decomposed = unicodedata.normalize("NFD", text or "")
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return re.sub(r"\s+", " ", stripped.lower()).strip()


def is_cancel_dialogue(text: str) -> bool:
    return normalize_text(text) in CANCEL_DIALOGUE_KEYWORDS


def is_list_appointments(text: str) -> bool:
    return normalize_text(text) in LIST_APPOINTMENTS_KEYWORDS


def match_prefix(text: str, prefixes: tuple[str, ...]) -> str | None:
    """Return the remainder after a case-insensitive verb prefix, or None."""
    stripped = (text or "").strip()
    lowered = stripped.lower()
    for prefix in sorted(prefixes, key=len, reverse=True):
        if lowered.startswith(prefix):
            return stripped[len(prefix):].strip()
    return None


def match_menu_option(text: str) -> MenuOption | None:
    normalized = normalize_text(text)
    if normalized in NUMERIC_OPTIONS:
        return NUMERIC_OPTIONS[normalized]
    for option, phrases in OPTION_SYNONYMS:
        if any(_contains_phrase(normalized, phrase) for phrase in phrases):
            return option
    return None


def _contains_phrase(normalized: str, phrase: str) -> bool:
    return re.search(rf"(?<![a-z0-9]){re.escape(phrase)}(?![a-z0-9])", normalized) is not None
