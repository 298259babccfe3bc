from __future__ import annotations

from studio_bot.application.utils.business_hours import DEFAULT_BUSINESS_HOURS, BusinessHours
from studio_bot.domain.entities.appointment import AppointmentSummary
from studio_bot.domain.entities.booking_state import BookingFields
from studio_bot.domain.entities.command import MenuOption
from studio_bot.domain.entities.service_catalog import CatalogEntry

BOOK_USAGE = "book: 2025-11-15 15:00; family session; 50370000000"
CANCEL_USAGE = "cancel: 2025-11-15 15:00; 50370000000"
DATETIME_EXAMPLE = "2025-11-15 15:00"


class ReplyComposer:
    """All user-facing reply texts."""

    def __init__(self, business_name: str, hours: BusinessHours = DEFAULT_BUSINESS_HOURS) -> None:
        self._business_name = business_name
        self._hours = hours

    def menu(self, option: MenuOption) -> str:
        if option == MenuOption.GREETING:
            return (
                f"👋 Hello! Thanks for contacting {self._business_name} 📸\n"
                "I'm a virtual assistant. How can I help you today?\n\n"
                "Choose an option 👇\n"
                "1️⃣ PHOTO STUDIO SERVICES\n"
                "2️⃣ SOCIAL EVENT PACKAGE QUOTES\n"
                "3️⃣ PHOTO PRINTING\n"
                "4️⃣ CHECK AN ORDER\n"
                "5️⃣ BOOK AN APPOINTMENT"
            )
        if option == MenuOption.STUDIO_SERVICES:
            return (
                "📷 *PHOTO STUDIO SERVICES*\n\n"
                "🔸 *Diplomas and documents* (graduation, ID cards, certificates…)\n"
                "🔸 *Immigration photos* (US visa 2x2, Canada 3.5x4.5, Mexico 3.2x2.6)\n"
                "🔸 *Photo sessions* (personal, couples, family, babies, portfolio, graduates…)\n\n"
                "Which service would you like to know more about?"
            )
        if option == MenuOption.EVENT_PACKAGES:
            return (
                "💍 *SOCIAL EVENT PACKAGES*\n\n"
                "Weddings, quinceañeras, baptisms, communions, baby showers and outdoor shoots.\n"
                "Tell me the *type of event, date and place* and we'll prepare a quote."
            )
        if option == MenuOption.PHOTO_PRINTING:
            return (
                "🖨️ *PHOTO PRINTING*\n\n"
                "We have amateur and professional lines. Which size would you like to print?"
            )
        if option == MenuOption.ORDER_STATUS:
            return (
                "📦 *CHECK AN ORDER*\n\n"
                "Send me your *order number* or *full name* and I'll check with the staff."
            )
        return self.booking_started()

    def booking_started(self) -> str:
        return (
            "🗓️ *Book an appointment*\n\n"
            "Great, I'll help you book.\nFirst, tell me your *full name*.\n\n"
            "You can type *cancel booking* at any time to stop."
        )

    def ask_name(self) -> str:
        return "Please tell me your *full name*."

    def ask_datetime(self, name: str) -> str:
        return (
            f"📅 Thanks, *{name}*.\n\n"
            f"Now send me the *date and time* in this format:\n⭐ {DATETIME_EXAMPLE}"
        )

    def invalid_datetime(self) -> str:
        return f"⚠️ Invalid format. Use *YYYY-MM-DD HH:mm* (e.g. {DATETIME_EXAMPLE})."

    def outside_hours(self) -> str:
        return (
            "⏰ That time is *outside our opening hours*.\n"
            f"{self._hours.table()}\n"
            "Please pick another *date and time* within those hours. 😊"
        )

    def ask_session_type(self) -> str:
        return "📸 Perfect. What *type of session* would you like? (e.g. family session, diploma photos…)"

    def ask_empty_session_type(self) -> str:
        return "Please tell me the *type of session* you'd like."

    def ask_phone(self) -> str:
        return "📞 Great. Finally, send me your *contact number* (e.g. 5037XXXXXX)."

    def booking_confirmed(self, fields: BookingFields) -> str:
        return (
            "✅ Appointment booked.\n"
            f"👤 *{fields.name}*\n"
            f"📅 *{fields.datetime}*\n"
            f"📸 *{fields.session_type}*\n"
            f"📞 *{fields.phone}*"
        )

    def booking_failed(self) -> str:
        return "❌ I couldn't create the appointment. Please try again or contact a member of our staff."

    def dialogue_cancelled(self) -> str:
        return '❌ Booking cancelled. Send *5* or type "book appointment" to start again.'

    def one_shot_booked(self, when: str, session_type: str, phone: str) -> str:
        return f"✅ Appointment booked.\n📅 *{when}*\n📸 *{session_type}*\n📞 *{phone}*"

    def one_shot_book_failed(self) -> str:
        return "❌ There was a problem creating the appointment. Please try again."

    def usage(self, verb: str) -> str:
        if verb == "cancel":
            return f"⚠️ Invalid format. Use: *{CANCEL_USAGE}*"
        return f"⚠️ Invalid format.\nUse: *{BOOK_USAGE}*"

    def cancelled(self, when: str, phone: str) -> str:
        return f"✅ Your appointment has been cancelled.\n📅 *{when}*\n📞 *{phone}*"

    def cancel_not_found(self) -> str:
        return "❌ I couldn't find an appointment with that date/time and phone number."

    def appointments(self, items: list[AppointmentSummary], window_days: int) -> str:
        if not items:
            return f"📅 I couldn't find upcoming appointments for your number in the next {window_days} days."
        lines = [f"{i}. {item.datetime} — {item.summary}" for i, item in enumerate(items, 1)]
        return "📅 *Your upcoming appointments:*\n\n" + "\n".join(lines)

    def after_hours(self, sunday: bool) -> str:
        header = f"📸 *Thanks for contacting {self._business_name}.*\n\n"
        if sunday:
            return (
                header
                + "Today is *Sunday* and we are *closed*.\n\n"
                + f"🕓 *Hours:*\n{self._hours.table()}\n\n"
                + "Leave us your message and we'll reply when we open. 😊"
            )
        return (
            header
            + "We are currently *outside opening hours*; we'll reply as soon as we're back. 😊\n\n"
            + f"🕓 *Hours:*\n{self._hours.table()}"
        )

    def catalog_entry(self, entry: CatalogEntry) -> str:
        if entry.kind == "service":
            lines = [f"ℹ️ *{entry.name}*", ""]
            if entry.price is not None:
                lines.append(f"💲 Price: {_money(entry.price)}")
            if entry.duration_minutes:
                lines.append(f"⏱️ Duration: {entry.duration_minutes} minutes")
            if entry.size:
                lines.append(f"📐 Size: {entry.size}")
            if entry.requirements:
                lines.append(f"📌 Requirements: {entry.requirements}")
            if entry.photo_count:
                lines.append(f"🖼️ Number of photos: {entry.photo_count}")
            if entry.dress_code_women:
                lines.append(f"👗 Women: {entry.dress_code_women}")
            if entry.dress_code_men:
                lines.append(f"🤵 Men: {entry.dress_code_men}")
            if entry.notes:
                lines.append(f"📝 Notes: {entry.notes}")
            lines += ["", "Would you like to book? Send *5* and I'll guide you."]
            return "\n".join(lines).strip()

        if entry.kind == "print":
            title = f"🖨️ *{entry.name}*" + (f" ({entry.line})" if entry.line else "")
            lines = [title]
            if entry.price is not None:
                lines.append(f"💲 Price: {_money(entry.price)}")
            if entry.notes:
                lines.append(f"📝 Details: {entry.notes}")
            lines += ["", "How many prints and which sizes do you need? I can help you work out the total."]
            return "\n".join(lines).strip()

        lines = [f"ℹ️ *{entry.name}*"]
        if entry.notes:
            lines.append(entry.notes)
        lines += ["", "If you like, I can put you in touch with an advisor or share our address."]
        return "\n".join(lines).strip()

    def fallback(self) -> str:
        return "Thanks for your message. Could you give me a bit more detail so I can help you better?"


def _money(value: float) -> str:
    return f"${value:.2f}"
