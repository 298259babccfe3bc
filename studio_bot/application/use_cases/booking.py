from __future__ import annotations

import logging
from dataclasses import dataclass

from studio_bot.application.ports.draft_store import DraftStorePort
from studio_bot.application.use_cases.calendar_gateway import CalendarGateway
from studio_bot.application.use_cases.reply_composer import ReplyComposer
from studio_bot.application.utils.business_hours import DEFAULT_BUSINESS_HOURS, BusinessHours
from studio_bot.application.utils.date_parser import format_local, parse_booking_datetime
from studio_bot.domain.entities.booking_state import BookingDraft, BookingStep


@dataclass(frozen=True)
class BookingResult:
    action: str
    reply: str
    draft: BookingDraft | None


class BookingUseCase:
    """
    Multi-turn booking dialogue:
    name -> date/time -> session type -> phone -> calendar create.

    Only the final step touches the calendar; every other step is a pure
    transition of the sender's draft plus a reply.
    """

    def __init__(
        self,
        store: DraftStorePort,
        gateway: CalendarGateway,
        composer: ReplyComposer,
        hours: BusinessHours = DEFAULT_BUSINESS_HOURS,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._composer = composer
        self._hours = hours
        self._logger = logging.getLogger(__name__)

    def start(self, sender_id: str) -> BookingResult:
        draft = BookingDraft(sender_id=sender_id)
        self._store.put(draft)
        self._logger.info("Booking dialogue started", extra={"thread_id": sender_id, "step": draft.step.value})
        return BookingResult(action="started", reply=self._composer.booking_started(), draft=draft)

    def cancel(self, sender_id: str) -> BookingResult:
        self._store.discard(sender_id)
        self._logger.info("Booking dialogue cancelled", extra={"thread_id": sender_id})
        return BookingResult(action="cancelled", reply=self._composer.dialogue_cancelled(), draft=None)

    async def advance(self, sender_id: str, text: str) -> BookingResult:
        draft = self._store.get(sender_id)
        if draft is None:
            # dialogue expired or was never started
            return self.start(sender_id)

        value = (text or "").strip()

        if draft.step == BookingStep.AWAITING_NAME:
            if not value:
                return BookingResult(action="reprompt", reply=self._composer.ask_name(), draft=draft)
            return self._save(
                draft.advance(BookingStep.AWAITING_DATETIME, name=value),
                self._composer.ask_datetime(value),
            )

        if draft.step == BookingStep.AWAITING_DATETIME:
            when = parse_booking_datetime(value)
            if when is None:
                return BookingResult(action="invalid_datetime", reply=self._composer.invalid_datetime(), draft=draft)
            if not self._hours.is_open(when):
                return BookingResult(action="outside_hours", reply=self._composer.outside_hours(), draft=draft)
            return self._save(
                draft.advance(BookingStep.AWAITING_SESSION_TYPE, datetime=format_local(when)),
                self._composer.ask_session_type(),
            )

        if draft.step == BookingStep.AWAITING_SESSION_TYPE:
            if not value:
                return BookingResult(action="reprompt", reply=self._composer.ask_empty_session_type(), draft=draft)
            return self._save(
                draft.advance(BookingStep.AWAITING_PHONE, session_type=value),
                self._composer.ask_phone(),
            )

        if draft.step == BookingStep.AWAITING_PHONE:
            return await self._complete(draft.advance(BookingStep.COMPLETE, phone=value or sender_id))

        self._store.discard(sender_id)
        return self.start(sender_id)

    async def _complete(self, draft: BookingDraft) -> BookingResult:
        fields = draft.fields
        try:
            ok = await self._gateway.create(fields.datetime or "", fields.session_type, fields.phone, fields.name)
        finally:
            # the draft never outlives the final step, even on failure
            self._store.discard(draft.sender_id)

        self._logger.info(
            "Booking dialogue completed",
            extra={"thread_id": draft.sender_id, "step": draft.step.value, "reason": "created" if ok else "create_failed"},
        )
        if ok:
            return BookingResult(action="booked", reply=self._composer.booking_confirmed(fields), draft=None)
        return BookingResult(action="create_failed", reply=self._composer.booking_failed(), draft=None)

    def _save(self, draft: BookingDraft, reply: str) -> BookingResult:
        self._store.put(draft)
        self._logger.info("Booking step advanced", extra={"thread_id": draft.sender_id, "step": draft.step.value})
        return BookingResult(action="advanced", reply=reply, draft=draft)
