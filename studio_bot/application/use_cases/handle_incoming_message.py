from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable
from zoneinfo import ZoneInfo

from studio_bot.application.ports.conversation_store import ConversationStorePort
from studio_bot.application.ports.draft_store import DraftStorePort
from studio_bot.application.use_cases.booking import BookingUseCase
from studio_bot.application.use_cases.calendar_gateway import CalendarGateway
from studio_bot.application.use_cases.generate_reply import GenerateReplyUseCase
from studio_bot.application.use_cases.interpret_command import interpret
from studio_bot.application.use_cases.reply_composer import ReplyComposer
from studio_bot.application.use_cases.send_reply import SendReplyUseCase
from studio_bot.application.utils.business_hours import (
    DEFAULT_BUSINESS_HOURS,
    BusinessHours,
    is_business_open_now,
    is_sunday,
)
from studio_bot.application.utils.date_parser import format_local
from studio_bot.domain.entities.command import (
    BookRequest,
    CancelDialogue,
    CancelRequest,
    Command,
    CommandParseError,
    DialogueInput,
    Freeform,
    ListRequest,
    MenuOption,
    MenuSelection,
    OneShotCommand,
)
from studio_bot.domain.entities.message import Message


class HandleIncomingMessageUseCase:
    def __init__(
        self,
        store: ConversationStorePort,
        drafts: DraftStorePort,
        booking: BookingUseCase,
        gateway: CalendarGateway,
        generate_reply: GenerateReplyUseCase,
        send_reply: SendReplyUseCase,
        composer: ReplyComposer,
        timezone: ZoneInfo,
        hours: BusinessHours = DEFAULT_BUSINESS_HOURS,
        after_hours_reply: bool = True,
        list_window_days: int = 30,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._drafts = drafts
        self._booking = booking
        self._gateway = gateway
        self._generate_reply = generate_reply
        self._send_reply = send_reply
        self._composer = composer
        self._timezone = timezone
        self._hours = hours
        self._after_hours_reply = after_hours_reply
        self._list_window_days = list_window_days
        self._now = now or (lambda: datetime.now(timezone))
        self._logger = logging.getLogger(__name__)

    async def handle(self, message: Message) -> str | None:
        """
        Handle one inbound message and return the reply text, if any.

        Never raises: unexpected errors are logged and the message is dropped.
        """
        try:
            if self._store.has_processed(message.id):
                self._logger.info("Duplicate message ignored", extra={"message_id": message.id})
                return None
            self._store.mark_processed(message.id)

            self._store.append_message(
                message.thread_id,
                role="user",
                text=message.text,
                meta={
                    "message_id": message.id,
                    "sender_id": message.sender_id,
                    "sender_name": message.sender_name,
                    "platform": message.platform,
                },
            )

            reply = await self._reply_for(message)
            if not reply or not reply.strip():
                self._logger.info(
                    "No reply for message",
                    extra={"event": "reply_suppressed", "message_id": message.id, "reason": "empty_reply_text"},
                )
                return None

            did_send = await self._send_reply.execute(recipient_id=message.sender_id, text=reply)
            if did_send:
                self._store.append_message(message.thread_id, role="assistant", text=reply, meta={"message_id": message.id})
                self._logger.info("Reply sent", extra={"event": "reply_sent", "message_id": message.id, "thread_id": message.thread_id})
            return reply
        except Exception as e:
            self._logger.exception(
                "Failed to handle incoming message",
                extra={
                    "message_id": message.id,
                    "thread_id": message.thread_id,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            return None

    async def _reply_for(self, message: Message) -> str:
        now = self._now()
        if self._after_hours_reply and not is_business_open_now(self._timezone, now, self._hours):
            self._logger.info("Outside business hours", extra={"message_id": message.id, "action": "after_hours"})
            return self._composer.after_hours(sunday=is_sunday(self._timezone, now))

        command = interpret(message.text, message.sender_id, self._drafts.has_draft(message.sender_id))
        self._logger.info(
            "Message classified",
            extra={"message_id": message.id, "thread_id": message.thread_id, "action": type(command).__name__},
        )
        return await self._dispatch(command, message)

    async def _dispatch(self, command: Command, message: Message) -> str:
        sender_id = message.sender_id

        if isinstance(command, CancelDialogue):
            return self._booking.cancel(sender_id).reply

        if isinstance(command, DialogueInput):
            result = await self._booking.advance(sender_id, command.text)
            return result.reply

        if isinstance(command, OneShotCommand):
            return await self._run_one_shot(command)

        if isinstance(command, MenuSelection):
            if command.option == MenuOption.START_BOOKING:
                return self._booking.start(sender_id).reply
            return self._composer.menu(command.option)

        if isinstance(command, Freeform):
            if not command.text.strip():
                return self._composer.fallback()
            return await self._generate_reply.execute(command.text)

        raise TypeError(f"Unhandled command variant: {type(command).__name__}")

    async def _run_one_shot(self, command: OneShotCommand) -> str:
        request = command.result

        if isinstance(request, CommandParseError):
            self._logger.info("One-shot command rejected", extra={"action": request.verb, "reason": request.reason})
            return self._composer.usage(request.verb)

        if isinstance(request, BookRequest):
            if not self._hours.is_open(request.when):
                return self._composer.outside_hours()
            when = format_local(request.when)
            ok = await self._gateway.create(when, request.session_type, request.phone, None)
            if ok:
                return self._composer.one_shot_booked(when, request.session_type, request.phone)
            return self._composer.one_shot_book_failed()

        if isinstance(request, CancelRequest):
            when = format_local(request.when)
            if await self._gateway.cancel(when, request.phone):
                return self._composer.cancelled(when, request.phone)
            return self._composer.cancel_not_found()

        if isinstance(request, ListRequest):
            items = await self._gateway.list_upcoming(request.phone)
            return self._composer.appointments(items, self._list_window_days)

        raise TypeError(f"Unhandled one-shot request: {type(request).__name__}")
