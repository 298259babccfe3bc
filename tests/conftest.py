from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from studio_bot.application.use_cases.booking import BookingUseCase
from studio_bot.application.use_cases.calendar_gateway import CalendarGateway
from studio_bot.application.use_cases.generate_reply import GenerateReplyUseCase
from studio_bot.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from studio_bot.application.use_cases.reply_composer import ReplyComposer
from studio_bot.application.use_cases.send_reply import SendReplyUseCase
from studio_bot.application.utils.business_hours import BusinessHours
from studio_bot.domain.entities.message import Message
from studio_bot.domain.entities.service_catalog import CatalogEntry
from studio_bot.infrastructure.calendar.mock_calendar import MockCalendar
from studio_bot.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore
from studio_bot.infrastructure.llm.mock_llm import MockTextGenerator
from studio_bot.infrastructure.store.draft_store import MemoryDraftStore
from studio_bot.infrastructure.store.memory_store import MemoryConversationStore
from studio_bot.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform

TZ = ZoneInfo("America/El_Salvador")
SENDER = "50370000000"

# Friday 2025-11-14 10:00 local, inside the morning window
FIXED_NOW = datetime(2025, 11, 14, 10, 0, tzinfo=TZ)

# Saturday afternoon open so the 2025-11-15 15:00 walkthroughs book
EXTENDED_HOURS = BusinessHours(saturday=((8.0, 12.5), (14.0, 18.0)))

SAMPLE_ENTRIES = [
    CatalogEntry(
        kind="service",
        name="US visa photo",
        aliases=("visa", "visa photo", "foto para visa"),
        price=5.0,
        duration_minutes=10,
        size="2x2 in",
        requirements="White background",
    ),
    CatalogEntry(kind="print", name="Print 8x10", aliases=("8x10",), line="professional", price=3.5),
]


class Harness:
    def __init__(
        self,
        hours: BusinessHours = EXTENDED_HOURS,
        after_hours_reply: bool = False,
        calendar: MockCalendar | None = None,
    ) -> None:
        self.calendar = calendar or MockCalendar()
        self.drafts = MemoryDraftStore()
        self.store = MemoryConversationStore()
        self.platform = MockWhatsAppPlatform()
        self.llm = MockTextGenerator()
        self.composer = ReplyComposer(business_name="Test Studio", hours=hours)
        self.gateway = CalendarGateway(calendar=self.calendar, timezone=TZ, now=lambda: FIXED_NOW)
        self.booking = BookingUseCase(store=self.drafts, gateway=self.gateway, composer=self.composer, hours=hours)
        self.now = FIXED_NOW
        self.handler = HandleIncomingMessageUseCase(
            store=self.store,
            drafts=self.drafts,
            booking=self.booking,
            gateway=self.gateway,
            generate_reply=GenerateReplyUseCase(
                catalog=ServiceCatalogStore(SAMPLE_ENTRIES), llm=self.llm, composer=self.composer
            ),
            send_reply=SendReplyUseCase(platform=self.platform, enabled=True),
            composer=self.composer,
            timezone=TZ,
            hours=hours,
            after_hours_reply=after_hours_reply,
            now=lambda: self.now,
        )
        self._counter = 0

    def message(self, text: str, sender: str = SENDER) -> Message:
        self._counter += 1
        return Message(
            id=f"wamid.{self._counter}",
            thread_id=sender,
            sender_id=sender,
            text=text,
            timestamp=1763136000 + self._counter,
            platform="whatsapp",
        )

    async def say(self, text: str, sender: str = SENDER) -> str | None:
        return await self.handler.handle(self.message(text, sender))


@pytest.fixture
def harness() -> Harness:
    return Harness()
