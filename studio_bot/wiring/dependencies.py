from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from studio_bot.application.ports.calendar import CalendarPort
from studio_bot.application.ports.conversation_store import ConversationStorePort
from studio_bot.application.ports.llm import TextGenerationPort
from studio_bot.application.ports.message_platform import MessagePlatformPort
from studio_bot.application.use_cases.booking import BookingUseCase
from studio_bot.application.use_cases.calendar_gateway import CalendarGateway
from studio_bot.application.use_cases.generate_reply import GenerateReplyUseCase
from studio_bot.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from studio_bot.application.use_cases.reply_composer import ReplyComposer
from studio_bot.application.use_cases.send_reply import SendReplyUseCase
from studio_bot.application.utils.business_hours import BusinessHours, parse_windows
from studio_bot.application.utils.date_parser import safe_timezone
from studio_bot.core.config import settings
from studio_bot.infrastructure.calendar.google_calendar import GoogleCalendar
from studio_bot.infrastructure.calendar.mock_calendar import MockCalendar
from studio_bot.infrastructure.knowledge.service_catalog_store import ServiceCatalogStore
from studio_bot.infrastructure.llm.mock_llm import MockTextGenerator
from studio_bot.infrastructure.llm.openai_llm import OpenAITextGenerator
from studio_bot.infrastructure.store.draft_store import MemoryDraftStore
from studio_bot.infrastructure.store.json_store import JsonConversationStore
from studio_bot.infrastructure.store.memory_store import MemoryConversationStore
from studio_bot.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform
from studio_bot.infrastructure.whatsapp.whatsapp_client import WhatsAppClient
from studio_bot.infrastructure.whatsapp.whatsapp_platform import WhatsAppPlatform

DEV_ENVS = {"dev", "local"}


def _is_dev() -> bool:
    return settings.ENV.lower() in DEV_ENVS


def get_timezone() -> ZoneInfo:
    return safe_timezone(settings.BUSINESS_TIMEZONE)


@lru_cache
def get_business_hours() -> BusinessHours:
    return BusinessHours(
        weekday=parse_windows(settings.BUSINESS_HOURS_WEEKDAY),
        saturday=parse_windows(settings.BUSINESS_HOURS_SATURDAY),
        sunday=parse_windows(settings.BUSINESS_HOURS_SUNDAY),
    )


@lru_cache
def get_llm() -> TextGenerationPort:
    if settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip():
        return OpenAITextGenerator()
    return MockTextGenerator()


@lru_cache
def get_conversation_store() -> ConversationStorePort:
    if _is_dev():
        return JsonConversationStore(data_dir=settings.TRANSCRIPT_DIR)
    return MemoryConversationStore()


@lru_cache
def get_draft_store() -> MemoryDraftStore:
    return MemoryDraftStore(ttl_seconds=settings.DRAFT_TTL_SECONDS)


@lru_cache
def get_service_catalog() -> ServiceCatalogStore:
    return ServiceCatalogStore.from_file(settings.CATALOG_PATH)


@lru_cache
def get_calendar() -> CalendarPort:
    if not settings.GOOGLE_SERVICE_ACCOUNT and _is_dev():
        logging.getLogger(__name__).info("Using MockCalendar (no service account, ENV=dev/local)")
        return MockCalendar()
    # an unconfigured GoogleCalendar makes every gateway call fail fast
    return GoogleCalendar()


@lru_cache
def get_calendar_gateway() -> CalendarGateway:
    return CalendarGateway(
        calendar=get_calendar(),
        timezone=get_timezone(),
        duration_minutes=settings.APPOINTMENT_DURATION_MINUTES,
        test_duration_minutes=settings.TEST_EVENT_DURATION_MINUTES,
        list_window_days=settings.LIST_WINDOW_DAYS,
        business_name=settings.BUSINESS_NAME,
    )


@lru_cache
def get_message_platform() -> MessagePlatformPort:
    logger = logging.getLogger(__name__)
    logger.info(
        "WHATSAPP_TOKEN present=%s len=%s",
        bool(settings.WHATSAPP_TOKEN),
        len(settings.WHATSAPP_TOKEN or ""),
    )
    logger.info("ENV=%s", settings.ENV)

    if not settings.WHATSAPP_TOKEN or not settings.WHATSAPP_PHONE_NUMBER_ID:
        if _is_dev():
            logger.info("Using MockWhatsAppPlatform (token missing, ENV=dev/local)")
            return MockWhatsAppPlatform()
        raise ValueError("WHATSAPP_TOKEN and WHATSAPP_PHONE_NUMBER_ID are required to send WhatsApp replies.")

    logger.info("Using real WhatsAppPlatform")
    client = WhatsAppClient(
        access_token=settings.WHATSAPP_TOKEN,
        phone_number_id=settings.WHATSAPP_PHONE_NUMBER_ID,
        api_version=settings.WHATSAPP_GRAPH_API_VERSION,
    )
    return WhatsAppPlatform(client=client)


@lru_cache
def get_handle_incoming_message_use_case() -> HandleIncomingMessageUseCase:
    hours = get_business_hours()
    composer = ReplyComposer(business_name=settings.BUSINESS_NAME, hours=hours)
    drafts = get_draft_store()
    gateway = get_calendar_gateway()
    return HandleIncomingMessageUseCase(
        store=get_conversation_store(),
        drafts=drafts,
        booking=BookingUseCase(store=drafts, gateway=gateway, composer=composer, hours=hours),
        gateway=gateway,
        generate_reply=GenerateReplyUseCase(catalog=get_service_catalog(), llm=get_llm(), composer=composer),
        send_reply=SendReplyUseCase(platform=get_message_platform(), enabled=settings.AUTO_REPLY_ENABLED),
        composer=composer,
        timezone=get_timezone(),
        hours=hours,
        after_hours_reply=settings.AFTER_HOURS_AUTO_REPLY,
        list_window_days=settings.LIST_WINDOW_DAYS,
    )


def get_container() -> dict[str, object]:
    return {
        "use_case": get_handle_incoming_message_use_case(),
        "store": get_conversation_store(),
        "drafts": get_draft_store(),
        "gateway": get_calendar_gateway(),
    }
