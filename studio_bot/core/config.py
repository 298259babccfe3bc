from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL_REPLY: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE_REPLY: float = 0.2

    META_VERIFY_TOKEN: str = ""
    META_APP_SECRET: str | None = None

    WHATSAPP_TOKEN: str | None = None
    WHATSAPP_PHONE_NUMBER_ID: str | None = None
    WHATSAPP_GRAPH_API_VERSION: str = "v21.0"

    BUSINESS_NAME: str = "Arte Fotografico"
    BUSINESS_TIMEZONE: str = "America/El_Salvador"
    BUSINESS_ADDRESS: str = ""
    BUSINESS_MAPS_LINK: str = ""
    ENV: str = "dev"
    # required as X-Admin-Token on /api/v1 endpoints outside dev/local
    ADMIN_TOKEN: str | None = None
    LOG_LEVEL: str = "INFO"
    AUTO_REPLY_ENABLED: bool = False
    AFTER_HOURS_AUTO_REPLY: bool = True

    # comma-separated H:MM-H:MM windows, empty means closed
    BUSINESS_HOURS_WEEKDAY: str = "8:00-12:30,14:00-18:00"
    BUSINESS_HOURS_SATURDAY: str = "8:00-12:30"
    BUSINESS_HOURS_SUNDAY: str = ""

    GOOGLE_SERVICE_ACCOUNT: str | None = None
    GOOGLE_CALENDAR_ID: str | None = None
    APPOINTMENT_DURATION_MINUTES: int = 60
    TEST_EVENT_DURATION_MINUTES: int = 30
    LIST_WINDOW_DAYS: int = 30

    DRAFT_TTL_SECONDS: float | None = None

    CATALOG_PATH: str = "./catalog.json"
    TRANSCRIPT_DIR: str = "./data/threads"


settings = Settings()
