import logging

from fastapi import FastAPI

from studio_bot.api.v1.calendar import router as calendar_router
from studio_bot.api.webhooks import router as webhooks_router
from studio_bot.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("message_id", "thread_id", "action", "step", "reason", "event_id", "error", "reply_text"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title=f"{settings.BUSINESS_NAME} WhatsApp Assistant", version="1.0.0")

app.include_router(webhooks_router, tags=["webhooks"])
app.include_router(calendar_router, prefix="/api/v1", tags=["calendar"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
