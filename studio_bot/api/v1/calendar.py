from __future__ import annotations

import hmac
import logging

from fastapi import APIRouter, Depends, Header, HTTPException

from studio_bot.api.v1.schemas import TestEventRequest, TestEventResponse
from studio_bot.application.use_cases.calendar_gateway import CalendarGateway
from studio_bot.core.config import settings
from studio_bot.infrastructure.whatsapp.webhook_verify import DEV_ENVS
from studio_bot.wiring.dependencies import get_calendar_gateway


logger = logging.getLogger(__name__)


def require_admin_access(x_admin_token: str | None = Header(None, alias="X-Admin-Token")) -> None:
    """Open in dev/local; elsewhere the caller must present ADMIN_TOKEN."""
    if settings.ENV.lower() in DEV_ENVS:
        return
    expected = settings.ADMIN_TOKEN
    if expected and x_admin_token and hmac.compare_digest(x_admin_token, expected):
        return
    logger.warning("Calendar admin request refused", extra={"reason": f"env={settings.ENV}"})
    raise HTTPException(status_code=403, detail="Forbidden")


router = APIRouter(prefix="/calendar", dependencies=[Depends(require_admin_access)])


@router.post("/test-event", response_model=TestEventResponse)
async def create_test_event(
    req: TestEventRequest,
    gateway: CalendarGateway = Depends(get_calendar_gateway),
) -> TestEventResponse:
    created = await gateway.create_test_event(name=req.name, phone=req.phone)
    logger.info("Calendar test event requested", extra={"reason": "created" if created else "failed"})
    return TestEventResponse(created=created)
