from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from studio_bot.application.exceptions import CalendarUpstreamError
from studio_bot.application.ports.calendar import CalendarPort
from studio_bot.core.config import settings
from studio_bot.domain.entities.appointment import CalendarEvent

SCOPES = ["https://www.googleapis.com/auth/calendar"]


class GoogleCalendar(CalendarPort):
    """
    Google Calendar v3 adapter authenticated with a service account.

    The API client is built on first use; the blocking discovery client runs
    in a worker thread so the event loop stays free.
    """

    def __init__(self, service_account_json: str | None = None, calendar_id: str | None = None) -> None:
        self._service_account_info = _parse_service_account(service_account_json or settings.GOOGLE_SERVICE_ACCOUNT)
        self._calendar_id = calendar_id or settings.GOOGLE_CALENDAR_ID
        self._service: Any = None
        # httplib2 connections are not thread-safe; one request at a time
        self._lock = asyncio.Lock()
        self._logger = logging.getLogger(__name__)

    def is_configured(self) -> bool:
        info = self._service_account_info
        return bool(info and info.get("client_email") and info.get("private_key") and self._calendar_id)

    async def insert_event(self, event: CalendarEvent, timezone: str) -> CalendarEvent:
        body = {
            "summary": event.summary,
            "description": event.description,
            "start": {"dateTime": _wall_clock(event.start), "timeZone": timezone},
            "end": {"dateTime": _wall_clock(event.end), "timeZone": timezone},
        }
        created = await self._execute(
            lambda service: service.events().insert(calendarId=self._calendar_id, body=body)
        )
        return _to_event(created)

    async def list_events(self, time_min: datetime, time_max: datetime) -> list[CalendarEvent]:
        events: list[CalendarEvent] = []
        page_token: str | None = None
        while True:
            response = await self._execute(
                lambda service: service.events().list(
                    calendarId=self._calendar_id,
                    timeMin=_rfc3339(time_min),
                    timeMax=_rfc3339(time_max),
                    singleEvents=True,
                    orderBy="startTime",
                    pageToken=page_token,
                )
            )
            events.extend(_to_event(item) for item in response.get("items", []) or [])
            page_token = response.get("nextPageToken")
            if not page_token:
                return events

    async def delete_event(self, event_id: str) -> None:
        await self._execute(lambda service: service.events().delete(calendarId=self._calendar_id, eventId=event_id))

    async def _execute(self, make_request) -> dict[str, Any]:
        if not self.is_configured():
            raise CalendarUpstreamError("Google Calendar is not configured")
        try:
            async with self._lock:
                service = await asyncio.to_thread(self._get_service)
                request = make_request(service)
                return await asyncio.to_thread(request.execute) or {}
        except HttpError as e:
            self._logger.error("Google Calendar API error", extra={"status": e.resp.status, "error": str(e)})
            raise CalendarUpstreamError(f"Google Calendar API error: {e}") from e
        except Exception as e:
            raise CalendarUpstreamError(f"Google Calendar request failed: {e}") from e

    def _get_service(self) -> Any:
        if self._service is None:
            credentials = service_account.Credentials.from_service_account_info(
                self._service_account_info, scopes=SCOPES
            )
            self._service = build("calendar", "v3", credentials=credentials, cache_discovery=False)
            self._logger.info("Google Calendar service initialized")
        return self._service


def _parse_service_account(raw: str | None) -> dict[str, Any] | None:
    if not raw or not raw.strip():
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        logging.getLogger(__name__).error("GOOGLE_SERVICE_ACCOUNT is not valid JSON")
        return None
    return data if isinstance(data, dict) else None


def _wall_clock(value: datetime | None) -> str:
    if value is None:
        raise ValueError("Event start/end is required")
    return value.replace(tzinfo=None).isoformat(timespec="seconds")


def _rfc3339(value: datetime) -> str:
    if value.tzinfo is None:
        raise ValueError("Calendar bounds must be timezone-aware")
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _parse_event_time(raw: dict[str, Any] | None) -> datetime | None:
    value = (raw or {}).get("dateTime")
    if not value:
        return None  # all-day events carry "date" only
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _to_event(item: dict[str, Any]) -> CalendarEvent:
    return CalendarEvent(
        id=item.get("id"),
        summary=item.get("summary") or "",
        description=item.get("description") or "",
        start=_parse_event_time(item.get("start")),
        end=_parse_event_time(item.get("end")),
    )
