"""
Tests for the HTTP surface: WhatsApp webhook verification and delivery,
payload parsing and the calendar test-event endpoint.
"""

from __future__ import annotations

import hashlib
import hmac
import json

import pytest
from fastapi.testclient import TestClient

import studio_bot.api.webhooks as webhooks
from studio_bot.application.dto.webhook_event import WebhookEventDTO
from studio_bot.application.use_cases.calendar_gateway import CalendarGateway
from studio_bot.core.config import settings
from studio_bot.infrastructure.calendar.mock_calendar import MockCalendar
from studio_bot.main import app
from studio_bot.wiring.dependencies import get_calendar_gateway

from conftest import FIXED_NOW, TZ


def whatsapp_payload(*messages: dict, contacts: list[dict] | None = None) -> dict:
    return {
        "object": "whatsapp_business_account",
        "entry": [
            {
                "id": "WABA_ID",
                "changes": [
                    {
                        "field": "messages",
                        "value": {
                            "messaging_product": "whatsapp",
                            "contacts": contacts or [],
                            "messages": list(messages),
                        },
                    }
                ],
            }
        ],
    }


def text_message(mid: str, sender: str, body: str) -> dict:
    return {"id": mid, "from": sender, "timestamp": "1763136000", "type": "text", "text": {"body": body}}


class RecordingUseCase:
    def __init__(self) -> None:
        self.handled = []

    async def handle(self, message):
        self.handled.append(message)
        return "ok"


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def recorder(monkeypatch):
    use_case = RecordingUseCase()
    monkeypatch.setattr(webhooks, "get_handle_incoming_message_use_case", lambda: use_case)
    return use_case


def test_extract_messages_keeps_text_only():
    payload = whatsapp_payload(
        text_message("wamid.1", "50370000000", "  hola  "),
        {"id": "wamid.2", "from": "50370000000", "timestamp": "1763136001", "type": "image", "image": {"id": "x"}},
        contacts=[{"wa_id": "50370000000", "profile": {"name": "Jane Doe"}}],
    )

    messages = WebhookEventDTO.model_validate(payload).extract_messages()

    assert len(messages) == 1
    message = messages[0]
    assert message.id == "wamid.1"
    assert message.sender_id == message.thread_id == "50370000000"
    assert message.text == "hola"
    assert message.timestamp == 1763136000
    assert message.platform == "whatsapp"
    assert message.sender_name == "Jane Doe"


def test_status_callbacks_have_no_messages():
    payload = {
        "object": "whatsapp_business_account",
        "entry": [{"changes": [{"value": {"statuses": [{"id": "wamid.1", "status": "delivered"}]}}]}],
    }
    assert WebhookEventDTO.model_validate(payload).extract_messages() == []


def test_verify_webhook(client, monkeypatch):
    monkeypatch.setattr(settings, "META_VERIFY_TOKEN", "let-me-in")

    ok = client.get(
        "/webhook", params={"hub.mode": "subscribe", "hub.verify_token": "let-me-in", "hub.challenge": "12345"}
    )
    assert ok.status_code == 200
    assert ok.text == "12345"

    denied = client.get(
        "/webhook", params={"hub.mode": "subscribe", "hub.verify_token": "wrong", "hub.challenge": "12345"}
    )
    assert denied.status_code == 403


def test_post_webhook_dispatches_messages(client, recorder, monkeypatch):
    monkeypatch.setattr(settings, "ENV", "dev")
    payload = whatsapp_payload(text_message("wamid.1", "50370000000", "5"), text_message("wamid.2", "50371112222", "hi"))

    response = client.post("/webhook", json=payload)

    assert response.status_code == 200
    assert [m.id for m in recorder.handled] == ["wamid.1", "wamid.2"]


def test_post_webhook_checks_signature_outside_dev(client, recorder, monkeypatch):
    monkeypatch.setattr(settings, "ENV", "production")
    monkeypatch.setattr(settings, "META_APP_SECRET", "app-secret")
    body = json.dumps(whatsapp_payload(text_message("wamid.1", "50370000000", "5"))).encode("utf-8")
    signature = "sha256=" + hmac.new(b"app-secret", body, hashlib.sha256).hexdigest()

    unsigned = client.post("/webhook", content=body, headers={"Content-Type": "application/json"})
    assert unsigned.status_code == 403

    forged = client.post(
        "/webhook", content=body, headers={"Content-Type": "application/json", "X-Hub-Signature-256": "sha256=00"}
    )
    assert forged.status_code == 403
    assert recorder.handled == []

    signed = client.post(
        "/webhook", content=body, headers={"Content-Type": "application/json", "X-Hub-Signature-256": signature}
    )
    assert signed.status_code == 200
    assert len(recorder.handled) == 1


def test_unsigned_post_is_refused_before_building_the_use_case(client, monkeypatch):
    monkeypatch.setattr(settings, "ENV", "production")
    monkeypatch.setattr(settings, "META_APP_SECRET", "app-secret")

    def broken_use_case():
        raise RuntimeError("WHATSAPP_TOKEN is required")

    monkeypatch.setattr(webhooks, "get_handle_incoming_message_use_case", broken_use_case)

    response = client.post("/webhook", json=whatsapp_payload(text_message("wamid.1", "50370000000", "5")))

    assert response.status_code == 403


def test_signed_post_reports_initialization_failure(client, monkeypatch):
    monkeypatch.setattr(settings, "ENV", "dev")

    def broken_use_case():
        raise RuntimeError("WHATSAPP_TOKEN is required")

    monkeypatch.setattr(webhooks, "get_handle_incoming_message_use_case", broken_use_case)

    response = client.post("/webhook", json=whatsapp_payload(text_message("wamid.1", "50370000000", "5")))

    assert response.status_code == 500


def test_post_webhook_rejects_invalid_json(client, recorder, monkeypatch):
    monkeypatch.setattr(settings, "ENV", "dev")
    response = client.post("/webhook", content=b"{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert recorder.handled == []


def test_calendar_test_event_endpoint(client, monkeypatch):
    monkeypatch.setattr(settings, "ENV", "dev")
    calendar = MockCalendar()
    app.dependency_overrides[get_calendar_gateway] = lambda: CalendarGateway(
        calendar=calendar, timezone=TZ, now=lambda: FIXED_NOW
    )
    try:
        response = client.post("/api/v1/calendar/test-event", json={"name": "Jane", "phone": "50370000000"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json() == {"created": True}
    assert calendar.inserted[0].summary == "Test event - Jane"


def test_calendar_test_event_endpoint_unconfigured(client, monkeypatch):
    monkeypatch.setattr(settings, "ENV", "local")
    app.dependency_overrides[get_calendar_gateway] = lambda: CalendarGateway(
        calendar=MockCalendar(configured=False), timezone=TZ
    )
    try:
        response = client.post("/api/v1/calendar/test-event", json={})
    finally:
        app.dependency_overrides.clear()

    assert response.json() == {"created": False}


def test_calendar_test_event_endpoint_requires_admin_token_outside_dev(client, monkeypatch):
    monkeypatch.setattr(settings, "ENV", "production")
    monkeypatch.setattr(settings, "ADMIN_TOKEN", "studio-admin")
    calendar = MockCalendar()
    app.dependency_overrides[get_calendar_gateway] = lambda: CalendarGateway(
        calendar=calendar, timezone=TZ, now=lambda: FIXED_NOW
    )
    try:
        anonymous = client.post("/api/v1/calendar/test-event", json={"name": "Jane"})
        wrong = client.post(
            "/api/v1/calendar/test-event", json={"name": "Jane"}, headers={"X-Admin-Token": "guess"}
        )
        allowed = client.post(
            "/api/v1/calendar/test-event", json={"name": "Jane"}, headers={"X-Admin-Token": "studio-admin"}
        )
    finally:
        app.dependency_overrides.clear()

    assert anonymous.status_code == 403
    assert wrong.status_code == 403
    assert allowed.status_code == 200
    assert len(calendar.inserted) == 1


def test_calendar_test_event_endpoint_closed_without_admin_token(client, monkeypatch):
    monkeypatch.setattr(settings, "ENV", "production")
    monkeypatch.setattr(settings, "ADMIN_TOKEN", None)
    calendar = MockCalendar()
    app.dependency_overrides[get_calendar_gateway] = lambda: CalendarGateway(calendar=calendar, timezone=TZ)
    try:
        response = client.post("/api/v1/calendar/test-event", json={}, headers={"X-Admin-Token": ""})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 403
    assert calendar.inserted == []


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
