from __future__ import annotations

import logging

import httpx

GRAPH_API_BASE = "https://graph.facebook.com"


class WhatsAppClient:
    def __init__(self, access_token: str, phone_number_id: str, api_version: str = "v21.0") -> None:
        self._access_token = access_token
        self._send_endpoint = f"{GRAPH_API_BASE}/{api_version}/{phone_number_id}/messages"
        self._client = httpx.AsyncClient(timeout=10.0)
        self._logger = logging.getLogger(__name__)

    async def send_text(self, recipient_id: str, text: str) -> None:
        payload = {
            "messaging_product": "whatsapp",
            "to": recipient_id,
            "type": "text",
            "text": {"body": text},
        }
        headers = {"Authorization": f"Bearer {self._access_token}"}
        resp = await self._client.post(self._send_endpoint, headers=headers, json=payload)
        if resp.status_code >= 400:
            try:
                error = resp.json().get("error", {})
                error_code = error.get("code")
                error_message = error.get("message")
            except Exception:
                error_code = None
                error_message = resp.text

            self._logger.error(
                "WhatsApp send failed",
                extra={
                    "status": resp.status_code,
                    "error_code": error_code,
                    "error_message": error_message,
                    "recipient_id": recipient_id,
                    "text_length": len(text),
                },
            )
            resp.raise_for_status()

    async def aclose(self) -> None:
        await self._client.aclose()
