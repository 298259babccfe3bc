from __future__ import annotations

from studio_bot.application.ports.message_platform import MessagePlatformPort
from studio_bot.infrastructure.whatsapp.whatsapp_client import WhatsAppClient


class WhatsAppPlatform(MessagePlatformPort):
    def __init__(self, client: WhatsAppClient) -> None:
        self._client = client

    async def send_text(self, recipient_id: str, text: str) -> None:
        await self._client.send_text(recipient_id=recipient_id, text=text)
