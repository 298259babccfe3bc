from __future__ import annotations

import logging

from studio_bot.application.ports.message_platform import MessagePlatformPort


class SendReplyUseCase:
    def __init__(self, platform: MessagePlatformPort, enabled: bool) -> None:
        self._platform = platform
        self._enabled = enabled
        self._logger = logging.getLogger(__name__)

    async def execute(self, recipient_id: str, text: str) -> bool:
        """Send a reply. Returns True if actually sent, False if skipped or failed."""
        if not self._enabled:
            self._logger.info("WOULD_SEND_REPLY", extra={"thread_id": recipient_id, "reply_text": text[:100]})
            self._logger.info("AUTO_REPLY_ENABLED=false -> skipping send")
            return False
        try:
            await self._platform.send_text(recipient_id=recipient_id, text=text)
        except Exception as e:
            # delivery is best effort; the platform owns retries
            self._logger.error("Reply delivery failed", extra={"thread_id": recipient_id, "error": str(e)})
            return False
        return True
