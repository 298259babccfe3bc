from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from studio_bot.domain.entities.message import Message


class WebhookEventDTO(BaseModel):
    """WhatsApp Cloud API webhook body (entry[].changes[].value)."""

    object: str | None = None
    entry: list[dict[str, Any]] = Field(default_factory=list)

    def extract_messages(self) -> list[Message]:
        messages: list[Message] = []
        for entry in self.entry or []:
            for change in entry.get("changes", []) or []:
                value = change.get("value") or {}
                names = {
                    str(contact.get("wa_id")): (contact.get("profile") or {}).get("name")
                    for contact in value.get("contacts", []) or []
                }
                for msg in value.get("messages", []) or []:
                    mid = msg.get("id")
                    sender = msg.get("from")
                    timestamp = msg.get("timestamp")
                    text = (msg.get("text") or {}).get("body")

                    if not (mid and sender and timestamp) or text is None:
                        continue

                    messages.append(
                        Message(
                            id=str(mid),
                            thread_id=str(sender),
                            sender_id=str(sender),
                            text=str(text).strip(),
                            timestamp=int(timestamp),
                            platform="whatsapp",
                            sender_name=names.get(str(sender)),
                        )
                    )

        return messages
