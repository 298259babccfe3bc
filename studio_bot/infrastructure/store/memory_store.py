from __future__ import annotations

from collections import deque
from typing import Any

from studio_bot.application.ports.conversation_store import ConversationStorePort


class MemoryConversationStore(ConversationStorePort):
    def __init__(self, history_limit: int = 30, processed_limit: int = 1000) -> None:
        self._threads: dict[str, list[dict[str, Any]]] = {}
        self._processed: set[str] = set()
        self._processed_order: deque[str] = deque()
        self._processed_limit = processed_limit
        self._contact_names: dict[str, str] = {}
        self._history_limit = history_limit

    def get_history(self, thread_id: str) -> list[dict[str, Any]]:
        return list(self._threads.get(thread_id, []))

    def append_message(self, thread_id: str, role: str, text: str, meta: dict[str, Any] | None = None) -> None:
        meta = dict(meta or {})
        self._threads.setdefault(thread_id, [])
        self._threads[thread_id].append(
            {
                "role": role,
                "content": text,
                "meta": meta,
            }
        )
        if len(self._threads[thread_id]) > self._history_limit:
            self._threads[thread_id] = self._threads[thread_id][-self._history_limit :]
        if role == "user" and meta.get("sender_name"):
            self._contact_names[thread_id] = str(meta["sender_name"])

    def has_processed(self, message_id: str) -> bool:
        return message_id in self._processed

    def mark_processed(self, message_id: str) -> None:
        if message_id in self._processed:
            return
        self._processed.add(message_id)
        self._processed_order.append(message_id)
        while len(self._processed_order) > self._processed_limit:
            self._processed.discard(self._processed_order.popleft())

    def get_contact_name(self, thread_id: str) -> str | None:
        return self._contact_names.get(thread_id)
