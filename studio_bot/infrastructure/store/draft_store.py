from __future__ import annotations

import time
from dataclasses import replace
from typing import Callable

from studio_bot.application.ports.draft_store import DraftStorePort
from studio_bot.domain.entities.booking_state import BookingDraft


class MemoryDraftStore(DraftStorePort):
    """
    In-process draft map keyed by sender id. No locking: each sender's
    messages are handled one after another, and different senders never
    share a key.

    With ttl_seconds set, drafts idle for longer than the TTL read as absent
    and are dropped.
    """

    def __init__(self, ttl_seconds: float | None = None, clock: Callable[[], float] = time.time) -> None:
        self._drafts: dict[str, BookingDraft] = {}
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    def get(self, sender_id: str) -> BookingDraft | None:
        draft = self._drafts.get(sender_id)
        if draft is not None and self._is_expired(draft):
            del self._drafts[sender_id]
            return None
        return draft

    def put(self, draft: BookingDraft) -> None:
        self._drafts[draft.sender_id] = replace(draft, updated_at=self._clock())

    def discard(self, sender_id: str) -> None:
        self._drafts.pop(sender_id, None)

    def purge_expired(self) -> int:
        expired = [sender_id for sender_id, draft in self._drafts.items() if self._is_expired(draft)]
        for sender_id in expired:
            del self._drafts[sender_id]
        return len(expired)

    def __len__(self) -> int:
        return len(self._drafts)

    def _is_expired(self, draft: BookingDraft) -> bool:
        if not self._ttl_seconds or draft.updated_at is None:
            return False
        return self._clock() - draft.updated_at > self._ttl_seconds
