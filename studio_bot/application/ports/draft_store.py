from abc import ABC, abstractmethod

from studio_bot.domain.entities.booking_state import BookingDraft


class DraftStorePort(ABC):
    """Keyed store holding at most one in-progress booking draft per sender."""

    @abstractmethod
    def get(self, sender_id: str) -> BookingDraft | None:
        raise NotImplementedError

    @abstractmethod
    def put(self, draft: BookingDraft) -> None:
        raise NotImplementedError

    @abstractmethod
    def discard(self, sender_id: str) -> None:
        raise NotImplementedError

    def has_draft(self, sender_id: str) -> bool:
        return self.get(sender_id) is not None
