from abc import ABC, abstractmethod
from typing import Any


class ConversationStorePort(ABC):
    @abstractmethod
    def get_history(self, thread_id: str) -> list[dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    def append_message(self, thread_id: str, role: str, text: str, meta: dict[str, Any] | None = None) -> None:
        raise NotImplementedError

    @abstractmethod
    def has_processed(self, message_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def mark_processed(self, message_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_contact_name(self, thread_id: str) -> str | None:
        """Last display name seen for this thread."""
        raise NotImplementedError
