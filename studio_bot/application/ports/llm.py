from abc import ABC, abstractmethod


class TextGenerationPort(ABC):
    @abstractmethod
    async def answer(self, question: str) -> str | None:
        """
        Answer a free-form customer question in the business's voice.

        Returns None when the adapter has nothing to say (e.g. no provider configured).

        Raises:
            TextGenerationUpstreamError: provider failure or empty completion
        """
        raise NotImplementedError
