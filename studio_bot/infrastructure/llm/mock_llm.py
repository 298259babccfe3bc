from __future__ import annotations

import logging

from studio_bot.application.ports.llm import TextGenerationPort


class MockTextGenerator(TextGenerationPort):
    """Used when no OpenAI key is configured; defers to the canned reply."""

    def __init__(self, answers: dict[str, str] | None = None) -> None:
        self._answers = {k.lower(): v for k, v in (answers or {}).items()}
        self.questions: list[str] = []
        self._logger = logging.getLogger(__name__)

    async def answer(self, question: str) -> str | None:
        self.questions.append(question)
        normalized = question.lower()
        for key, value in self._answers.items():
            if key in normalized:
                return value
        self._logger.info("Mock text generator has no answer", extra={"reason": "no_match"})
        return None
