from __future__ import annotations

import logging

from studio_bot.application.exceptions import TextGenerationUpstreamError
from studio_bot.application.ports.llm import TextGenerationPort
from studio_bot.application.ports.service_catalog import ServiceCatalogPort
from studio_bot.application.use_cases.reply_composer import ReplyComposer


class GenerateReplyUseCase:
    """Free-form answers: catalog lookup first, then the text generator, then a canned reply."""

    def __init__(self, catalog: ServiceCatalogPort, llm: TextGenerationPort, composer: ReplyComposer) -> None:
        self._catalog = catalog
        self._llm = llm
        self._composer = composer
        self._logger = logging.getLogger(__name__)

    async def execute(self, text: str) -> str:
        entry = self._catalog.find(text)
        if entry is not None:
            self._logger.info("Catalog hit", extra={"service": entry.name})
            return self._composer.catalog_entry(entry)

        try:
            answer = await self._llm.answer(text)
        except TextGenerationUpstreamError as e:
            self._logger.error("Text generation failed", extra={"reason": "llm_error", "error": str(e)})
            answer = None

        if answer and answer.strip():
            return answer.strip()
        return self._composer.fallback()
