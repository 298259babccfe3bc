from __future__ import annotations

from openai import AsyncOpenAI

from studio_bot.application.exceptions import TextGenerationUpstreamError
from studio_bot.application.ports.llm import TextGenerationPort
from studio_bot.core.config import settings
from studio_bot.infrastructure.llm.prompts import build_question_prompt, build_system_prompt


class OpenAITextGenerator(TextGenerationPort):
    """
    OpenAI-backed adapter implementing TextGenerationPort.

    Raises:
        TextGenerationUpstreamError: networking/provider failures or empty completions
    """

    def __init__(self, client: AsyncOpenAI | None = None) -> None:
        self.client = client or AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
        self._system_prompt = build_system_prompt(
            business_name=settings.BUSINESS_NAME,
            address=settings.BUSINESS_ADDRESS,
            maps_link=settings.BUSINESS_MAPS_LINK,
        )

    async def answer(self, question: str) -> str | None:
        try:
            resp = await self.client.chat.completions.create(
                model=settings.OPENAI_MODEL_REPLY,
                temperature=settings.OPENAI_TEMPERATURE_REPLY,
                messages=[
                    {"role": "system", "content": self._system_prompt},
                    {"role": "user", "content": build_question_prompt(settings.BUSINESS_NAME, question)},
                ],
                max_tokens=600,
            )
        except Exception as e:
            raise TextGenerationUpstreamError(f"OpenAI API error: {e}") from e

        content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
        if not content:
            raise TextGenerationUpstreamError("LLM returned empty response text.")
        return content
