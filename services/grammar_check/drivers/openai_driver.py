"""OpenAI driver for grammar checks using AsyncOpenAI."""

from __future__ import annotations

from shared.ai_clients import create_openai_client

from .base import GrammarModelDriver


class OpenAIGrammarDriver(GrammarModelDriver):
    """Direct OpenAI implementation using the chat completions API."""

    provider = "openai"

    def __init__(self, model: str, temperature: float = 0.3, max_tokens: int = 1000, client=None):
        super().__init__(model, temperature, max_tokens)
        self.client = client or create_openai_client()

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        content = response.choices[0].message.content
        if content is not None:
            return content.strip()
        return ""
