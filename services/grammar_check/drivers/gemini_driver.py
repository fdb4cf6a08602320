"""Google Gemini driver for grammar checks using LangChain chat models."""

from __future__ import annotations

from typing import Any

from langchain_core.messages import HumanMessage, SystemMessage

from shared.ai_clients import create_gemini_chat_model

from .base import GrammarModelDriver


def _content_to_text(content: Any) -> str:
    """Flatten a LangChain message content (str or list of parts) to text."""
    if isinstance(content, str):
        return content
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class GeminiGrammarDriver(GrammarModelDriver):
    """Gemini implementation; sampling parameters are bound at construction."""

    provider = "gemini"

    def __init__(self, model: str, temperature: float = 0.3, max_tokens: int = 1000, chat_model=None):
        super().__init__(model, temperature, max_tokens)
        self.chat_model = chat_model or create_gemini_chat_model(model, temperature, max_tokens)

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        response = await self.chat_model.ainvoke(
            [
                SystemMessage(content=system_prompt),
                HumanMessage(content=user_prompt),
            ]
        )
        return _content_to_text(response.content).strip()
