"""Grammar check model driver implementations."""

from .azure_driver import AzureOpenAIGrammarDriver
from .base import GrammarModelDriver
from .gemini_driver import GeminiGrammarDriver
from .openai_driver import OpenAIGrammarDriver

DRIVERS: dict[str, type[GrammarModelDriver]] = {
    "gemini": GeminiGrammarDriver,
    "openai": OpenAIGrammarDriver,
    "azure_openai": AzureOpenAIGrammarDriver,
}

__all__ = [
    "DRIVERS",
    "GrammarModelDriver",
    "GeminiGrammarDriver",
    "OpenAIGrammarDriver",
    "AzureOpenAIGrammarDriver",
]
