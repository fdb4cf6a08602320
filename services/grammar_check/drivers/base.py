from abc import ABC, abstractmethod


class GrammarModelDriver(ABC):
    """Abstract base class for grammar check model drivers."""

    provider: str = "base"

    def __init__(self, model: str, temperature: float = 0.3, max_tokens: int = 1000):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    @abstractmethod
    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        """Send one system + user turn and return the raw reply text."""
        pass
