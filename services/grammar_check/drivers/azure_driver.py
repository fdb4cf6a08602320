"""Azure OpenAI driver for grammar checks using the v1 API pattern."""

from __future__ import annotations

from shared.ai_clients import create_azure_openai_client, get_azure_deployment_name

from .openai_driver import OpenAIGrammarDriver


class AzureOpenAIGrammarDriver(OpenAIGrammarDriver):
    """Azure OpenAI implementation; the model name is the deployment name."""

    provider = "azure_openai"

    def __init__(self, model: str | None = None, temperature: float = 0.3, max_tokens: int = 1000, client=None):
        super().__init__(
            get_azure_deployment_name(model),
            temperature,
            max_tokens,
            client=client or create_azure_openai_client(),
        )
