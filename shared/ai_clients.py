"""Factories for the hosted model clients used by the grammar check drivers.

Each factory resolves credentials from the service configuration and raises
ValueError when they are missing, so callers can decide whether a provider
is usable.
"""

from __future__ import annotations

from langchain_google_genai import ChatGoogleGenerativeAI
from openai import AsyncOpenAI

from shared.utils import config


def create_openai_client(api_key: str | None = None) -> AsyncOpenAI:
    """
    Create a direct OpenAI client.

    Args:
        api_key: OpenAI API key (read from config if None)

    Returns:
        Configured AsyncOpenAI client

    Raises:
        ValueError: If API key is not configured
    """
    api_key = api_key or config.get("openai_api_key")
    if not api_key:
        raise ValueError("OpenAI API key not configured. Set OPENAI_API_KEY environment variable.")
    return AsyncOpenAI(api_key=api_key)


def create_azure_openai_client(
    api_key: str | None = None,
    azure_endpoint: str | None = None,
) -> AsyncOpenAI:
    """
    Create an Azure OpenAI client using the v1 API pattern.

    Args:
        api_key: Azure OpenAI API key (read from config if None)
        azure_endpoint: Azure OpenAI endpoint URL (read from config if None)

    Returns:
        Configured AsyncOpenAI client pointed at the Azure endpoint

    Raises:
        ValueError: If credentials are not configured
    """
    api_key = api_key or config.get("azure_openai_key")
    azure_endpoint = azure_endpoint or config.get("azure_openai_endpoint")

    if not api_key or not azure_endpoint:
        raise ValueError(
            "Azure OpenAI credentials not configured. "
            "Set AZURE_OPENAI_KEY and AZURE_OPENAI_ENDPOINT environment variables."
        )

    base_url = f"{azure_endpoint.rstrip('/')}/openai/v1/"
    return AsyncOpenAI(api_key=api_key, base_url=base_url)


def get_azure_deployment_name(deployment: str | None = None) -> str:
    """Azure deployment name from the explicit argument or config."""
    return deployment or config.get("azure_openai_deployment") or "gpt-4o-mini"


def create_gemini_chat_model(
    model: str,
    temperature: float,
    max_tokens: int,
    api_key: str | None = None,
) -> ChatGoogleGenerativeAI:
    """
    Create a Gemini chat model with fixed sampling parameters.

    Raises:
        ValueError: If the Gemini API key is not configured
    """
    api_key = api_key or config.get("gemini_api_key")
    if not api_key:
        raise ValueError(
            "Gemini API key not configured. Set GOOGLE_GEMINI_API_KEY environment variable."
        )
    return ChatGoogleGenerativeAI(
        model=model,
        google_api_key=api_key,
        temperature=temperature,
        max_output_tokens=max_tokens,
    )
