"""Tests for the model invocation client, drivers and model configuration."""

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from conftest import StubDriver
from langchain_core.messages import HumanMessage, SystemMessage

from services.grammar_check.client import ModelClient, build_driver
from services.grammar_check.config.config_loader import GrammarCheckConfig
from services.grammar_check.drivers import GeminiGrammarDriver, OpenAIGrammarDriver
from services.grammar_check.errors import ExternalServiceError
from shared.config import config as service_config


@pytest.mark.asyncio
async def test_invoke_returns_raw_text():
    client = ModelClient(primary=StubDriver(reply="raw reply"))

    assert await client.invoke("system", "user") == "raw reply"


@pytest.mark.asyncio
async def test_missing_driver_is_external_service_error():
    client = ModelClient(primary=StubDriver())
    client.primary_driver = None

    with pytest.raises(ExternalServiceError, match="No AI driver configured"):
        await client.invoke("system", "user")


@pytest.mark.asyncio
async def test_fallback_driver_used_once_after_primary_fails():
    primary = StubDriver(error=TimeoutError("slow"))
    fallback = StubDriver(reply="from fallback")
    client = ModelClient(primary=primary, fallback=fallback)

    assert await client.invoke("system", "user") == "from fallback"
    assert len(primary.calls) == 1
    assert len(fallback.calls) == 1


@pytest.mark.asyncio
async def test_both_drivers_failing_raises_external_service_error():
    client = ModelClient(
        primary=StubDriver(error=RuntimeError("primary down")),
        fallback=StubDriver(error=RuntimeError("fallback down")),
    )

    with pytest.raises(ExternalServiceError) as exc_info:
        await client.invoke("system", "user")

    assert "fallback down" in str(exc_info.value)


@pytest.mark.asyncio
async def test_openai_driver_sends_fixed_parameters():
    completion = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="  {}  "))])
    openai_client = MagicMock()
    openai_client.chat.completions.create = AsyncMock(return_value=completion)
    driver = OpenAIGrammarDriver("gpt-4o-mini", temperature=0.3, max_tokens=1000, client=openai_client)

    result = await driver.generate("system text", "user text")

    assert result == "{}"
    openai_client.chat.completions.create.assert_awaited_once_with(
        model="gpt-4o-mini",
        messages=[
            {"role": "system", "content": "system text"},
            {"role": "user", "content": "user text"},
        ],
        temperature=0.3,
        max_tokens=1000,
    )


@pytest.mark.asyncio
async def test_openai_driver_handles_empty_content():
    completion = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=None))])
    openai_client = MagicMock()
    openai_client.chat.completions.create = AsyncMock(return_value=completion)
    driver = OpenAIGrammarDriver("gpt-4o-mini", client=openai_client)

    assert await driver.generate("s", "u") == ""


@pytest.mark.asyncio
async def test_gemini_driver_joins_text_parts():
    chat_model = MagicMock()
    chat_model.ainvoke = AsyncMock(
        return_value=SimpleNamespace(
            content=[{"type": "text", "text": '{"suggestions": '}, {"type": "text", "text": "[]}"}]
        )
    )
    driver = GeminiGrammarDriver("gemini-2.0-flash", chat_model=chat_model)

    result = await driver.generate("system text", "user text")

    assert result == '{"suggestions": []}'
    messages = chat_model.ainvoke.await_args.args[0]
    assert isinstance(messages[0], SystemMessage)
    assert isinstance(messages[1], HumanMessage)
    assert messages[1].content == "user text"


def test_build_driver_rejects_unknown_provider():
    with pytest.raises(ValueError, match="Unknown model provider"):
        build_driver({"provider": "carrier-pigeon", "model": "x"}, {"temperature": 0.3, "max_tokens": 1000})


def test_default_model_configuration(monkeypatch):
    monkeypatch.setitem(service_config.config, "grammar_model_provider", None)
    monkeypatch.setitem(service_config.config, "grammar_model", None)
    settings = GrammarCheckConfig()

    assert settings.validate_config()
    assert settings.get_generation_parameters() == {"temperature": 0.3, "max_tokens": 1000}
    assert settings.get_ai_model_config("primary") == {"provider": "gemini", "model": "gemini-2.0-flash"}
    assert not settings.has_fallback()


def test_environment_overrides_primary_model(monkeypatch):
    monkeypatch.setitem(service_config.config, "grammar_model_provider", "openai")
    monkeypatch.setitem(service_config.config, "grammar_model", "gpt-4o-mini")

    primary = GrammarCheckConfig().get_ai_model_config("primary")

    assert primary == {"provider": "openai", "model": "gpt-4o-mini"}


def test_unsupported_provider_fails_validation(tmp_path: Path, monkeypatch):
    monkeypatch.setitem(service_config.config, "grammar_model_provider", None)
    config_file = tmp_path / "grammar.yaml"
    config_file.write_text(
        "ai_models:\n  primary:\n    provider: bogus\n    model: x\n"
        "generation:\n  temperature: 0.3\n  max_tokens: 1000\n",
        encoding="utf-8",
    )

    assert GrammarCheckConfig(str(config_file)).validate_config() is False


def test_client_without_credentials_has_no_primary_driver(monkeypatch):
    monkeypatch.setitem(service_config.config, "grammar_model_provider", "openai")
    monkeypatch.setitem(service_config.config, "grammar_model", "gpt-4o-mini")
    monkeypatch.setitem(service_config.config, "openai_api_key", None)

    client = ModelClient(settings=GrammarCheckConfig())

    assert client.primary_driver is None
