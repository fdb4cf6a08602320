"""Model invocation client: one provider call per grammar check."""

from __future__ import annotations

import logging

from services.grammar_check.config.config_loader import GrammarCheckConfig
from services.grammar_check.config.config_loader import config as grammar_config
from services.grammar_check.drivers import DRIVERS, GrammarModelDriver
from services.grammar_check.errors import ExternalServiceError

logger = logging.getLogger(__name__)


def build_driver(model_config: dict, generation: dict) -> GrammarModelDriver:
    """Instantiate the driver named by a model config entry."""
    provider = model_config.get("provider", "gemini")
    driver_cls = DRIVERS.get(provider)
    if driver_cls is None:
        raise ValueError(f"Unknown model provider: {provider}")
    return driver_cls(
        model_config.get("model"),
        temperature=generation["temperature"],
        max_tokens=generation["max_tokens"],
    )


class ModelClient:
    """Sends composed prompts to the configured model and returns raw text.

    Provider failures of any kind surface as ExternalServiceError. The
    client does not retry; a configured fallback driver gets exactly one
    attempt after the primary fails.
    """

    def __init__(
        self,
        primary: GrammarModelDriver | None = None,
        fallback: GrammarModelDriver | None = None,
        settings: GrammarCheckConfig | None = None,
    ):
        self.settings = settings or grammar_config
        if primary is None and fallback is None:
            primary, fallback = self._init_drivers()
        self.primary_driver = primary
        self.fallback_driver = fallback

    def _init_drivers(self) -> tuple[GrammarModelDriver | None, GrammarModelDriver | None]:
        """Initialize drivers based on configuration."""
        if not self.settings.validate_config():
            raise ValueError("Invalid grammar check configuration")
        generation = self.settings.get_generation_parameters()

        primary_config = self.settings.get_ai_model_config("primary")
        logger.info(f"Initializing primary AI driver: {primary_config.get('provider')}")
        try:
            primary = build_driver(primary_config, generation)
        except ValueError as e:
            logger.warning(f"Failed to initialize primary driver: {e}")
            primary = None

        fallback = None
        if self.settings.has_fallback():
            fallback_config = self.settings.get_ai_model_config("fallback")
            logger.info(f"Initializing fallback AI driver: {fallback_config.get('provider')}")
            try:
                fallback = build_driver(fallback_config, generation)
            except ValueError as e:
                logger.warning(f"Failed to initialize fallback driver: {e}")

        return primary, fallback

    async def invoke(self, system_prompt: str, user_prompt: str) -> str:
        """Return the model's raw reply for one system + user turn."""
        if not self.primary_driver:
            raise ExternalServiceError("No AI driver configured")

        try:
            logger.info(
                f"Using {self.primary_driver.provider} provider with model: {self.primary_driver.model}"
            )
            return await self.primary_driver.generate(system_prompt, user_prompt)
        except Exception as e:
            logger.error(f"Primary AI driver failed: {e!s}")
            if not self.fallback_driver:
                raise ExternalServiceError(f"Model provider call failed: {e!s}") from e

        try:
            logger.info("Attempting fallback AI driver...")
            return await self.fallback_driver.generate(system_prompt, user_prompt)
        except Exception as fallback_error:
            logger.error(f"Fallback AI driver also failed: {fallback_error!s}")
            raise ExternalServiceError(
                f"Model provider call failed: {fallback_error!s}"
            ) from fallback_error
