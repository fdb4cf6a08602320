"""
Configuration loader for the grammar check service.
Handles loading and validation of the YAML model configuration.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from shared.config import config as service_config

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = {"gemini", "openai", "azure_openai"}


class GrammarCheckConfig:
    """Configuration manager for grammar check model calls."""

    def __init__(self, config_path: str | None = None):
        if config_path is None:
            config_path = os.path.join(os.path.dirname(__file__), "grammar_config.yaml")

        self.config_path = Path(config_path)
        self._config = self._load_config()

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(self.config_path, encoding="utf-8") as file:
                config = yaml.safe_load(file) or {}
                logger.info(f"Loaded configuration from {self.config_path}")
                return config
        except FileNotFoundError:
            logger.error(f"Configuration file not found: {self.config_path}")
            raise
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML configuration: {e}")
            raise

    def get_ai_model_config(self, model_type: str = "primary") -> dict[str, Any]:
        """Get AI model configuration; environment overrides apply to the primary entry."""
        models = self._config.get("ai_models", {})
        model_config = dict(models.get(model_type) or {})
        if model_type == "primary":
            provider = service_config.get("grammar_model_provider")
            model = service_config.get("grammar_model")
            if provider:
                model_config["provider"] = provider
            if model:
                model_config["model"] = model
        return model_config

    def has_fallback(self) -> bool:
        return bool(self._config.get("ai_models", {}).get("fallback"))

    def get_generation_parameters(self) -> dict[str, Any]:
        """Sampling parameters shared by every provider."""
        generation = self._config.get("generation", {})
        return {
            "temperature": generation.get("temperature", 0.3),
            "max_tokens": generation.get("max_tokens", 1000),
        }

    def validate_config(self) -> bool:
        """Validate the loaded configuration."""
        for section in ("ai_models", "generation"):
            if section not in self._config:
                logger.error(f"Missing required configuration section: {section}")
                return False

        for model_type in ("primary", "fallback"):
            if model_type == "fallback" and not self.has_fallback():
                continue
            model_config = self.get_ai_model_config(model_type)
            provider = model_config.get("provider")
            if provider not in SUPPORTED_PROVIDERS:
                logger.error(f"Unsupported provider '{provider}' for {model_type} model")
                return False
            if not model_config.get("model"):
                logger.error(f"Missing model name for {model_type} model")
                return False

        logger.info("Configuration validation passed")
        return True

    def reload_config(self):
        """Reload configuration from file."""
        self._config = self._load_config()
        logger.info("Configuration reloaded")


# Global configuration instance
config = GrammarCheckConfig()
