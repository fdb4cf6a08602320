"""
Configuration management for services.
"""

import json
import os
from typing import Any

from dotenv import load_dotenv


class ServiceConfig:
    """Configuration management for services using environment variables."""

    def __init__(self) -> None:
        """Initialize configuration by loading environment variables."""
        # .env lives next to app.py
        env_path = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.env"))
        load_dotenv(dotenv_path=env_path, override=False)
        self.config: dict[str, Any] = {}
        self.load_from_env()

    def load_from_env(self) -> None:
        """Load configuration from environment variables."""
        self.config = {
            "gemini_api_key": os.getenv("GOOGLE_GEMINI_API_KEY"),
            "openai_api_key": os.getenv("OPENAI_API_KEY"),
            "azure_openai_key": os.getenv("AZURE_OPENAI_KEY"),
            "azure_openai_endpoint": os.getenv("AZURE_OPENAI_ENDPOINT"),
            "azure_openai_deployment": os.getenv("AZURE_OPENAI_DEPLOYMENT"),
            "grammar_model_provider": os.getenv("GRAMMAR_MODEL_PROVIDER"),
            "grammar_model": os.getenv("GRAMMAR_MODEL"),
            "database_url": os.getenv("DATABASE_URL"),
            "secret_key": os.getenv("SECRET_KEY", "supersecret"),
            "access_token_expire_minutes": int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440")),
            "history_ttl_days": int(os.getenv("HISTORY_TTL_DAYS", "30")),
            "debug": os.getenv("DEBUG", "false").lower() == "true",
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
            "allowed_origins": json.loads(os.getenv("ALLOWED_ORIGINS", '["*"]')),
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found or unset

        Returns:
            Configuration value
        """
        value = self.config.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value.

        Args:
            key: Configuration key
            value: Configuration value
        """
        self.config[key] = value

    def reload(self) -> None:
        """Reload configuration from environment variables."""
        self.load_from_env()


# Global configuration instance
config = ServiceConfig()
