"""
Logging utilities for the application.
"""
import logging
import os


def setup_logging(service_name: str, log_level: str | None = None) -> logging.Logger:
    """
    Setup logging configuration for a service.

    Args:
        service_name: Name of the service for log identification
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Falls back to the LOG_LEVEL environment variable.

    Returns:
        Configured logger instance
    """
    level_name = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logger = logging.getLogger(service_name)
    logger.setLevel(getattr(logging, level_name, logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            f"%(asctime)s - {service_name} - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def truncate_for_log(text: str, limit: int = 80) -> str:
    """Shorten user text before it is written to a log line."""
    text = text.replace("\n", " ")
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."
