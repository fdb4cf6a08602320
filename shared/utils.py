from datetime import datetime, timezone

from shared.config import config
from shared.logging_utils import setup_logging, truncate_for_log

__all__ = ["config", "setup_logging", "truncate_for_log", "utcnow", "clamp"]


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def clamp(value: int, lower: int, upper: int | None = None) -> int:
    """Clamp an integer into [lower, upper]; upper is optional."""
    value = max(lower, value)
    if upper is not None:
        value = min(upper, value)
    return value
