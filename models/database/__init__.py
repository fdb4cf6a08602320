"""
Database models package - SQLAlchemy ORM models
"""

from .history import HistoryEntry
from .user import User

__all__ = [
    "HistoryEntry",
    "User",
]
