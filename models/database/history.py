"""
History model - saved grammar check results
"""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from database import Base
from shared.utils import utcnow


class HistoryEntry(Base):
    """A grammar check the user chose to keep; expires after the configured TTL"""

    __tablename__ = "grammar_history"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    original_text = Column(Text, nullable=False)
    corrected_text = Column(Text, nullable=False)
    suggestions = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="history")
