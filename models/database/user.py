"""
User model - sign-in identity and usage counter
"""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from database import Base
from shared.utils import utcnow


class User(Base):
    """User account keyed by email"""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=True)
    image = Column(String(500), nullable=True)
    hashed_password = Column(String(255), nullable=True)
    last_login = Column(DateTime, default=utcnow, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    checks_performed = Column(Integer, default=0, nullable=False)

    # Relationships
    history = relationship("HistoryEntry", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
