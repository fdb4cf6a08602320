"""
User directory - email-keyed user records and usage counters
"""

from sqlalchemy import update
from sqlalchemy.orm import Session

from models.database.user import User
from shared.utils import setup_logging, utcnow

logger = setup_logging("user-directory")


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get user from database by email."""
    return db.query(User).filter(User.email == email).first()


def upsert_user(
    db: Session,
    email: str,
    name: str | None = None,
    image: str | None = None,
    hashed_password: str | None = None,
) -> User:
    """
    Create or refresh the user record for a sign-in.

    Profile fields are only overwritten when a new value is supplied;
    created_at is set once on insert.
    """
    user = get_user_by_email(db, email)
    now = utcnow()
    if user is None:
        user = User(email=email, created_at=now, checks_performed=0)
        db.add(user)
        logger.info(f"Created user record for {email}")

    if name is not None:
        user.name = name
    if image is not None:
        user.image = image
    if hashed_password is not None:
        user.hashed_password = hashed_password
    user.last_login = now

    db.commit()
    db.refresh(user)
    return user


def increment_checks(db: Session, user_id: int) -> None:
    """Add one to the user's completed grammar check counter."""
    db.execute(
        update(User)
        .where(User.id == user_id)
        .values(checks_performed=User.checks_performed + 1)
    )
    db.commit()
