"""
Database configuration and session management
Supports PostgreSQL for deployed environments and SQLite for local development
"""

import os

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from shared.utils import config, setup_logging

logger = setup_logging("database")

Base = declarative_base()
SessionLocal = sessionmaker(autocommit=False, autoflush=False)

# Process-wide engine, established on first use
_engine: Engine | None = None


def build_database_url() -> str:
    """
    Build database URL from environment variables with fallback to DATABASE_URL
    Supports individual DB components for flexible configuration
    """
    # Priority 1: Use DATABASE_URL if provided
    database_url = config.get("database_url")
    if database_url:
        # Convert postgres:// to postgresql:// for SQLAlchemy compatibility
        if database_url.startswith("postgres://"):
            database_url = database_url.replace("postgres://", "postgresql://", 1)
        return database_url

    # Priority 2: Build from individual components
    db_host = os.getenv("DB_HOST", "localhost")
    db_port = os.getenv("DB_PORT", "5432")
    db_user = os.getenv("DB_USER", "postgres")
    db_password = os.getenv("DB_PASSWORD", "postgres")
    db_name = os.getenv("DB_NAME", "grammar_checker")
    db_sslmode = os.getenv("DB_SSLMODE", "prefer")

    database_url = f"postgresql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"
    if db_sslmode:
        database_url += f"?sslmode={db_sslmode}"

    logger.info(f"Built database URL from components: postgresql://{db_user}:***@{db_host}:{db_port}/{db_name}")
    return database_url


def create_database_engine() -> Engine:
    """Create SQLAlchemy engine and verify the connection"""
    database_url = build_database_url()

    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, connect_args={"check_same_thread": False})
        logger.info("Using SQLite database engine")
    else:
        engine = create_engine(
            database_url,
            pool_pre_ping=True,  # Verify connections before use
            pool_recycle=3600,
            pool_size=10,
            max_overflow=20,
            echo=False,
        )
        logger.info("Using PostgreSQL database engine with connection pooling")

    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Database connection test successful")
    return engine


def get_engine() -> Engine:
    """
    Return the shared engine, creating it on first use.

    A failed connection attempt leaves the cache empty so the next call
    tries again.
    """
    global _engine
    if _engine is not None:
        return _engine

    try:
        engine = create_database_engine()
    except SQLAlchemyError as e:
        _engine = None
        logger.error(f"Failed to create database engine: {e}")
        raise

    _engine = engine
    SessionLocal.configure(bind=engine)
    return engine


def reset_engine() -> None:
    """Dispose the shared engine so the next call reconnects."""
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = None


def get_db():
    """Dependency for FastAPI to get database session"""
    get_engine()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_database() -> None:
    """Initialize database tables"""
    # Register ORM models on Base.metadata
    import models.database  # noqa: F401

    try:
        Base.metadata.create_all(bind=get_engine())
        logger.info("Database tables initialized successfully")
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize database tables: {e}")
        raise
