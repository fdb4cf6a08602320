import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

import models.database  # noqa: E402,F401
from app import app as gateway_app  # noqa: E402
from database import Base, get_db  # noqa: E402
from models.database.user import User  # noqa: E402
from services.auth import create_access_token, hash_password  # noqa: E402
from services.grammar_check.app import app as grammar_app  # noqa: E402
from services.grammar_check.app import get_grammar_service  # noqa: E402
from services.grammar_check.client import ModelClient  # noqa: E402
from services.grammar_check.drivers.base import GrammarModelDriver  # noqa: E402
from services.grammar_check.service import GrammarCheckService  # noqa: E402
from services.history.app import app as history_app  # noqa: E402

SERVICE_APPS = [gateway_app, grammar_app, history_app]

TEST_EMAIL = "reader@grammar.dev"
TEST_PASSWORD = "testpass123"


class StubDriver(GrammarModelDriver):
    """Model driver that replays a canned reply and records each call."""

    provider = "stub"

    def __init__(self, reply: str = "", error: Exception | None = None) -> None:
        super().__init__("stub-model")
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.reply

    def reply_with(self, payload: dict[str, Any], prefix: str = "", suffix: str = "") -> None:
        self.reply = f"{prefix}{json.dumps(payload)}{suffix}"


@pytest.fixture
def session_factory(tmp_path: Path) -> Generator[Callable[[], Session], None, None]:
    """SQLite session factory backed by a per-test database file."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    try:
        yield factory
    finally:
        engine.dispose()


@pytest.fixture
def db_session(session_factory: Callable[[], Session]) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def make_user(db: Session, email: str = TEST_EMAIL, password: str = TEST_PASSWORD) -> User:
    user = User(email=email, name="Test Reader", hashed_password=hash_password(password))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token({'sub': user.email})}"}


@pytest.fixture
def test_user(db_session: Session) -> User:
    return make_user(db_session)


@pytest.fixture
def auth_headers(test_user: User) -> dict[str, str]:
    return bearer(test_user)


@pytest.fixture
def stub_driver() -> StubDriver:
    return StubDriver()


@pytest.fixture
def grammar_service(stub_driver: StubDriver) -> GrammarCheckService:
    return GrammarCheckService(
        logging.getLogger("test-grammar-check"), client=ModelClient(primary=stub_driver)
    )


@pytest.fixture(autouse=True)
def test_environment(
    session_factory: Callable[[], Session], grammar_service: GrammarCheckService
) -> Generator[None, None, None]:
    """Point every app at the test database and the stubbed model."""

    def _get_test_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    for service_app in SERVICE_APPS:
        service_app.dependency_overrides[get_db] = _get_test_db
        service_app.dependency_overrides[get_grammar_service] = lambda: grammar_service

    try:
        yield
    finally:
        for service_app in SERVICE_APPS:
            service_app.dependency_overrides.pop(get_db, None)
            service_app.dependency_overrides.pop(get_grammar_service, None)
