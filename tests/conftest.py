# tests/conftest.py
from __future__ import annotations

from collections.abc import Generator, Iterator
from decimal import Decimal

import pytest
from eth_account import Account
from eth_account.signers.local import LocalAccount
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


from coursepass.db.session import Base
from coursepass.db.session import get_db as app_get_session
from coursepass.main import app as fastapi_app
from coursepass.models import Course, Purchase
from coursepass.services.session_store import SessionStore

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture(autouse=True)
def reset_nonce_store(app: FastAPI) -> Iterator[None]:
    """Nonces live in process memory; start every test with an empty store."""
    app.state.nonce_store.clear()
    yield
    app.state.nonce_store.clear()


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def wallet() -> LocalAccount:
    """Return a freshly generated wallet for the primary test user."""
    return Account.create()


@pytest.fixture()
def other_wallet() -> LocalAccount:
    """Return a freshly generated wallet for a second user."""
    return Account.create()


@pytest.fixture()
def instructor_wallet() -> LocalAccount:
    return Account.create()


@pytest.fixture()
def auth_headers(db_session: Session, wallet: LocalAccount) -> dict[str, str]:
    """Return authorization headers for the primary wallet."""
    token = SessionStore(db_session).create(wallet.address)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def instructor_headers(db_session: Session, instructor_wallet: LocalAccount) -> dict[str, str]:
    token = SessionStore(db_session).create(instructor_wallet.address)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def course(db_session: Session, instructor_wallet: LocalAccount) -> Iterator[Course]:
    """Create a course owned by the instructor wallet."""
    course = Course(
        course_id=1,
        title="Solidity Basics",
        description="Smart contracts from scratch",
        price=Decimal("100"),
        instructor_address=instructor_wallet.address.lower(),
        content={
            "lessons": [{"id": 1, "title": "Intro", "videoUrl": "https://cdn.test/1.mp4"}],
            "resources": [{"name": "slides.pdf", "url": "https://cdn.test/slides.pdf"}],
        },
    )
    db_session.add(course)
    db_session.flush()
    db_session.refresh(course)
    yield course


@pytest.fixture()
def purchase(db_session: Session, course: Course, wallet: LocalAccount) -> Iterator[Purchase]:
    """Record a purchase of ``course`` by the primary wallet."""
    purchase = Purchase(
        user_address=wallet.address.lower(),
        course_id=course.course_id,
        tx_hash="0x" + "ab" * 32,
        price_paid=Decimal("100"),
    )
    db_session.add(purchase)
    db_session.flush()
    db_session.refresh(purchase)
    yield purchase
