"""Tests for the periodic expiry sweeper."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from coursepass.db.session import Base
from coursepass.models import CourseAccessToken, UserSession
from coursepass.services.course_access_cache import CourseAccessCache
from coursepass.services.maintenance import ExpirySweeper
from coursepass.services.session_store import SessionStore
from tests.helpers import FrozenClock


@pytest.fixture()
def session_factory() -> Iterator[sessionmaker[Session]]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    finally:
        engine.dispose()


def _count(factory, model) -> int:
    with factory() as db:
        return db.execute(select(func.count()).select_from(model)).scalar_one()


def _seed(factory, clock: FrozenClock) -> None:
    with factory() as db:
        SessionStore(db, clock=clock).create("0x" + "11" * 20, ttl_hours=1)
        SessionStore(db, clock=clock).create("0x" + "22" * 20, ttl_hours=24)
        CourseAccessCache(db, clock=clock).upsert("0x" + "11" * 20, 1, "0xa", "a")


def test_run_once_sweeps_sessions_and_receipts(session_factory) -> None:
    clock = FrozenClock()
    _seed(session_factory, clock)
    clock.advance(hours=3)

    result = ExpirySweeper(session_factory, clock=clock).run_once()

    assert result.sessions == 1
    assert result.access_tokens == 1
    assert _count(session_factory, UserSession) == 1
    assert _count(session_factory, CourseAccessToken) == 0


def test_run_once_with_nothing_expired(session_factory) -> None:
    clock = FrozenClock()
    _seed(session_factory, clock)

    result = ExpirySweeper(session_factory, clock=clock).run_once()

    assert (result.sessions, result.access_tokens) == (0, 0)


@pytest.mark.asyncio
async def test_background_loop_sweeps_until_stopped(session_factory) -> None:
    clock = FrozenClock()
    _seed(session_factory, clock)
    clock.advance(hours=3)

    sweeper = ExpirySweeper(session_factory, interval_seconds=0.01, clock=clock)
    await sweeper.start()
    assert sweeper.running
    await asyncio.sleep(0.2)
    await sweeper.stop()

    assert not sweeper.running
    assert _count(session_factory, UserSession) == 1
    assert _count(session_factory, CourseAccessToken) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [OSError("disk unavailable"), ValueError("bad row")])
async def test_background_loop_survives_failed_pass(session_factory, mocker, error) -> None:
    sweeper = ExpirySweeper(session_factory, interval_seconds=0.01)
    failing = mocker.patch.object(sweeper, "run_once", side_effect=error)

    await sweeper.start()
    await asyncio.sleep(0.2)

    assert sweeper.running
    assert failing.call_count > 1
    await sweeper.stop()
    assert not sweeper.running
