"""Periodic cleanup of expired sessions and course access receipts."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coursepass.db.session import SessionLocal
from coursepass.db.time import utcnow
from coursepass.services.course_access_cache import CourseAccessCache
from coursepass.services.session_store import SessionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SweepResult:
    sessions: int
    access_tokens: int


class ExpirySweeper:
    """Deletes expired rows on a fixed interval.

    Each pass opens its own database session so it never shares state with a
    request. A failing pass is logged and the loop waits for the next tick.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        *,
        interval_seconds: float = 3600.0,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._session_factory = session_factory
        self._interval = max(0.01, float(interval_seconds))
        self._clock = clock
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    def run_once(self) -> SweepResult:
        """Run a single cleanup pass synchronously."""
        with self._session_factory() as db:
            sessions = SessionStore(db, clock=self._clock).sweep_expired()
            tokens = CourseAccessCache(db, clock=self._clock).sweep_expired()
        return SweepResult(sessions=sessions, access_tokens=tokens)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the cleanup loop."""
        if not self.running:
            self._stopping = asyncio.Event()
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the cleanup loop."""
        if self._task is None:
            return
        self._stopping.set()
        await self._task
        self._task = None

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self._interval)
            except TimeoutError:
                try:
                    await asyncio.to_thread(self.run_once)
                except SQLAlchemyError as e:
                    logger.error("ExpirySweeper database error: %s", e, exc_info=True)
                except (OSError, ConnectionError, TimeoutError) as e:
                    logger.warning("ExpirySweeper encountered I/O error: %s", e)
                except (ValueError, TypeError, KeyError, AttributeError) as e:
                    logger.error("ExpirySweeper encountered data error: %s", e, exc_info=True)
