"""Single-use login nonces held in process memory."""

from __future__ import annotations

import asyncio
import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from threading import Lock
from typing import Final

from coursepass.db.time import utcnow

logger = logging.getLogger(__name__)

DEFAULT_NONCE_TTL: Final[timedelta] = timedelta(minutes=5)
DEFAULT_SWEEP_INTERVAL_SECONDS: Final[float] = 300.0


@dataclass(frozen=True)
class NonceRecord:
    """A nonce bound to the wallet that requested it."""

    value: str
    wallet_address: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True)
class NonceStats:
    total: int
    expired_but_not_swept: int


class NonceStore:
    """Issues nonces and consumes each of them at most once.

    The store owns its map exclusively. Lookups and deletes happen under one
    lock so two callers racing on the same value see exactly one success.
    Expired records are removed lazily on lookup and by a background sweep
    that the application starts and stops explicitly.
    """

    def __init__(
        self,
        *,
        ttl: timedelta = DEFAULT_NONCE_TTL,
        sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._ttl = ttl
        self._sweep_interval = max(0.01, float(sweep_interval_seconds))
        self._clock = clock
        self._records: dict[str, NonceRecord] = {}
        self._lock = Lock()
        self._task: asyncio.Task[None] | None = None
        self._stopping = asyncio.Event()

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, wallet_address: str) -> str:
        """Create a fresh nonce for ``wallet_address`` and return its value."""
        issued_at = self._clock()
        with self._lock:
            value = secrets.token_hex(16)
            while value in self._records:
                value = secrets.token_hex(16)
            self._records[value] = NonceRecord(
                value=value,
                wallet_address=wallet_address.lower(),
                issued_at=issued_at,
                expires_at=issued_at + self._ttl,
            )
        logger.debug("Issued nonce for %s", wallet_address.lower())
        return value

    def consume(self, value: str, wallet_address: str) -> bool:
        """Validate ``value`` for ``wallet_address`` and remove it on success."""
        now = self._clock()
        with self._lock:
            record = self._records.get(value)
            if record is None:
                logger.info("Nonce rejected: not found")
                return False
            if now > record.expires_at:
                del self._records[value]
                logger.info("Nonce rejected: expired for %s", record.wallet_address)
                return False
            if record.wallet_address != wallet_address.lower():
                logger.info("Nonce rejected: wallet mismatch for %s", wallet_address.lower())
                return False
            del self._records[value]
        logger.debug("Nonce consumed for %s", record.wallet_address)
        return True

    def sweep_expired(self) -> int:
        """Drop every record whose expiry has passed; return how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [key for key, rec in self._records.items() if rec.expires_at <= now]
            for key in expired:
                del self._records[key]
        if expired:
            logger.info("Swept %d expired nonces", len(expired))
        return len(expired)

    def stats(self) -> NonceStats:
        now = self._clock()
        with self._lock:
            total = len(self._records)
            expired = sum(1 for rec in self._records.values() if rec.expires_at <= now)
        return NonceStats(total=total, expired_but_not_swept=expired)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    # --- Background sweep lifecycle ----------------------------------------------
    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the periodic sweep on the running event loop."""
        if not self.running:
            self._stopping = asyncio.Event()
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the periodic sweep and wait for it to finish."""
        if self._task is None:
            return
        self._stopping.set()
        await self._task
        self._task = None

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self._sweep_interval)
            except TimeoutError:
                self.sweep_expired()
