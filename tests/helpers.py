"""Signing and clock helpers shared by the test modules."""

from __future__ import annotations

from datetime import datetime, timedelta

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount

from coursepass.db.time import to_millis, utcnow


class FrozenClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or utcnow()

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)

    @property
    def millis(self) -> int:
        return to_millis(self.now)


def sign_message(account: LocalAccount, text: str) -> str:
    """Sign ``text`` as a wallet would and return 0x-prefixed hex."""
    signed = Account.sign_message(encode_defunct(text=text), private_key=account.key)
    return "0x" + bytes(signed.signature).hex()


def now_millis() -> int:
    return to_millis(utcnow())
