"""Text of the messages wallets are asked to sign.

The server rebuilds these strings from request fields, so the formats here
must stay byte-for-byte identical to what the web client displays.
"""

from __future__ import annotations

from typing import Final

COURSE_ACCESS_VALIDITY_MS: Final[int] = 2 * 60 * 60 * 1000


def course_access_expiry(timestamp_ms: int) -> int:
    """Return the expiry embedded in a course access challenge."""
    return int(timestamp_ms) + COURSE_ACCESS_VALIDITY_MS


def course_access_message(course_id: int, timestamp_ms: int) -> str:
    """Deterministic challenge for viewing a course, derived from its timestamp."""
    return f"Access course {course_id} valid until {course_access_expiry(timestamp_ms)}"


def login_message(timestamp_ms: int, nonce: str | None = None) -> str:
    """Login text produced by the web client; the server verifies whatever is sent."""
    if nonce:
        return f"Login to Web3 Course Platform with nonce {nonce} at {timestamp_ms}"
    return f"Login to Web3 Course Platform at {timestamp_ms}"


def profile_update_message(
    nickname: str | None,
    bio: str | None,
    timestamp_ms: int,
    nonce: str | None = None,
) -> str:
    """Profile update text; missing fields render as empty strings."""
    nickname = nickname or ""
    bio = bio or ""
    if nonce:
        return f"Update profile with nonce {nonce}: {nickname} - {bio} at {timestamp_ms}"
    return f"Update profile: {nickname} - {bio} at {timestamp_ms}"
