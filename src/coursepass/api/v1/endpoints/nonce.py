"""Login nonce endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from coursepass.api.v1.dependencies import NonceStoreDep
from coursepass.db.time import to_millis, utcnow
from coursepass.schemas.nonce import NonceRequest, NonceResponse, NonceStatsResponse
from coursepass.services.messages import login_message
from coursepass.services.signature import normalize_address

router = APIRouter(prefix="/nonce", tags=["authentication"])


@router.post("/generate", response_model=NonceResponse)
async def generate_nonce(payload: NonceRequest, nonce_store: NonceStoreDep) -> NonceResponse:
    """Issue a single-use nonce bound to the requesting wallet."""
    address = normalize_address(payload.wallet_address)
    nonce = nonce_store.issue(address)
    return NonceResponse(
        nonce=nonce,
        expires_in=int(nonce_store.ttl.total_seconds()),
        message=login_message(to_millis(utcnow()), nonce),
    )


@router.get("/stats", response_model=NonceStatsResponse)
async def nonce_stats(nonce_store: NonceStoreDep) -> NonceStatsResponse:
    stats = nonce_store.stats()
    return NonceStatsResponse(
        total=stats.total,
        expired_but_not_swept=stats.expired_but_not_swept,
    )
