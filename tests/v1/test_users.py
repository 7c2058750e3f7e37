"""Tests for user profile endpoints."""

from __future__ import annotations

from fastapi import status

from coursepass.services.messages import profile_update_message
from tests.helpers import now_millis, sign_message


def _profile_payload(wallet, nickname: str, bio: str, nonce: str | None = None, signer=None) -> dict:
    ts = now_millis()
    message = profile_update_message(nickname, bio, ts, nonce)
    payload = {
        "userAddress": wallet.address,
        "nickname": nickname,
        "bio": bio,
        "signature": sign_message(signer or wallet, message),
        "timestamp": ts,
    }
    if nonce is not None:
        payload["nonce"] = nonce
    return payload


def test_get_user_creates_profile(client, wallet) -> None:
    response = client.get(f"/api/v1/users/{wallet.address}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["walletAddress"] == wallet.address.lower()
    assert data["nickname"] is None

    again = client.get(f"/api/v1/users/{wallet.address.lower()}")
    assert again.json()["id"] == data["id"]


def test_get_user_bad_address(client) -> None:
    assert client.get("/api/v1/users/nope").status_code == status.HTTP_400_BAD_REQUEST


def test_update_profile(client, wallet) -> None:
    client.get(f"/api/v1/users/{wallet.address}")
    response = client.post("/api/v1/users/profile", json=_profile_payload(wallet, "vitalik", "hi"))
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["nickname"] == "vitalik"


def test_update_profile_with_nonce(client, wallet) -> None:
    client.get(f"/api/v1/users/{wallet.address}")
    nonce = client.post("/api/v1/nonce/generate", json={"walletAddress": wallet.address}).json()["nonce"]
    payload = _profile_payload(wallet, "vitalik", "hi", nonce=nonce)

    assert client.post("/api/v1/users/profile", json=payload).status_code == status.HTTP_200_OK
    assert client.post("/api/v1/users/profile", json=payload).status_code == status.HTTP_401_UNAUTHORIZED


def test_update_profile_tampered_fields(client, wallet) -> None:
    client.get(f"/api/v1/users/{wallet.address}")
    payload = _profile_payload(wallet, "vitalik", "hi")
    payload["bio"] = "edited after signing"
    response = client.post("/api/v1/users/profile", json=payload)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_update_profile_unknown_user(client, wallet) -> None:
    response = client.post("/api/v1/users/profile", json=_profile_payload(wallet, "a", "b"))
    assert response.status_code == status.HTTP_404_NOT_FOUND
