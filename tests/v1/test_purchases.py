"""Tests for purchase endpoints."""

from __future__ import annotations

from fastapi import status

TX_HASH = "0x" + "77" * 32


def test_record_purchase(client, course, wallet, auth_headers) -> None:
    response = client.post(
        "/api/v1/purchases",
        json={"courseId": course.course_id, "txHash": TX_HASH, "pricePaid": "100"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["userAddress"] == wallet.address.lower()
    assert data["txHash"] == TX_HASH


def test_record_purchase_duplicate_tx(client, course, auth_headers) -> None:
    payload = {"courseId": course.course_id, "txHash": TX_HASH}
    assert client.post("/api/v1/purchases", json=payload, headers=auth_headers).status_code == 201
    response = client.post("/api/v1/purchases", json=payload, headers=auth_headers)
    assert response.status_code == status.HTTP_409_CONFLICT


def test_record_purchase_unknown_course(client, auth_headers) -> None:
    response = client.post(
        "/api/v1/purchases", json={"courseId": 404, "txHash": TX_HASH}, headers=auth_headers
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_list_user_purchases(client, course, purchase, wallet) -> None:
    response = client.get(f"/api/v1/purchases/user/{wallet.address}")
    assert response.status_code == status.HTTP_200_OK
    rows = response.json()
    assert len(rows) == 1
    assert rows[0]["courseId"] == course.course_id
    assert rows[0]["title"] == course.title


def test_list_user_purchases_bad_address(client) -> None:
    response = client.get("/api/v1/purchases/user/0x123")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
