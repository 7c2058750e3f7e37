# tests/test_health.py
from typing import Any

from fastapi import status


def test_health(client: Any) -> None:
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_root_describes_service(client: Any) -> None:
    response = client.get("/")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["docs"] == "/docs"


def test_unexpected_errors_are_hidden(app: Any, mocker: Any) -> None:
    from fastapi.testclient import TestClient

    mocker.patch(
        "coursepass.services.course_service.list_courses",
        side_effect=RuntimeError("boom"),
    )
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/api/v1/courses")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"detail": "Internal server error"}
