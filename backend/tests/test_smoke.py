"""Minimal smoke tests.

Proves the app boots and the main endpoints respond.
"""

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from sqlalchemy.orm import Session
from starlette.testclient import TestClient

from portal.core.database import get_db
from portal.main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_app_starts():
    """The FastAPI app object can be imported and is a FastAPI instance."""
    assert isinstance(app, FastAPI)


def test_health_endpoint(client: TestClient):
    """GET / returns 200 with app info."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "app" in data
    assert "version" in data


def test_openapi_lists_routes(client: TestClient):
    paths = client.get("/openapi.json").json()["paths"]
    assert "/v1/threads/{thread_type}/{thread_id}/comments" in paths
    assert "/v1/notifications/announcements" in paths
    assert "/v1/vacations/availability/enable" in paths
    assert "/v1/settings/notification_emails" in paths


def test_options_preflight(client: TestClient):
    response = client.options("/v1/requests/", headers={"origin": "http://localhost:5173"})
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


def test_get_db_closes_session():
    gen = get_db()
    db = next(gen)
    assert isinstance(db, Session)
    with patch.object(db, "close") as close:
        gen.close()
    close.assert_called_once()
