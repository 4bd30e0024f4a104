"""Tests for announcement publishing."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from portal.main import app
from portal.repositories.announcement_repository import AnnouncementRepository
from portal.repositories.employee_repository import EmployeeRepository
from portal.schemas.announcement import AnnouncementCreate
from portal.services.announcement_service import AnnouncementNotFoundError, AnnouncementService
from portal.services.notification_dispatcher import NotificationDispatcher

ENQUEUE = "portal.routers.announcements.enqueue_announcement_notifications"


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def position(db_session: Session):  # type: ignore[no-untyped-def]
    employees = EmployeeRepository(db_session)
    analyst = employees.create_position("Analista")
    employees.create(
        auth_user_id="u1", full_name="Ana", email="ana@empresa.co", position_id=analyst.id
    )
    return analyst


class TestAnnouncementRepository:
    def test_create_links_positions(self, db_session: Session, position) -> None:
        repo = AnnouncementRepository(db_session)
        created = repo.create(
            AnnouncementCreate(title="Hola", body="Mundo", position_ids=[position.id]),
            author_id="admin-1",
        )

        assert created.author_id == "admin-1"
        assert repo.get_position_ids(created.id) == [position.id]


class TestAnnouncementService:
    @pytest.mark.asyncio
    async def test_send_notifications_uses_stored_text(self, db_session: Session, position) -> None:
        service = AnnouncementService(db_session)
        created = service.publish(
            AnnouncementCreate(title="Pausa", body="Hoy 3pm", position_ids=[position.id])
        )

        sent = []

        async def fake_send(to, subject, html_body, text_body=None):  # type: ignore[no-untyped-def]
            sent.append((to, subject))
            return True

        service.dispatcher = NotificationDispatcher(MagicMock(send_email=fake_send))
        summary, recipients = await service.send_notifications(created.id)

        assert sent == [("ana@empresa.co", "Nuevo Comunicado: Pausa")]
        assert summary.successful == 1
        assert recipients.total_found == 1

    @pytest.mark.asyncio
    async def test_unknown_announcement(self, db_session: Session) -> None:
        from uuid import uuid4

        with pytest.raises(AnnouncementNotFoundError):
            await AnnouncementService(db_session).send_notifications(uuid4())


class TestAnnouncementsAPI:
    def test_publish_requires_admin(self, client: TestClient, requester_headers: dict) -> None:
        response = client.post(
            "/v1/announcements/", json={"title": "x", "body": "y"}, headers=requester_headers
        )
        assert response.status_code == 403

    def test_publish_enqueues_notifications(
        self, client: TestClient, admin_headers: dict, position
    ) -> None:
        mock_job = MagicMock()
        mock_job.job_id = "job-42"
        with patch(ENQUEUE, new_callable=AsyncMock, return_value=mock_job) as mock_enqueue:
            response = client.post(
                "/v1/announcements/",
                json={"title": "Pausa", "body": "Hoy", "position_ids": [str(position.id)]},
                headers=admin_headers,
            )

        assert response.status_code == 201
        data = response.json()
        assert data["notification_job_id"] == "job-42"
        assert data["notification_error"] is None
        assert data["announcement"]["author_id"] == "admin-1"
        mock_enqueue.assert_awaited_once()
        assert str(mock_enqueue.await_args[0][0]) == data["announcement"]["id"]

    def test_enqueue_failure_does_not_fail_publish(
        self, client: TestClient, admin_headers: dict
    ) -> None:
        with patch(ENQUEUE, new_callable=AsyncMock, side_effect=ConnectionError("redis down")):
            response = client.post(
                "/v1/announcements/", json={"title": "Pausa", "body": "Hoy"}, headers=admin_headers
            )

        assert response.status_code == 201
        data = response.json()
        assert data["notification_job_id"] is None
        assert data["notification_error"] == "redis down"

        listed = client.get("/v1/announcements/", headers=admin_headers).json()
        assert [a["title"] for a in listed] == ["Pausa"]

    def test_get_announcement(self, client: TestClient, admin_headers: dict, db_session: Session) -> None:
        created = AnnouncementRepository(db_session).create(AnnouncementCreate(title="t", body="b"))
        response = client.get(f"/v1/announcements/{created.id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["title"] == "t"

    def test_get_unknown_announcement(self, client: TestClient, admin_headers: dict) -> None:
        response = client.get(
            "/v1/announcements/00000000-0000-0000-0000-000000000000", headers=admin_headers
        )
        assert response.status_code == 404
