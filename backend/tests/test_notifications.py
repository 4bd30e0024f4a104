"""Tests for in-app notifications: repository, service and API."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from portal.main import app
from portal.models.employee import EmployeeRole, EmployeeStatus
from portal.models.employee_request import RequestStatus, RequestType
from portal.repositories.employee_repository import EmployeeRepository
from portal.repositories.notification_repository import NotificationRepository
from portal.services.notification_service import NotificationService


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def repo(db_session):
    """Create a NotificationRepository instance."""
    return NotificationRepository(db_session)


@pytest.fixture
def service(db_session):
    """Create a NotificationService instance."""
    return NotificationService(db_session)


@pytest.fixture
def seed_notifications(repo):
    """Seed notifications for two users."""
    n1 = repo.create(
        user_id="user-1",
        notification_type=RequestType.PERMIT.value,
        title="Solicitud de permiso aprobada",
        message="Tu solicitud de permiso ha sido aprobada",
    )
    n2 = repo.create(
        user_id="user-1",
        notification_type=RequestType.VACATION.value,
        title="Solicitud de vacaciones rechazada",
        message="Tu solicitud de vacaciones ha sido rechazada",
    )
    n3 = repo.create(
        user_id="user-2",
        notification_type=RequestType.PERMIT.value,
        title="Otro usuario",
        message="No visible para user-1",
    )
    return n1, n2, n3


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class TestNotificationRepository:
    def test_create_defaults_unread(self, repo) -> None:
        n = repo.create(user_id="u", notification_type="permisos", title="t", message="m")
        assert n.is_read is False
        assert n.request_id is None

    def test_get_all_scoped_to_user(self, repo, seed_notifications) -> None:
        assert len(repo.get_all("user-1")) == 2
        assert len(repo.get_all("user-2")) == 1

    def test_get_all_filters(self, repo, seed_notifications) -> None:
        result = repo.get_all("user-1", notification_type=RequestType.PERMIT.value)
        assert [n.title for n in result] == ["Solicitud de permiso aprobada"]

    def test_mark_as_read_and_count(self, repo, seed_notifications) -> None:
        n1, _, _ = seed_notifications
        assert repo.count_unread("user-1") == 2
        repo.mark_as_read(n1.id)
        assert repo.count_unread("user-1") == 1
        assert len(repo.get_all("user-1", is_read=True)) == 1

    def test_mark_as_read_unknown(self, repo) -> None:
        assert repo.mark_as_read(uuid4()) is None

    def test_mark_all_as_read(self, repo, seed_notifications) -> None:
        assert repo.mark_all_as_read("user-1") == 2
        assert repo.count_unread("user-1") == 0
        assert repo.count_unread("user-2") == 1


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class TestNotificationService:
    def _seed_staff(self, db_session) -> None:  # type: ignore[no-untyped-def]
        employees = EmployeeRepository(db_session)
        employees.create(auth_user_id="admin-1", full_name="Ana", role=EmployeeRole.ADMINISTRATOR.value)
        employees.create(auth_user_id="mod-1", full_name="Mario", role=EmployeeRole.MODERATOR.value)
        employees.create(
            auth_user_id="admin-2",
            full_name="Inés",
            role=EmployeeRole.ADMINISTRATOR.value,
            status=EmployeeStatus.INACTIVE.value,
        )
        employees.create(auth_user_id="user-1", full_name="Luis")

    def test_new_request_notifies_active_staff(self, service, repo, db_session) -> None:
        self._seed_staff(db_session)
        request_id = uuid4()

        created = service.notify_new_request(
            request_type=RequestType.CERTIFICATION.value,
            request_id=request_id,
            requester_name="Luis",
        )

        assert sorted(n.user_id for n in created) == ["admin-1", "mod-1"]
        assert created[0].title == "Nueva solicitud de certificación laboral"
        assert "Luis" in created[0].message
        assert created[0].request_id == request_id
        assert repo.get_all("user-1") == []

    def test_new_request_without_staff(self, service) -> None:
        assert (
            service.notify_new_request(
                request_type=RequestType.PERMIT.value, request_id=uuid4(), requester_name="x"
            )
            == []
        )

    def test_status_change_approved(self, service) -> None:
        n = service.notify_status_change(
            request_type=RequestType.PERMIT.value,
            request_id=uuid4(),
            user_id="user-1",
            new_status=RequestStatus.APPROVED.value,
        )
        assert n.user_id == "user-1"
        assert n.title == "Solicitud de permiso aprobada"
        assert n.message == "Tu solicitud de permiso ha sido aprobada"

    def test_status_change_rejected_with_reason(self, service) -> None:
        n = service.notify_status_change(
            request_type=RequestType.MEDICAL_LEAVE.value,
            request_id=uuid4(),
            user_id="user-1",
            new_status=RequestStatus.REJECTED.value,
            rejection_reason="Falta soporte médico",
        )
        assert n.message == "Tu solicitud de incapacidad ha sido rechazada. Motivo: Falta soporte médico"


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------


class TestNotificationsAPI:
    def test_list_requires_viewer(self, client: TestClient) -> None:
        assert client.get("/v1/notifications/").status_code == 401

    def test_list_own_notifications(
        self, client: TestClient, requester_headers: dict, seed_notifications
    ) -> None:
        response = client.get("/v1/notifications/", headers=requester_headers)
        assert response.status_code == 200
        assert {n["user_id"] for n in response.json()} == {"user-1"}
        assert len(response.json()) == 2

    def test_unread_count(
        self, client: TestClient, requester_headers: dict, seed_notifications
    ) -> None:
        response = client.get("/v1/notifications/unread_count", headers=requester_headers)
        assert response.json() == {"unread_count": 2}

    def test_mark_read(self, client: TestClient, requester_headers: dict, seed_notifications) -> None:
        n1, _, _ = seed_notifications
        response = client.post(f"/v1/notifications/{n1.id}/read", headers=requester_headers)
        assert response.status_code == 200
        assert response.json()["is_read"] is True

    def test_mark_read_of_other_user_is_404(
        self, client: TestClient, requester_headers: dict, seed_notifications
    ) -> None:
        _, _, n3 = seed_notifications
        response = client.post(f"/v1/notifications/{n3.id}/read", headers=requester_headers)
        assert response.status_code == 404

    def test_read_all(self, client: TestClient, requester_headers: dict, seed_notifications) -> None:
        response = client.post("/v1/notifications/read_all", headers=requester_headers)
        assert response.json() == {"unread_count": 2}
        response = client.get("/v1/notifications/unread_count", headers=requester_headers)
        assert response.json() == {"unread_count": 0}
