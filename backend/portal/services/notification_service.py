"""Service for creating in-app notifications about employee requests."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from portal.models.employee_request import RequestStatus
from portal.models.notification import Notification
from portal.repositories.employee_repository import EmployeeRepository
from portal.repositories.notification_repository import NotificationRepository
from portal.services.email_templates import REQUEST_TYPE_LABELS

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for creating in-app notifications from request events."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = NotificationRepository(db)
        self.employee_repo = EmployeeRepository(db)

    def notify_new_request(
        self,
        *,
        request_type: str,
        request_id: UUID,
        requester_name: str,
    ) -> list[Notification]:
        """Notify every active administrator and moderator of a new request."""
        admins = self.employee_repo.get_active_administrators()
        if not admins:
            logger.warning("No active administrators to notify about request %s", request_id)
            return []

        label = REQUEST_TYPE_LABELS.get(request_type, request_type)
        notifications = self.repo.create_many(
            user_ids=[str(a.auth_user_id) for a in admins],
            notification_type=request_type,
            title=f"Nueva solicitud de {label}",
            message=f"Tienes una nueva solicitud de {label} de {requester_name}",
            request_id=request_id,
        )
        logger.info("Created %d notifications for request %s", len(notifications), request_id)
        return notifications

    def notify_status_change(
        self,
        *,
        request_type: str,
        request_id: UUID,
        user_id: str,
        new_status: str,
        rejection_reason: str | None = None,
    ) -> Notification:
        """Tell the requester their request was approved or rejected."""
        label = REQUEST_TYPE_LABELS.get(request_type, request_type)
        status_text = "aprobada" if new_status == RequestStatus.APPROVED.value else "rechazada"
        message = f"Tu solicitud de {label} ha sido {status_text}"
        if new_status == RequestStatus.REJECTED.value and rejection_reason:
            message += f". Motivo: {rejection_reason}"
        return self.repo.create(
            user_id=user_id,
            notification_type=request_type,
            title=f"Solicitud de {label} {status_text}",
            message=message,
            request_id=request_id,
        )
