"""Resolution of email recipients for notification dispatches."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.models.employee import EmployeeStatus
from portal.models.system_setting import NOTIFICATION_EMAILS_KEY
from portal.repositories.announcement_repository import AnnouncementRepository
from portal.repositories.employee_repository import EmployeeRepository
from portal.repositories.system_setting_repository import SystemSettingRepository
from portal.services.notification_dispatcher import NotificationTarget, is_valid_email

logger = logging.getLogger(__name__)


class RecipientResolutionError(RuntimeError):
    """Recipients could not be determined; nothing was sent."""


@dataclass
class ResolvedRecipients:
    targets: list[NotificationTarget] = field(default_factory=list)
    total_found: int = 0


class RecipientResolver:
    def __init__(self, db: Session):
        self.db = db
        self.announcement_repo = AnnouncementRepository(db)
        self.employee_repo = EmployeeRepository(db)
        self.setting_repo = SystemSettingRepository(db)

    def for_announcement(self, announcement_id: UUID) -> ResolvedRecipients:
        """Active employees in the positions the announcement targets.

        Only rows with status "activo" and a syntactically valid email are
        returned; ``total_found`` counts the active rows before validation.
        """
        try:
            position_ids = self.announcement_repo.get_position_ids(announcement_id)
            employees = self.employee_repo.get_active_by_positions(position_ids)
        except SQLAlchemyError as exc:
            logger.error("Failed to resolve recipients for announcement %s: %s", announcement_id, exc)
            raise RecipientResolutionError("Error al obtener usuarios") from exc

        targets = [
            NotificationTarget(email=str(e.email).strip(), display_name=str(e.full_name))
            for e in employees
            if e.status == EmployeeStatus.ACTIVE.value and is_valid_email(e.email)  # type: ignore[arg-type]
        ]
        logger.info(
            "Announcement %s: %d valid recipients of %d active users",
            announcement_id,
            len(targets),
            len(employees),
        )
        return ResolvedRecipients(targets=targets, total_found=len(employees))

    def for_requests(self) -> ResolvedRecipients:
        """Addresses configured to receive new-request emails."""
        try:
            raw = self.setting_repo.get_value(NOTIFICATION_EMAILS_KEY)
        except SQLAlchemyError as exc:
            raise RecipientResolutionError(
                "No se pudo obtener el correo de notificaciones configurado"
            ) from exc
        if not raw:
            raise RecipientResolutionError(
                "No se pudo obtener el correo de notificaciones configurado"
            )

        entries = [e.strip() for e in raw.split(",") if e.strip()]
        targets = [NotificationTarget(email=e) for e in entries if is_valid_email(e)]
        if not targets:
            raise RecipientResolutionError("No hay correos de destino válidos configurados")
        return ResolvedRecipients(targets=targets, total_found=len(entries))
