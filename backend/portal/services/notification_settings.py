"""Administration of the addresses that receive new-request emails."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.models.system_setting import NOTIFICATION_EMAILS_KEY
from portal.repositories.system_setting_repository import SystemSettingRepository
from portal.services.notification_dispatcher import is_valid_email

logger = logging.getLogger(__name__)

EMAIL_SEPARATOR = ", "


class InvalidEmailListError(ValueError):
    pass


class SettingsSaveError(RuntimeError):
    pass


def parse_email_list(raw: str) -> list[str]:
    """Split a comma-separated address list, rejecting it if any entry is invalid.

    Blank entries are skipped. Error messages number entries from 1.
    """
    entries = [e.strip() for e in raw.split(",") if e.strip()]
    errors = [
        f'Correo {position}: "{email}" no es válido'
        for position, email in enumerate(entries, start=1)
        if not is_valid_email(email)
    ]
    if errors:
        raise InvalidEmailListError(
            f"Se encontraron correos con formato inválido: {', '.join(errors)}"
        )
    if not entries:
        raise InvalidEmailListError("No se encontraron correos válidos")
    return entries


class NotificationSettingsService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = SystemSettingRepository(db)

    def get_emails(self) -> list[str]:
        raw = self.repo.get_value(NOTIFICATION_EMAILS_KEY) or ""
        return [e.strip() for e in raw.split(",") if e.strip()]

    def set_emails(self, raw: str) -> list[str]:
        """Validate and store the recipient list.

        Raises:
            InvalidEmailListError: if an entry is malformed or none is given.
            SettingsSaveError: if the value could not be stored.
        """
        emails = parse_email_list(raw)
        try:
            self.repo.set_value(NOTIFICATION_EMAILS_KEY, EMAIL_SEPARATOR.join(emails))
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to store notification emails: %s", exc)
            raise SettingsSaveError("Error al guardar la configuración") from exc
        logger.info("Notification emails updated: %d address(es)", len(emails))
        return emails
