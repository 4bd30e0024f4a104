"""Publishing announcements and emailing them to their audience."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from portal.models.announcement import Announcement
from portal.repositories.announcement_repository import AnnouncementRepository
from portal.schemas.announcement import AnnouncementCreate
from portal.services.email_templates import render_announcement
from portal.services.notification_dispatcher import DispatchSummary, NotificationDispatcher
from portal.services.recipient_resolver import RecipientResolver, ResolvedRecipients

logger = logging.getLogger(__name__)


class AnnouncementNotFoundError(LookupError):
    pass


class AnnouncementService:
    def __init__(self, db: Session, dispatcher: NotificationDispatcher | None = None):
        self.db = db
        self.repo = AnnouncementRepository(db)
        self.resolver = RecipientResolver(db)
        self.dispatcher = dispatcher or NotificationDispatcher()

    def publish(self, data: AnnouncementCreate, author_id: str | None = None) -> Announcement:
        announcement = self.repo.create(data, author_id=author_id)
        logger.info(
            "Published announcement %s for %d positions", announcement.id, len(data.position_ids)
        )
        return announcement

    async def send_notifications(
        self,
        announcement_id: UUID,
        title: str | None = None,
        body: str | None = None,
    ) -> tuple[DispatchSummary, ResolvedRecipients]:
        """Email the announcement to every active employee it targets.

        ``title`` and ``body`` override the stored text when given.

        Raises:
            AnnouncementNotFoundError: if the announcement does not exist and
                no text was supplied.
            RecipientResolutionError: if the audience could not be loaded.
        """
        if title is None or body is None:
            announcement = self.repo.get_by_id(announcement_id)
            if announcement is None:
                raise AnnouncementNotFoundError(f"Announcement {announcement_id} not found")
            title = title if title is not None else str(announcement.title)
            body = body if body is not None else str(announcement.body)

        recipients = self.resolver.for_announcement(announcement_id)
        if not recipients.targets:
            return DispatchSummary(), recipients

        summary = await self.dispatcher.dispatch(recipients.targets, render_announcement(title, body))
        return summary, recipients
