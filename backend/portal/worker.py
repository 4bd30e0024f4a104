import logging
from typing import Any
from uuid import UUID

from portal.core.database import SessionLocal
from portal.services.announcement_service import AnnouncementNotFoundError, AnnouncementService
from portal.services.recipient_resolver import RecipientResolutionError
from portal.tasks import redis_settings

logger = logging.getLogger(__name__)


async def send_announcement_notifications_task(
    ctx: dict[str, Any], announcement_id: str
) -> dict[str, Any]:
    """Background task: email a published announcement to its audience.

    Args:
        ctx: ARQ worker context.
        announcement_id: UUID string of the announcement.

    Returns:
        Dispatch counters; ``error`` is set when nothing could be sent.
    """
    db = SessionLocal()
    try:
        service = AnnouncementService(db)
        try:
            summary, recipients = await service.send_notifications(UUID(announcement_id))
        except (AnnouncementNotFoundError, RecipientResolutionError) as exc:
            logger.warning("Announcement %s not dispatched: %s", announcement_id, exc)
            return {"successful": 0, "failed": 0, "error": str(exc)}

        logger.info(
            "Announcement %s: %s (%d users found)",
            announcement_id,
            summary.message,
            recipients.total_found,
        )
        return {
            "successful": summary.successful,
            "failed": summary.failed,
            "timed_out": summary.timed_out,
            "error": summary.error,
        }
    finally:
        db.close()


class WorkerSettings:
    functions = [send_announcement_notifications_task]
    redis_settings = redis_settings
