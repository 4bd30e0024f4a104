"""Announcement API endpoints."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from portal.core.auth import Viewer, get_current_viewer, require_admin
from portal.core.database import get_db
from portal.repositories.announcement_repository import AnnouncementRepository
from portal.schemas.announcement import (
    AnnouncementCreate,
    AnnouncementPublishResponse,
    AnnouncementResponse,
)
from portal.services.announcement_service import AnnouncementService
from portal.tasks import enqueue_announcement_notifications

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/",
    response_model=AnnouncementPublishResponse,
    status_code=201,
    summary="Publish an announcement",
    responses={403: {"description": "Administrator role required"}},
)
async def publish_announcement(
    data: AnnouncementCreate,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(require_admin),
) -> AnnouncementPublishResponse:
    """Store the announcement, then queue the email to its audience.

    The announcement stays published when the job cannot be queued; the
    failure is reported in ``notification_error``.
    """
    announcement = AnnouncementService(db).publish(data, author_id=viewer.user_id)
    response = AnnouncementPublishResponse(
        announcement=AnnouncementResponse.model_validate(announcement)
    )
    try:
        job = await enqueue_announcement_notifications(UUID(str(announcement.id)))
        response.notification_job_id = job.job_id
    except Exception as e:
        logger.exception("Failed to enqueue notifications for announcement %s", announcement.id)
        response.notification_error = str(e) or e.__class__.__name__
    return response


@router.get("/", response_model=list[AnnouncementResponse], summary="List announcements")
async def list_announcements(
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
) -> list[AnnouncementResponse]:
    repo = AnnouncementRepository(db)
    return [
        AnnouncementResponse.model_validate(a)
        for a in repo.get_all(skip=skip, limit=limit, order_by=order_by)
    ]


@router.get(
    "/{announcement_id}",
    response_model=AnnouncementResponse,
    summary="Get an announcement",
    responses={404: {"description": "Announcement not found"}},
)
async def get_announcement(
    announcement_id: UUID,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
) -> AnnouncementResponse:
    announcement = AnnouncementRepository(db).get_by_id(announcement_id)
    if announcement is None:
        raise HTTPException(status_code=404, detail="Announcement not found")
    return AnnouncementResponse.model_validate(announcement)
