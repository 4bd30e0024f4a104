"""System settings API endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from portal.core.auth import Viewer, require_admin
from portal.core.database import get_db
from portal.schemas.system_setting import NotificationEmailsResponse, NotificationEmailsUpdate
from portal.services.notification_settings import (
    EMAIL_SEPARATOR,
    InvalidEmailListError,
    NotificationSettingsService,
    SettingsSaveError,
)

router = APIRouter()


@router.get(
    "/notification_emails",
    response_model=NotificationEmailsResponse,
    summary="Get new-request email recipients",
    responses={403: {"description": "Administrator role required"}},
)
async def get_notification_emails(
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(require_admin),
) -> NotificationEmailsResponse:
    emails = NotificationSettingsService(db).get_emails()
    return NotificationEmailsResponse(emails=EMAIL_SEPARATOR.join(emails), count=len(emails))


@router.put(
    "/notification_emails",
    response_model=NotificationEmailsResponse,
    summary="Replace new-request email recipients",
    responses={
        400: {"description": "Invalid or empty address list"},
        403: {"description": "Administrator role required"},
        500: {"description": "Setting could not be stored"},
    },
)
async def update_notification_emails(
    data: NotificationEmailsUpdate,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(require_admin),
) -> NotificationEmailsResponse:
    """Store a comma-separated list; every entry must be a valid address."""
    try:
        emails = NotificationSettingsService(db).set_emails(data.emails)
    except InvalidEmailListError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    except SettingsSaveError as e:
        raise HTTPException(status_code=500, detail=str(e)) from None
    return NotificationEmailsResponse(emails=EMAIL_SEPARATOR.join(emails), count=len(emails))
