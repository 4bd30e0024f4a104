"""Notification API endpoints: in-app inbox and email dispatch."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from portal.core.auth import Viewer, get_current_viewer
from portal.core.database import get_db
from portal.models.employee_request import RequestType
from portal.repositories.notification_repository import NotificationRepository
from portal.schemas.notification import (
    AnnouncementNotificationRequest,
    DispatchResultResponse,
    DispatchSummaryResponse,
    DispatchTimeoutResponse,
    NotificationCountResponse,
    NotificationResponse,
    RequestNotificationRequest,
)
from portal.services.announcement_service import AnnouncementNotFoundError, AnnouncementService
from portal.services.notification_dispatcher import DispatchSummary
from portal.services.recipient_resolver import RecipientResolutionError
from portal.services.request_service import EmployeeRequestService

logger = logging.getLogger(__name__)

router = APIRouter()

NO_RECIPIENTS_MESSAGE = "No hay usuarios para notificar"


def _dispatch_response(summary: DispatchSummary, total_users_found: int) -> JSONResponse:
    if summary.timed_out:
        body = DispatchTimeoutResponse(
            error="Tiempo de espera agotado",
            details=summary.error,
            results=[
                DispatchResultResponse(
                    email=r.email, status=r.status, attempt=r.attempt, error=r.error
                )
                for r in summary.results
            ],
        )
        return JSONResponse(status_code=408, content=body.model_dump(by_alias=True))
    body_ok = DispatchSummaryResponse.from_summary(summary, total_users_found=total_users_found)
    return JSONResponse(status_code=200, content=body_ok.model_dump(by_alias=True))


@router.get(
    "/",
    response_model=list[NotificationResponse],
    summary="List notifications",
    responses={401: {"description": "Missing viewer identity"}},
)
async def list_notifications(
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
    notification_type: str | None = None,
    is_read: bool | None = None,
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
) -> list[NotificationResponse]:
    """List the viewer's notifications with optional filters."""
    repo = NotificationRepository(db)
    notifications = repo.get_all(
        user_id=viewer.user_id,
        skip=skip,
        limit=limit,
        notification_type=notification_type,
        is_read=is_read,
        order_by=order_by,
    )
    return [NotificationResponse.model_validate(n) for n in notifications]


@router.get(
    "/unread_count",
    response_model=NotificationCountResponse,
    summary="Get unread notification count",
    responses={401: {"description": "Missing viewer identity"}},
)
async def get_unread_count(
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
) -> NotificationCountResponse:
    repo = NotificationRepository(db)
    return NotificationCountResponse(unread_count=repo.count_unread(viewer.user_id))


@router.post(
    "/{notification_id}/read",
    response_model=NotificationResponse,
    summary="Mark a notification as read",
    responses={
        401: {"description": "Missing viewer identity"},
        404: {"description": "Notification not found"},
    },
)
async def mark_as_read(
    notification_id: UUID,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
) -> NotificationResponse:
    repo = NotificationRepository(db)
    notification = repo.get_by_id(notification_id)
    if notification is None or notification.user_id != viewer.user_id:
        raise HTTPException(status_code=404, detail="Notification not found")
    updated = repo.mark_as_read(notification_id)
    return NotificationResponse.model_validate(updated)


@router.post(
    "/read_all",
    response_model=NotificationCountResponse,
    summary="Mark all notifications as read",
    responses={401: {"description": "Missing viewer identity"}},
)
async def mark_all_as_read(
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
) -> NotificationCountResponse:
    """Mark all unread notifications as read; returns how many changed."""
    repo = NotificationRepository(db)
    count = repo.mark_all_as_read(viewer.user_id)
    return NotificationCountResponse(unread_count=count)


@router.post(
    "/announcements",
    response_model=DispatchSummaryResponse,
    summary="Email an announcement to its audience",
    responses={
        400: {"description": "Missing announcement fields"},
        404: {"description": "Announcement not found"},
        408: {"description": "Dispatch deadline exceeded", "model": DispatchTimeoutResponse},
        500: {"description": "Recipients could not be resolved"},
    },
)
async def send_announcement_notifications(
    data: AnnouncementNotificationRequest,
    db: Session = Depends(get_db),
) -> JSONResponse:
    """Send the announcement email to every active employee it targets.

    Delivery failures are reported per recipient in a 200 response.
    """
    if not data.comunicadoId or not data.titulo or not data.contenido:
        raise HTTPException(
            status_code=400, detail="Faltan datos requeridos: comunicadoId, titulo, contenido"
        )
    try:
        announcement_id = UUID(data.comunicadoId)
    except ValueError:
        raise HTTPException(status_code=400, detail="comunicadoId inválido") from None

    service = AnnouncementService(db)
    try:
        summary, recipients = await service.send_notifications(
            announcement_id, title=data.titulo, body=data.contenido
        )
    except AnnouncementNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    except RecipientResolutionError as e:
        raise HTTPException(status_code=500, detail=str(e)) from None

    if recipients.total_found == 0 or not recipients.targets:
        content = DispatchSummaryResponse(
            message=NO_RECIPIENTS_MESSAGE, total_users_found=recipients.total_found
        )
        return JSONResponse(status_code=200, content=content.model_dump(by_alias=True))
    return _dispatch_response(summary, recipients.total_found)


@router.post(
    "/requests/{request_type}",
    response_model=DispatchSummaryResponse,
    summary="Email reviewers about a submitted request",
    responses={
        400: {"description": "Missing request fields"},
        404: {"description": "Request or employee not found"},
        408: {"description": "Dispatch deadline exceeded", "model": DispatchTimeoutResponse},
        500: {"description": "No notification recipients configured"},
    },
)
async def send_request_notifications(
    request_type: RequestType,
    data: RequestNotificationRequest,
    db: Session = Depends(get_db),
) -> JSONResponse:
    if data.solicitudId is None or not data.usuarioId:
        raise HTTPException(
            status_code=400, detail="Faltan datos requeridos: solicitudId, usuarioId"
        )

    service = EmployeeRequestService(db)
    try:
        summary, recipients = await service.send_request_email(
            data.solicitudId, data.usuarioId, request_type=request_type.value
        )
    except RecipientResolutionError as e:
        raise HTTPException(status_code=500, detail=str(e)) from None
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    return _dispatch_response(summary, recipients.total_found)
