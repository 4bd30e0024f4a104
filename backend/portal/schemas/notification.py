"""Pydantic schemas for in-app notifications and email dispatch."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from portal.services.notification_dispatcher import DispatchSummary


class NotificationResponse(BaseModel):
    id: UUID
    user_id: str
    notification_type: str
    title: str
    message: str
    request_id: UUID | None
    is_read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class NotificationCountResponse(BaseModel):
    unread_count: int


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnnouncementNotificationRequest(BaseModel):
    comunicadoId: str | None = None
    titulo: str | None = None
    contenido: str | None = None


class RequestNotificationRequest(BaseModel):
    solicitudId: UUID | None = None
    usuarioId: str | None = None


class DispatchResultResponse(_CamelModel):
    email: str
    status: str
    attempt: int
    error: str | None = None


class DispatchSummaryResponse(_CamelModel):
    message: str
    total_users_found: int = 0
    valid_emails: int = 0
    successful: int = 0
    failed: int = 0
    success_rate: float = 0.0
    avg_response_time: float = 0.0
    total_time: float = 0.0
    total_retries: int = 0
    results: list[DispatchResultResponse] = []

    @classmethod
    def from_summary(
        cls, summary: DispatchSummary, total_users_found: int | None = None
    ) -> "DispatchSummaryResponse":
        return cls(
            message=summary.message,
            total_users_found=(
                summary.attempted + summary.dropped
                if total_users_found is None
                else total_users_found
            ),
            valid_emails=summary.attempted,
            successful=summary.successful,
            failed=summary.failed,
            success_rate=round(summary.success_rate, 4),
            avg_response_time=round(summary.avg_response_time),
            total_time=round(summary.total_time),
            total_retries=summary.total_retries,
            results=[
                DispatchResultResponse(
                    email=r.email, status=r.status, attempt=r.attempt, error=r.error
                )
                for r in summary.results
            ],
        )


class DispatchTimeoutResponse(_CamelModel):
    error: str
    details: str | None = None
    results: list[DispatchResultResponse] = []
