"""Employee request workflow: submission, review and notifications."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from portal.core.filtering import filter_records
from portal.core.sorting import SORT_ASC, sort_records
from portal.models.comment import ThreadType
from portal.models.employee import Employee
from portal.models.employee_request import EmployeeRequest, RequestType
from portal.models.shared import today
from portal.repositories.comment_repository import CommentRepository
from portal.repositories.employee_repository import EmployeeRepository
from portal.repositories.employee_request_repository import EmployeeRequestRepository
from portal.schemas.employee_request import EmployeeRequestCreate
from portal.services.availability_editor import AvailabilityEditor
from portal.services.email_templates import render_request
from portal.services.leave_days import count_leave_days
from portal.services.notification_dispatcher import DispatchSummary, NotificationDispatcher
from portal.services.notification_service import NotificationService
from portal.services.recipient_resolver import RecipientResolver, ResolvedRecipients

logger = logging.getLogger(__name__)

# Free-text search on request list pages
SEARCH_FIELDS = ("employee.full_name", "employee.national_id", "employee.company_name")

# Column names used by list pages mapped to record paths
SORT_FIELDS = {
    "colaborador": "employee.full_name",
    "empresa": "employee.company_name",
    "estado": "request.status",
    "fecha_solicitud": "request.created_at",
    "fecha_inicio": "request.start_date",
    "fecha_fin": "request.end_date",
}
DATE_SORT_FIELDS = ("request.created_at", "request.start_date", "request.end_date")

# Request kinds that carry a comment thread
REQUEST_THREAD_TYPES = {
    RequestType.PERMIT.value: ThreadType.PERMIT.value,
    RequestType.MEDICAL_LEAVE.value: ThreadType.MEDICAL_LEAVE.value,
    RequestType.CERTIFICATION.value: ThreadType.CERTIFICATION.value,
}


class RequestValidationError(ValueError):
    pass


class RequestNotFoundError(LookupError):
    pass


def resolve_sort_field(sort_key: str) -> str:
    """Record path for a list-page sort key: a column alias or a request column.

    Raises:
        RequestValidationError: for any other key.
    """
    if sort_key in SORT_FIELDS:
        return SORT_FIELDS[sort_key]
    if sort_key in EmployeeRequest.__table__.columns.keys():
        return f"request.{sort_key}"
    raise RequestValidationError(f"Unknown sort key: {sort_key}")


@dataclass
class RequestRow:
    request: EmployeeRequest
    employee: Employee | None


class EmployeeRequestService:
    def __init__(self, db: Session, dispatcher: NotificationDispatcher | None = None):
        self.db = db
        self.repo = EmployeeRequestRepository(db)
        self.employee_repo = EmployeeRepository(db)
        self.editor = AvailabilityEditor(db)
        self.notifications = NotificationService(db)
        self.resolver = RecipientResolver(db)
        self.dispatcher = dispatcher or NotificationDispatcher()

    def submit(self, data: EmployeeRequestCreate, user_id: str) -> EmployeeRequest:
        """Create a pending request and notify administrators in-app.

        Vacation ranges must start today or later and must not touch a
        blocked calendar day.
        """
        if data.request_type == RequestType.VACATION.value:
            if data.start_date is None or data.end_date is None or data.scope_id is None:
                raise RequestValidationError(
                    "Vacation requests need scope_id, start_date and end_date"
                )
            if data.start_date < today():
                raise RequestValidationError("Vacation cannot start in the past")
            if not self.editor.is_range_bookable(data.scope_id, data.start_date, data.end_date):
                raise RequestValidationError("The selected range includes unavailable days")

        request = self.repo.create(data, user_id)
        employee = self.employee_repo.get_by_auth_user_id(user_id)
        requester_name = str(employee.full_name) if employee else "Usuario"
        try:
            self.notifications.notify_new_request(
                request_type=data.request_type,
                request_id=request.id,  # type: ignore[arg-type]
                requester_name=requester_name,
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to create notifications for request %s: %s", request.id, exc)
        return request

    def get(self, request_id: UUID) -> EmployeeRequest:
        request = self.repo.get_by_id(request_id)
        if request is None:
            raise RequestNotFoundError(f"Request {request_id} not found")
        return request

    def update_status(
        self, request_id: UUID, status: str, rejection_reason: str | None = None
    ) -> EmployeeRequest:
        request = self.repo.update_status(self.get(request_id), status, rejection_reason)
        try:
            self.notifications.notify_status_change(
                request_type=str(request.request_type),
                request_id=request.id,  # type: ignore[arg-type]
                user_id=str(request.user_id),
                new_status=status,
                rejection_reason=rejection_reason,
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Failed to notify status change of request %s: %s", request.id, exc)
        return request

    def list_rows(
        self,
        request_type: str | None = None,
        user_id: str | None = None,
    ) -> list[RequestRow]:
        requests = self.repo.get_all(request_type=request_type, user_id=user_id)
        employees = {
            e.auth_user_id: e
            for e in self.employee_repo.get_by_auth_user_ids(
                sorted({str(r.user_id) for r in requests})
            )
        }
        return [RequestRow(request=r, employee=employees.get(r.user_id)) for r in requests]

    @staticmethod
    def filter_rows(
        rows: Sequence[RequestRow],
        search: str | None = None,
        status: str | None = None,
        company: str | None = None,
        sort_key: str | None = None,
        direction: str = SORT_ASC,
    ) -> list[RequestRow]:
        result = filter_records(
            rows,
            search=search,
            search_fields=SEARCH_FIELDS,
            filters={"request.status": status, "employee.company_name": company},
        )
        if sort_key:
            result = sort_records(result, resolve_sort_field(sort_key), direction, DATE_SORT_FIELDS)
        return result

    def unseen_comment_counts(self, rows: Sequence[RequestRow], viewer_role: str) -> dict[str, int]:
        """Unseen comment badges keyed by request id, for threaded kinds only."""
        by_thread_type: dict[str, list[str]] = {}
        for row in rows:
            thread_type = REQUEST_THREAD_TYPES.get(str(row.request.request_type))
            if thread_type is not None:
                by_thread_type.setdefault(thread_type, []).append(str(row.request.id))

        repo = CommentRepository(self.db)
        counts: dict[str, int] = {}
        for thread_type, thread_ids in by_thread_type.items():
            counts.update(repo.count_unseen_by_thread(thread_type, thread_ids, viewer_role))
        return counts

    async def send_request_email(
        self, request_id: UUID, user_id: str, request_type: str | None = None
    ) -> tuple[DispatchSummary, ResolvedRecipients]:
        """Email the configured reviewers about a submitted request.

        Raises:
            RequestNotFoundError: unknown request, or of another type.
            LookupError: unknown employee.
            RecipientResolutionError: no usable recipient configured.
        """
        request = self.get(request_id)
        if request_type is not None and request.request_type != request_type:
            raise RequestNotFoundError(f"Request {request_id} is not a {request_type} request")
        employee = self.employee_repo.get_by_auth_user_id(user_id)
        if employee is None:
            raise LookupError(f"Employee {user_id} not found")

        leave_days = None
        if request.start_date is not None and request.end_date is not None:
            leave_days = count_leave_days(request.start_date, request.end_date)  # type: ignore[arg-type]

        recipients = self.resolver.for_requests()
        message = render_request(request, employee, leave_days)
        summary = await self.dispatcher.dispatch(recipients.targets, message)
        return summary, recipients
