from uuid import UUID

from sqlalchemy.orm import Session

from portal.models.employee_request import EmployeeRequest, RequestStatus
from portal.schemas.employee_request import EmployeeRequestCreate


class EmployeeRequestRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, request_id: UUID) -> EmployeeRequest | None:
        return self.db.query(EmployeeRequest).filter(EmployeeRequest.id == request_id).first()

    def get_all(
        self,
        request_type: str | None = None,
        user_id: str | None = None,
        scope_id: str | None = None,
    ) -> list[EmployeeRequest]:
        """Requests newest first, optionally narrowed server-side."""
        query = self.db.query(EmployeeRequest)
        if request_type is not None:
            query = query.filter(EmployeeRequest.request_type == request_type)
        if user_id is not None:
            query = query.filter(EmployeeRequest.user_id == user_id)
        if scope_id is not None:
            query = query.filter(EmployeeRequest.scope_id == scope_id)
        return query.order_by(EmployeeRequest.created_at.desc()).all()

    def create(self, data: EmployeeRequestCreate, user_id: str) -> EmployeeRequest:
        request = EmployeeRequest(
            request_type=data.request_type,
            user_id=user_id,
            scope_id=data.scope_id,
            start_date=data.start_date,
            end_date=data.end_date,
            reason=data.reason,
            status=RequestStatus.PENDING.value,
        )
        self.db.add(request)
        self.db.commit()
        self.db.refresh(request)
        return request

    def update_status(
        self, request: EmployeeRequest, status: str, rejection_reason: str | None = None
    ) -> EmployeeRequest:
        request.status = status  # type: ignore[assignment]
        request.rejection_reason = rejection_reason  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(request)
        return request
