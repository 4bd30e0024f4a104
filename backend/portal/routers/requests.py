"""Employee request API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from portal.core.auth import Viewer, get_current_viewer, require_admin
from portal.core.database import get_db
from portal.core.sorting import SORT_ASC
from portal.models.employee_request import EmployeeRequest, RequestType
from portal.schemas.employee_request import (
    EmployeeRequestCreate,
    EmployeeRequestResponse,
    EmployeeRequestStatusUpdate,
)
from portal.services.leave_days import count_leave_days
from portal.services.request_service import (
    EmployeeRequestService,
    RequestNotFoundError,
    RequestValidationError,
)

router = APIRouter()


def _to_response(
    request: EmployeeRequest, unseen_comments: int | None = None
) -> EmployeeRequestResponse:
    response = EmployeeRequestResponse.model_validate(request)
    if request.start_date is not None and request.end_date is not None:
        response.leave_days = count_leave_days(request.start_date, request.end_date)  # type: ignore[arg-type]
    response.unseen_comments = unseen_comments
    return response


@router.get(
    "/",
    response_model=list[EmployeeRequestResponse],
    summary="List requests",
    responses={
        400: {"description": "Unknown sort key"},
        401: {"description": "Missing viewer identity"},
    },
)
async def list_requests(
    request_type: RequestType | None = None,
    search: str | None = None,
    status: str | None = None,
    company: str | None = None,
    sort_key: str | None = None,
    direction: str = Query(default=SORT_ASC, pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
) -> list[EmployeeRequestResponse]:
    """Administrators see every request; requesters only their own."""
    service = EmployeeRequestService(db)
    rows = service.list_rows(
        request_type=request_type.value if request_type else None,
        user_id=None if viewer.is_admin else viewer.user_id,
    )
    try:
        rows = service.filter_rows(
            rows,
            search=search,
            status=status,
            company=company,
            sort_key=sort_key,
            direction=direction,
        )
    except RequestValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    unseen = service.unseen_comment_counts(rows, viewer.role)
    return [_to_response(row.request, unseen.get(str(row.request.id))) for row in rows]


@router.post(
    "/",
    response_model=EmployeeRequestResponse,
    status_code=201,
    summary="Submit a request",
    responses={
        400: {"description": "Dates unavailable"},
        401: {"description": "Missing viewer identity"},
    },
)
async def create_request(
    data: EmployeeRequestCreate,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
) -> EmployeeRequestResponse:
    service = EmployeeRequestService(db)
    try:
        request = service.submit(data, viewer.user_id)
    except RequestValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    return _to_response(request)


@router.get(
    "/{request_id}",
    response_model=EmployeeRequestResponse,
    summary="Get a request",
    responses={404: {"description": "Request not found"}},
)
async def get_request(
    request_id: UUID,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
) -> EmployeeRequestResponse:
    service = EmployeeRequestService(db)
    try:
        request = service.get(request_id)
    except RequestNotFoundError:
        raise HTTPException(status_code=404, detail="Request not found") from None
    if not viewer.is_admin and request.user_id != viewer.user_id:
        raise HTTPException(status_code=404, detail="Request not found")
    return _to_response(request)


@router.patch(
    "/{request_id}/status",
    response_model=EmployeeRequestResponse,
    summary="Approve or reject a request",
    responses={
        403: {"description": "Administrator role required"},
        404: {"description": "Request not found"},
    },
)
async def update_request_status(
    request_id: UUID,
    data: EmployeeRequestStatusUpdate,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(require_admin),
) -> EmployeeRequestResponse:
    service = EmployeeRequestService(db)
    try:
        request = service.update_status(request_id, data.status, data.rejection_reason)
    except RequestNotFoundError:
        raise HTTPException(status_code=404, detail="Request not found") from None
    return _to_response(request)
