"""Vacation availability calendar API endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from portal.core.auth import Viewer, get_current_viewer, require_admin
from portal.core.database import get_db
from portal.schemas.availability import (
    AvailabilityIntervalCreate,
    AvailabilityIntervalResponse,
    BlockedDaysResponse,
    DateRangeRequest,
)
from portal.services.availability_editor import (
    AvailabilityEditError,
    AvailabilityEditor,
    InvalidDateRangeError,
)

router = APIRouter()

EDIT_FAILED_DETAIL = "Calendar update failed; reload the calendar and try again"


@router.get(
    "/",
    response_model=list[AvailabilityIntervalResponse],
    summary="List availability intervals",
)
async def list_intervals(
    scope_id: str = Query(..., min_length=1),
    blocked_only: bool = False,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
) -> list[AvailabilityIntervalResponse]:
    editor = AvailabilityEditor(db)
    intervals = editor.list_blocked(scope_id) if blocked_only else editor.list_intervals(scope_id)
    return [AvailabilityIntervalResponse.model_validate(i) for i in intervals]


@router.post(
    "/",
    response_model=AvailabilityIntervalResponse,
    status_code=201,
    summary="Insert a raw availability interval",
    responses={403: {"description": "Administrator role required"}},
)
async def create_interval(
    data: AvailabilityIntervalCreate,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(require_admin),
) -> AvailabilityIntervalResponse:
    editor = AvailabilityEditor(db)
    try:
        interval = editor.add_interval(data.scope_id, data.start_date, data.end_date, data.available)
    except AvailabilityEditError:
        raise HTTPException(status_code=500, detail=EDIT_FAILED_DETAIL) from None
    return AvailabilityIntervalResponse.model_validate(interval)


@router.post(
    "/disable",
    response_model=AvailabilityIntervalResponse,
    status_code=201,
    summary="Block a date range",
    responses={
        400: {"description": "Invalid date range"},
        403: {"description": "Administrator role required"},
        500: {"description": "Calendar update failed"},
    },
)
async def disable_range(
    data: DateRangeRequest,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(require_admin),
) -> AvailabilityIntervalResponse:
    editor = AvailabilityEditor(db)
    try:
        interval = editor.disable(data.scope_id, data.start_date, data.end_date)
    except InvalidDateRangeError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    except AvailabilityEditError:
        raise HTTPException(status_code=500, detail=EDIT_FAILED_DETAIL) from None
    return AvailabilityIntervalResponse.model_validate(interval)


@router.post(
    "/enable",
    response_model=list[AvailabilityIntervalResponse],
    summary="Re-open a date range",
    responses={
        400: {"description": "Invalid date range"},
        403: {"description": "Administrator role required"},
        500: {"description": "Calendar update failed"},
    },
)
async def enable_range(
    data: DateRangeRequest,
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(require_admin),
) -> list[AvailabilityIntervalResponse]:
    """Return the blocked intervals left over around the re-opened range."""
    editor = AvailabilityEditor(db)
    try:
        created = editor.enable(data.scope_id, data.start_date, data.end_date)
    except InvalidDateRangeError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    except AvailabilityEditError:
        raise HTTPException(status_code=500, detail=EDIT_FAILED_DETAIL) from None
    return [AvailabilityIntervalResponse.model_validate(i) for i in created]


@router.get(
    "/blocked_days",
    response_model=BlockedDaysResponse,
    summary="Blocked days within a window",
    responses={400: {"description": "Invalid date range"}},
)
async def get_blocked_days(
    scope_id: str = Query(..., min_length=1),
    start_date: date = Query(...),
    end_date: date = Query(...),
    db: Session = Depends(get_db),
    viewer: Viewer = Depends(get_current_viewer),
) -> BlockedDaysResponse:
    editor = AvailabilityEditor(db)
    try:
        days = editor.blocked_days(scope_id, start_date, end_date)
    except InvalidDateRangeError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    return BlockedDaysResponse(
        scope_id=scope_id, start_date=start_date, end_date=end_date, days=days
    )
