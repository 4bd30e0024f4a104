from datetime import date, datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from portal.models.employee_request import RequestType

RequestTypeValue = Literal["vacaciones", "permisos", "certificacion_laboral", "incapacidades"]


class EmployeeRequestCreate(BaseModel):
    request_type: RequestTypeValue
    scope_id: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    reason: str | None = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def check_dates(self) -> "EmployeeRequestCreate":
        if (self.start_date is None) != (self.end_date is None):
            raise ValueError("start_date and end_date must be given together")
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        if self.request_type == RequestType.VACATION.value:
            if self.start_date is None or not self.scope_id:
                raise ValueError("Vacation requests need scope_id, start_date and end_date")
        return self


class EmployeeRequestStatusUpdate(BaseModel):
    status: Literal["aprobado", "rechazado"]
    rejection_reason: str | None = Field(default=None, max_length=2000)


class EmployeeRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    request_type: str
    user_id: str
    scope_id: str | None = None
    status: str
    start_date: date | None = None
    end_date: date | None = None
    reason: str | None = None
    rejection_reason: str | None = None
    created_at: datetime
    leave_days: int | None = None
    unseen_comments: int | None = None
