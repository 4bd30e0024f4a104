"""Pydantic schemas for the vacation availability calendar."""

from datetime import date
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class DateRangeRequest(BaseModel):
    scope_id: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("scope_id", "empresa_id")
    )
    start_date: date = Field(..., validation_alias=AliasChoices("start_date", "fecha_inicio"))
    end_date: date = Field(..., validation_alias=AliasChoices("end_date", "fecha_fin"))

    @model_validator(mode="after")
    def check_order(self) -> "DateRangeRequest":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class AvailabilityIntervalCreate(DateRangeRequest):
    available: bool = Field(..., validation_alias=AliasChoices("available", "disponible"))


class AvailabilityIntervalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    scope_id: str
    start_date: date
    end_date: date
    available: bool


class BlockedDaysResponse(BaseModel):
    scope_id: str
    start_date: date
    end_date: date
    days: list[date]
