from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1)
    position_ids: list[UUID] = Field(default_factory=list)


class AnnouncementResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    body: str
    author_id: str | None = None
    created_at: datetime


class AnnouncementPublishResponse(BaseModel):
    announcement: AnnouncementResponse
    notification_job_id: str | None = None
    notification_error: str | None = None
