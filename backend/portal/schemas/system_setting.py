from pydantic import BaseModel, Field


class NotificationEmailsUpdate(BaseModel):
    emails: str = Field(..., min_length=1, description="Comma-separated addresses")


class NotificationEmailsResponse(BaseModel):
    emails: str
    count: int
