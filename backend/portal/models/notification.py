"""Notification model for in-app notifications shown in the header dropdown."""

from sqlalchemy import Boolean, Column, DateTime, String, func

from portal.core.database import Base
from portal.models.shared import UUIDType, generate_uuid


class Notification(Base):
    """In-app notification addressed to one portal user."""

    __tablename__ = "notifications"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    user_id = Column(String(255), nullable=False, index=True)
    notification_type = Column(String(30), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    message = Column(String(1000), nullable=False)
    request_id = Column(UUIDType, nullable=True)
    is_read = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
