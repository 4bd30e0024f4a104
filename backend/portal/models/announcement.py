"""Announcements ("comunicados") and the positions they target."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, func

from portal.core.database import Base
from portal.models.shared import UUIDType, generate_uuid


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    author_id = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class AnnouncementPosition(Base):
    __tablename__ = "announcement_positions"

    announcement_id = Column(
        UUIDType,
        ForeignKey("announcements.id", ondelete="CASCADE"),
        primary_key=True,
    )
    position_id = Column(
        UUIDType,
        ForeignKey("positions.id", ondelete="CASCADE"),
        primary_key=True,
    )
