"""Comment rows shared by every threaded discussion in the portal."""

from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text

from portal.core.database import Base
from portal.models.shared import utc_now


class ThreadType(str, Enum):
    ANNOUNCEMENT = "announcement"
    MEDICAL_LEAVE = "medical_leave"
    PERMIT = "permit"
    CERTIFICATION = "certification"


class Comment(Base):
    """A comment in one thread.

    ``parent_id`` points at an earlier comment of the same thread, or is
    NULL for a root comment. Rows are never edited by users; only the
    ``seen_by_*`` flags change, when the other party opens the thread.
    """

    __tablename__ = "comments"
    __table_args__ = (Index("ix_comments_thread", "thread_type", "thread_id"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    thread_type = Column(String(30), nullable=False)
    thread_id = Column(String(255), nullable=False)
    author_id = Column(String(255), nullable=False)
    author_role = Column(String(20), nullable=False)
    body = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    parent_id = Column(
        Integer, ForeignKey("comments.id", ondelete="SET NULL"), nullable=True, index=True
    )
    seen_by_admin = Column(Boolean, nullable=False, default=False)
    seen_by_requester = Column(Boolean, nullable=False, default=False)
