"""Blocked/available date ranges of the shared vacation calendar."""

from sqlalchemy import Boolean, Column, Date, DateTime, String, func

from portal.core.database import Base
from portal.models.shared import UUIDType, generate_uuid


class AvailabilityInterval(Base):
    """Closed date range ``[start_date, end_date]`` for one calendar scope."""

    __tablename__ = "availability_intervals"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    scope_id = Column(String(255), nullable=False, index=True)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False)
    available = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
