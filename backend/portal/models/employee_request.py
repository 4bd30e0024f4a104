"""Employee self-service requests (vacations, permits, certifications, medical leave)."""

from enum import Enum

from sqlalchemy import Column, Date, DateTime, String, Text, func

from portal.core.database import Base
from portal.models.shared import UUIDType, generate_uuid


class RequestType(str, Enum):
    VACATION = "vacaciones"
    PERMIT = "permisos"
    CERTIFICATION = "certificacion_laboral"
    MEDICAL_LEAVE = "incapacidades"


class RequestStatus(str, Enum):
    PENDING = "pendiente"
    APPROVED = "aprobado"
    REJECTED = "rechazado"


class EmployeeRequest(Base):
    __tablename__ = "employee_requests"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    request_type = Column(String(30), nullable=False, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    # Vacation calendar scope (company) the request is booked against
    scope_id = Column(String(255), nullable=True, index=True)
    status = Column(String(20), nullable=False, default=RequestStatus.PENDING.value, index=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    reason = Column(Text, nullable=True)
    rejection_reason = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
