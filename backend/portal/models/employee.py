"""Payroll users ("usuario_nomina") and their positions ("cargos")."""

from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, String, func

from portal.core.database import Base
from portal.models.shared import UUIDType, generate_uuid


class EmployeeStatus(str, Enum):
    ACTIVE = "activo"
    INACTIVE = "inactivo"


class EmployeeRole(str, Enum):
    ADMINISTRATOR = "administrador"
    MODERATOR = "moderador"
    USER = "usuario"


class Position(Base):
    __tablename__ = "positions"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Employee(Base):
    __tablename__ = "employees"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    # Identifier issued by the auth backend; comments and requests reference it
    auth_user_id = Column(String(255), nullable=False, unique=True, index=True)
    full_name = Column(String(255), nullable=False)
    national_id = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    company_name = Column(String(255), nullable=True)
    position_id = Column(
        UUIDType, ForeignKey("positions.id", ondelete="SET NULL"), nullable=True, index=True
    )
    status = Column(String(20), nullable=False, default=EmployeeStatus.ACTIVE.value, index=True)
    role = Column(String(20), nullable=False, default=EmployeeRole.USER.value)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
