from uuid import UUID

from sqlalchemy.orm import Session

from portal.models.employee import Employee, EmployeeRole, EmployeeStatus, Position


class EmployeeRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_auth_user_id(self, auth_user_id: str) -> Employee | None:
        return self.db.query(Employee).filter(Employee.auth_user_id == auth_user_id).first()

    def get_by_auth_user_ids(self, auth_user_ids: list[str]) -> list[Employee]:
        if not auth_user_ids:
            return []
        return self.db.query(Employee).filter(Employee.auth_user_id.in_(auth_user_ids)).all()

    def get_active_by_positions(self, position_ids: list[UUID]) -> list[Employee]:
        """Active employees holding one of the positions and having an email."""
        if not position_ids:
            return []
        return (
            self.db.query(Employee)
            .filter(
                Employee.position_id.in_(position_ids),
                Employee.status == EmployeeStatus.ACTIVE.value,
                Employee.email.isnot(None),
            )
            .order_by(Employee.full_name.asc())
            .all()
        )

    def get_active_administrators(self) -> list[Employee]:
        return (
            self.db.query(Employee)
            .filter(
                Employee.role.in_(
                    [EmployeeRole.ADMINISTRATOR.value, EmployeeRole.MODERATOR.value]
                ),
                Employee.status == EmployeeStatus.ACTIVE.value,
            )
            .all()
        )

    def create(
        self,
        *,
        auth_user_id: str,
        full_name: str,
        email: str | None = None,
        national_id: str | None = None,
        company_name: str | None = None,
        position_id: UUID | None = None,
        status: str = EmployeeStatus.ACTIVE.value,
        role: str = EmployeeRole.USER.value,
    ) -> Employee:
        employee = Employee(
            auth_user_id=auth_user_id,
            full_name=full_name,
            email=email,
            national_id=national_id,
            company_name=company_name,
            position_id=position_id,
            status=status,
            role=role,
        )
        self.db.add(employee)
        self.db.commit()
        self.db.refresh(employee)
        return employee

    def create_position(self, name: str) -> Position:
        position = Position(name=name)
        self.db.add(position)
        self.db.commit()
        self.db.refresh(position)
        return position
