"""Employee repository - Database operations for staff members"""

from sqlalchemy.orm import Session

from ...models import Employee


class EmployeeRepository:
    @staticmethod
    def get_active_employees(db: Session) -> list[Employee]:
        return db.query(Employee).filter(Employee.active.is_(True)).order_by(Employee.name).all()
