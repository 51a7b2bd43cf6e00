"""Repository classes encapsulating database operations.

Each repository is small and focused on a single table. Repositories
return SQLModel objects and flush pending changes so that constraint
violations surface early, but they never commit: commit boundaries are
owned by the service layer.
"""

from typing import List, Optional
from sqlmodel import Session, select
from . import models


class EmployeeRepository:
    """Keyed access to `Employee` records."""
    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, employee_id: str) -> Optional[models.Employee]:
        """Return an `Employee` by primary key or `None` if not found."""
        return self.session.get(models.Employee, employee_id)

    def find_all(self) -> List[models.Employee]:
        """Return every employee in store-defined order."""
        return self.session.exec(select(models.Employee)).all()

    def list_by_department(self, department_id: str) -> List[models.Employee]:
        """Return the employees that belong to `department_id`."""
        stmt = select(models.Employee).where(models.Employee.department_id == department_id)
        return self.session.exec(stmt).all()

    def exists_by_id(self, employee_id: str) -> bool:
        """Return True if an employee with this id exists."""
        stmt = select(models.Employee.id).where(models.Employee.id == employee_id)
        return self.session.exec(stmt).first() is not None

    def exists_by_email(self, email: str) -> bool:
        """Return True if any employee, in any department, uses `email`."""
        stmt = select(models.Employee.id).where(models.Employee.email == email)
        return self.session.exec(stmt).first() is not None

    def save(self, employee: models.Employee) -> models.Employee:
        """Insert or update `employee` and return the managed instance."""
        self.session.add(employee)
        self.session.flush()
        self.session.refresh(employee)
        return employee

    def delete_by_id(self, employee_id: str) -> None:
        """Remove the employee with this id; a missing id is a no-op."""
        employee = self.find_by_id(employee_id)
        if employee is None:
            return
        self.session.delete(employee)
        self.session.flush()


class DepartmentRepository:
    """Keyed access to `Department` records."""
    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, department_id: str) -> Optional[models.Department]:
        return self.session.get(models.Department, department_id)

    def find_all(self) -> List[models.Department]:
        return self.session.exec(select(models.Department)).all()

    def exists_by_id(self, department_id: str) -> bool:
        stmt = select(models.Department.id).where(models.Department.id == department_id)
        return self.session.exec(stmt).first() is not None

    def save(self, department: models.Department) -> models.Department:
        """Insert or update `department` and return the managed instance."""
        self.session.add(department)
        self.session.flush()
        self.session.refresh(department)
        return department
