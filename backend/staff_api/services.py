"""Business logic services used by HTTP controllers.

This module holds small service classes that coordinate repositories.
Services are intentionally thin: they validate input, look up related
records, persist via repositories and convert the stored rows into the
views returned to callers.
"""

import logging
import re
import uuid
from typing import Dict, List
from sqlmodel import Session
from . import models, repositories
from .database import transaction
from .exceptions import DuplicateResourceError, InternalError, NotFoundError, ValidationError
from .schemas import DepartmentIn, DepartmentOut, EmployeeIn, EmployeeOut

logger = logging.getLogger("staff_api.services")

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$")


# space and control characters only; other Unicode spaces count as content
_TRIMMED = "".join(chr(c) for c in range(33))


def _is_blank(value) -> bool:
    return value is None or not str(value).strip(_TRIMMED)


def _new_id() -> str:
    return uuid.uuid4().hex


def to_employee_view(employee: models.Employee) -> EmployeeOut:
    """Copy an `Employee` row into its view, resolving the department name.

    Every employee is created with a department and update never clears
    it, so a missing link means the store is inconsistent.
    """
    department = employee.department
    if department is None:
        raise InternalError(f"Employee {employee.id} has no department")
    return EmployeeOut(
        id=employee.id,
        name=employee.name,
        email=employee.email,
        position=employee.position,
        salary=employee.salary,
        department=department.name,
    )


def validate_employee(payload: EmployeeIn) -> None:
    """Check every field rule and raise one `ValidationError` listing all failures."""
    errors: Dict[str, str] = {}
    if _is_blank(payload.name):
        errors['name'] = 'Name is required'
    if payload.email is None or not EMAIL_PATTERN.fullmatch(payload.email):
        errors['email'] = 'Valid email is required'
    if _is_blank(payload.position):
        errors['position'] = 'Position is required'
    if payload.salary is None or payload.salary <= 0:
        errors['salary'] = 'Salary must be greater than 0'
    if errors:
        raise ValidationError(errors)


class EmployeeService:
    """List, fetch, create, update and delete employees."""
    def __init__(self, session: Session):
        self.session = session
        self.employee_repo = repositories.EmployeeRepository(session)
        self.department_repo = repositories.DepartmentRepository(session)

    def list_all_employees(self) -> List[EmployeeOut]:
        """Return every employee as a view; no particular order is guaranteed."""
        return [to_employee_view(e) for e in self.employee_repo.find_all()]

    def list_employees_by_department(self, department_id: str) -> List[EmployeeOut]:
        """Return the views of all employees in `department_id`.

        Raises `NotFoundError` when the department does not exist; an
        existing department without employees yields an empty list.
        """
        department = self.department_repo.find_by_id(department_id)
        if department is None:
            raise NotFoundError(f"Department not found with id: {department_id}")
        return [to_employee_view(e) for e in self.employee_repo.list_by_department(department.id)]

    def get_employee_by_id(self, employee_id: str) -> EmployeeOut:
        employee = self.employee_repo.find_by_id(employee_id)
        if employee is None:
            raise NotFoundError(f"Employee not found with id: {employee_id}")
        return to_employee_view(employee)

    def add_employee(self, department_id: str, payload: EmployeeIn) -> EmployeeOut:
        """Validate `payload` and store it as a new employee of `department_id`.

        The whole sequence runs in one transaction: validation, the
        duplicate email and id checks, the department lookup and the
        insert either all apply or none do. The supplied id is kept; one
        is generated only when the payload carries none. The returned
        view takes its department name from the stored department, not
        from the payload.
        """
        with transaction(self.session):
            validate_employee(payload)
            if self.employee_repo.exists_by_email(payload.email):
                logger.warning("duplicate employee email rejected: %s", payload.email)
                raise DuplicateResourceError(f"Employee already exists with email: {payload.email}")
            employee_id = payload.id or _new_id()
            if self.employee_repo.exists_by_id(employee_id):
                raise DuplicateResourceError(f"Employee already exists with id: {employee_id}")
            department = self.department_repo.find_by_id(department_id)
            if department is None:
                raise NotFoundError(f"Department not found with id: {department_id}")
            employee = models.Employee(
                id=employee_id,
                name=payload.name,
                email=payload.email,
                position=payload.position,
                salary=payload.salary,
                department_id=department.id,
                department=department,
            )
            saved = self.employee_repo.save(employee)
            view = to_employee_view(saved)
        logger.info("employee created id=%s department=%s", view.id, department_id)
        return view

    def update_employee(self, employee_id: str, payload: EmployeeIn) -> EmployeeOut:
        """Overwrite name, email, position and salary of an existing employee.

        Values are written as given: no field rules and no duplicate email
        check apply here, and the department link is left untouched. A
        constraint violation raised by the store rolls the change back and
        propagates as is.
        """
        employee = self.employee_repo.find_by_id(employee_id)
        if employee is None:
            raise NotFoundError(f"Employee not found with id: {employee_id}")
        with transaction(self.session):
            employee.name = payload.name
            employee.email = payload.email
            employee.position = payload.position
            employee.salary = payload.salary
            view = to_employee_view(self.employee_repo.save(employee))
        return view

    def delete_employee(self, employee_id: str) -> None:
        """Permanently remove an employee; raises `NotFoundError` if absent."""
        with transaction(self.session):
            if not self.employee_repo.exists_by_id(employee_id):
                raise NotFoundError(f"Employee not found with id: {employee_id}")
            self.employee_repo.delete_by_id(employee_id)
        logger.info("employee deleted id=%s", employee_id)


class DepartmentService:
    """Create and inspect departments together with their employees."""
    def __init__(self, session: Session):
        self.session = session
        self.department_repo = repositories.DepartmentRepository(session)
        self.employee_repo = repositories.EmployeeRepository(session)

    def _to_view(self, department: models.Department) -> DepartmentOut:
        employees = self.employee_repo.list_by_department(department.id)
        return DepartmentOut(
            id=department.id,
            name=department.name,
            location=department.location,
            employees=[to_employee_view(e) for e in employees],
        )

    def list_all_departments(self) -> List[DepartmentOut]:
        return [self._to_view(d) for d in self.department_repo.find_all()]

    def get_department_by_id(self, department_id: str) -> DepartmentOut:
        department = self.department_repo.find_by_id(department_id)
        if department is None:
            raise NotFoundError(f"Department not found with id: {department_id}")
        return self._to_view(department)

    def add_department(self, payload: DepartmentIn) -> DepartmentOut:
        """Store a new department; the name is required and ids are unique."""
        with transaction(self.session):
            if _is_blank(payload.name):
                raise ValidationError({'name': 'Name is required'})
            department_id = payload.id or _new_id()
            if self.department_repo.exists_by_id(department_id):
                raise DuplicateResourceError(f"Department already exists with id: {department_id}")
            department = models.Department(id=department_id, name=payload.name, location=payload.location)
            view = self._to_view(self.department_repo.save(department))
        logger.info("department created id=%s", view.id)
        return view
