"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable. Input fields are optional
so that the service layer can report every rule violation at once
instead of failing on the first missing field.
"""

from pydantic import BaseModel
from typing import List, Optional


class EmployeeIn(BaseModel):
    """Payload for creating or updating an employee.

    `department` is accepted for symmetry with `EmployeeOut` but ignored;
    the department is taken from the request path on create and never
    changes on update.
    """
    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    position: Optional[str] = None
    salary: Optional[float] = None
    department: Optional[str] = None


class EmployeeOut(BaseModel):
    """Employee view with the owning department flattened to its name."""
    id: str
    name: str
    email: str
    position: str
    salary: float
    department: str


class DepartmentIn(BaseModel):
    """Payload for creating a department."""
    id: Optional[str] = None
    name: Optional[str] = None
    location: Optional[str] = None


class DepartmentOut(BaseModel):
    """Department view embedding the views of its employees."""
    id: str
    name: str
    location: Optional[str] = None
    employees: List[EmployeeOut] = []
