"""SQLModel data models.

This module defines the application's database tables using SQLModel.
An `Employee` holds a foreign key to its `Department`; department
membership is derived by querying employees on that key.
"""

from typing import Optional
from sqlmodel import SQLModel, Field, Relationship


class Department(SQLModel, table=True):
    """An organisational unit that employees belong to.

    Fields:
    - `id`: externally chosen identifier
    - `name`: display name copied into employee views
    - `location`: free-form site description
    """
    id: str = Field(primary_key=True)
    name: str = Field(index=True)
    location: Optional[str] = None


class Employee(SQLModel, table=True):
    """A person employed in exactly one `Department`.

    `email` is unique across all employees regardless of department.
    """
    id: str = Field(primary_key=True)
    name: str
    email: str = Field(index=True, nullable=False, unique=True)
    position: str
    salary: float
    department_id: str = Field(foreign_key='department.id', index=True, nullable=False)
    department: Optional[Department] = Relationship()
