"""SQLModel type definitions for the department and employee tables."""

from typing import NewType

from sqlmodel import Field, SQLModel

DepartmentId = NewType("DepartmentId", int)
EmployeeId = NewType("EmployeeId", int)


class Department(SQLModel, table=True):
    """Department table model.

    ``depno`` is supplied by the caller; it is never generated by the store.
    """

    __tablename__ = "departments"

    depno: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    name: str
    location: str


class Employee(SQLModel, table=True):
    """Employee table model.

    ``depno`` is a soft reference to ``Department.depno``: it is indexed for
    lookups by department but not declared as a foreign key, so deleting a
    department leaves its employees in place.
    """

    __tablename__ = "employees"

    empno: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    name: str
    position: str
    depno: int | None = Field(default=None, index=True)
