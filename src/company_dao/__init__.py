"""Department and employee records kept in an embedded SQLite file."""

from company_dao.database import (
    CompanyDAOInterface,
    Department,
    DepartmentId,
    Employee,
    EmployeeId,
    SQLModelDAO,
)
from company_dao.exceptions import (
    CompanyDAOError,
    DuplicateKeyError,
    NotFoundError,
    StoreConnectionError,
    ValidationError,
)

__all__ = [
    "CompanyDAOError",
    "CompanyDAOInterface",
    "Department",
    "DepartmentId",
    "DuplicateKeyError",
    "Employee",
    "EmployeeId",
    "NotFoundError",
    "SQLModelDAO",
    "StoreConnectionError",
    "ValidationError",
]
