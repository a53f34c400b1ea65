"""Database layer: entity models, DAO protocols and the SQLModel-backed DAO."""

from company_dao.database.interfaces import (
    CompanyDAOInterface,
    DepartmentDAOInterface,
    EmployeeDAOInterface,
    FileHandlerInterface,
)
from company_dao.database.models import Department, DepartmentId, Employee, EmployeeId
from company_dao.database.sqlmodel_dao import SQLModelDAO

__all__ = [
    "CompanyDAOInterface",
    "Department",
    "DepartmentDAOInterface",
    "DepartmentId",
    "Employee",
    "EmployeeDAOInterface",
    "EmployeeId",
    "FileHandlerInterface",
    "SQLModelDAO",
]
