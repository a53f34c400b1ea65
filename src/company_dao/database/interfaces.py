"""Protocol interfaces for the company data-access layer."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from company_dao.database.models import Department, DepartmentId, Employee, EmployeeId


@runtime_checkable
class FileHandlerInterface(Protocol):
    """Lifecycle of the handle to the embedded database file."""

    def check_db_exists(self) -> bool:
        """Report whether the database file is present on disk."""
        ...

    def connect(self) -> None:
        """Open (or create) the database file."""
        ...

    def close(self) -> None:
        """Release the database handle if it is open."""
        ...


@runtime_checkable
class DepartmentDAOInterface(Protocol):
    """CRUD operations over departments."""

    def add_department(self, department: Department) -> Department:
        """Insert a new department."""
        ...

    def delete_department(self, depno: DepartmentId) -> Department:
        """Remove the department with this key and return it."""
        ...

    def update_department(self, department: Department) -> Department:
        """Replace the stored department that has the same ``depno``."""
        ...

    def find_department_by_id(self, depno: DepartmentId) -> Department:
        """Get a department by key."""
        ...

    def find_all_departments(self) -> list[Department]:
        """Get every stored department."""
        ...


@runtime_checkable
class EmployeeDAOInterface(Protocol):
    """CRUD operations over employees."""

    def add_employee(self, employee: Employee) -> Employee:
        """Insert a new employee."""
        ...

    def delete_employee(self, empno: EmployeeId) -> Employee:
        """Remove the employee with this key and return it."""
        ...

    def update_employee(self, employee: Employee) -> Employee:
        """Replace the stored employee that has the same ``empno``."""
        ...

    def find_employee_by_id(self, empno: EmployeeId) -> Employee:
        """Get an employee by key."""
        ...

    def find_all_employees(self) -> list[Employee]:
        """Get every stored employee."""
        ...

    def find_employees_by_dept(self, depno: DepartmentId) -> list[Employee]:
        """Get all employees whose ``depno`` equals the given key."""
        ...


@runtime_checkable
class CompanyDAOInterface(
    FileHandlerInterface, DepartmentDAOInterface, EmployeeDAOInterface, Protocol
):
    """Full contract used by the console driver.

    Lookups, updates and deletes on a missing key raise ``NotFoundError``.
    Every operation raises ``StoreConnectionError`` while the store is closed.
    """

    def get_stats(self) -> dict:
        """Get counts and breakdowns."""
        ...

    def reset(self) -> None:
        """Drop and recreate both tables (use with caution)."""
        ...
