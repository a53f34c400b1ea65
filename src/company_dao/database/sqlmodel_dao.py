"""SQLite-backed data-access object for departments and employees."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from loguru import logger
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DatabaseError, IntegrityError
from sqlmodel import Session, SQLModel, create_engine, func, select

from company_dao.database.interfaces import CompanyDAOInterface
from company_dao.database.models import Department, DepartmentId, Employee, EmployeeId
from company_dao.exceptions import (
    DuplicateKeyError,
    NotFoundError,
    StoreConnectionError,
    ValidationError,
)


def _check_key(key: object, entity: str) -> int:
    # bool is an int subclass but never a valid identity
    if isinstance(key, bool) or not isinstance(key, int):
        raise ValidationError(f"{entity} id must be an integer, got {key!r}")
    return key


def _check_text(value: object, field: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be text, got {value!r}")
    return value


def _check_department(department: object) -> Department:
    if not isinstance(department, Department):
        raise ValidationError(f"Expected a Department, got {type(department).__name__}")
    _check_key(department.depno, "Department")
    _check_text(department.name, "Department name")
    _check_text(department.location, "Department location")
    return department


def _check_employee(employee: object) -> Employee:
    if not isinstance(employee, Employee):
        raise ValidationError(f"Expected an Employee, got {type(employee).__name__}")
    _check_key(employee.empno, "Employee")
    _check_text(employee.name, "Employee name")
    _check_text(employee.position, "Employee position")
    if employee.depno is not None:
        _check_key(employee.depno, "Department")
    return employee


def _insert(session: Session, row: Department | Employee, entity: str, key: int) -> None:
    """Add ``row`` and flush so a primary-key conflict is reported as a duplicate."""
    if session.get(type(row), key) is not None:
        logger.warning("{} {} already exists", entity.capitalize(), key)
        raise DuplicateKeyError(entity, key)
    session.add(row)
    try:
        session.flush()
    except IntegrityError as e:
        logger.warning("{} {} already exists: {}", entity.capitalize(), key, e.orig)
        raise DuplicateKeyError(entity, key) from e


class SQLModelDAO(CompanyDAOInterface):
    """Manages the department and employee tables in a single SQLite file.

    The DAO starts unopened. With ``auto_connect`` (the default) the first
    operation opens the file; after ``close()`` every operation raises
    ``StoreConnectionError`` until ``connect()`` is called again.

    Each operation runs in its own session. Records handed back are detached
    copies, so changing them has no effect until they are passed to an
    ``update_*`` method.
    """

    def __init__(self, db_path: Path, *, auto_connect: bool = True):
        self.db_path = Path(db_path)
        self.auto_connect = auto_connect
        self.engine: Engine | None = None
        self._closed = False

    def __enter__(self) -> SQLModelDAO:
        self.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self.engine is not None

    def check_db_exists(self) -> bool:
        """Report whether the database file is present on disk."""
        exists = self.db_path.is_file()
        if exists:
            logger.info("Database file exists at {}", self.db_path)
        else:
            logger.info("Database file does not exist at {}", self.db_path)
        return exists

    def connect(self) -> None:
        """Open (or create) the database file and ensure both tables exist."""
        if self.engine is not None:
            return
        created = not self.db_path.exists()
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Could not create directory for {}: {}", self.db_path, e)
            raise StoreConnectionError(f"Could not open database at {self.db_path}: {e}") from e

        engine = create_engine(f"sqlite:///{self.db_path}", echo=False)
        try:
            SQLModel.metadata.create_all(
                engine,
                tables=[Department.__table__, Employee.__table__],
            )
        except DatabaseError as e:
            engine.dispose()
            logger.error("Could not open database at {}: {}", self.db_path, e)
            raise StoreConnectionError(f"Could not open database at {self.db_path}: {e}") from e

        self.engine = engine
        self._closed = False
        logger.info("{} database at {}", "Created" if created else "Opened", self.db_path)

    def close(self) -> None:
        """Dispose of the engine if it is open."""
        if self.engine is None:
            return
        self.engine.dispose()
        self.engine = None
        self._closed = True
        logger.info("Database connection closed")

    def close_connection(self) -> None:
        self.close()

    def _require_engine(self) -> Engine:
        if self.engine is None and self.auto_connect and not self._closed:
            self.connect()
        if self.engine is None:
            raise StoreConnectionError("Database not connected. Call connect() first.")
        return self.engine

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Run one unit of work: commit on success, roll back on any error."""
        session = Session(self._require_engine(), expire_on_commit=False)
        try:
            yield session
            session.commit()
        except IntegrityError as e:
            session.rollback()
            logger.warning("Constraint violated: {}", e.orig)
            raise ValidationError(f"Constraint violated: {e.orig}") from e
        except DatabaseError as e:
            session.rollback()
            logger.error("Database error on {}: {}", self.db_path, e)
            raise StoreConnectionError(f"Database at {self.db_path} is unavailable: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ------------------------------------------------------------------
    # Departments
    # ------------------------------------------------------------------

    def add_department(self, department: Department) -> Department:
        """Insert a new department."""
        _check_department(department)
        row = Department(**department.model_dump())
        with self._session() as session:
            _insert(session, row, "department", row.depno)
        logger.info("Department {} added", row.depno)
        return row

    def delete_department(self, depno: DepartmentId) -> Department:
        """Remove a department and return it. Its employees are left untouched."""
        key = _check_key(depno, "Department")
        with self._session() as session:
            stored = session.get(Department, key)
            if stored is None:
                raise NotFoundError("department", key)
            session.delete(stored)
        logger.info("Department {} deleted", key)
        return stored

    def update_department(self, department: Department) -> Department:
        """Replace name and location of the stored department with the same key."""
        _check_department(department)
        with self._session() as session:
            stored = session.get(Department, department.depno)
            if stored is None:
                raise NotFoundError("department", department.depno)
            stored.name = department.name
            stored.location = department.location
            session.add(stored)
        logger.info("Department {} updated", stored.depno)
        return stored

    def find_department_by_id(self, depno: DepartmentId) -> Department:
        """Get a department by key."""
        key = _check_key(depno, "Department")
        with self._session() as session:
            stored = session.get(Department, key)
        if stored is None:
            logger.debug("No department found with id {}", key)
            raise NotFoundError("department", key)
        logger.debug("Department {} found", key)
        return stored

    def find_all_departments(self) -> list[Department]:
        """Get every department, ordered by key."""
        with self._session() as session:
            departments = list(session.exec(select(Department).order_by(Department.depno)).all())
        logger.debug("Found {} departments", len(departments))
        return departments

    # ------------------------------------------------------------------
    # Employees
    # ------------------------------------------------------------------

    def add_employee(self, employee: Employee) -> Employee:
        """Insert a new employee. The department reference is not checked."""
        _check_employee(employee)
        row = Employee(**employee.model_dump())
        with self._session() as session:
            _insert(session, row, "employee", row.empno)
        logger.info("Employee {} added", row.empno)
        return row

    def delete_employee(self, empno: EmployeeId) -> Employee:
        """Remove an employee and return it."""
        key = _check_key(empno, "Employee")
        with self._session() as session:
            stored = session.get(Employee, key)
            if stored is None:
                raise NotFoundError("employee", key)
            session.delete(stored)
        logger.info("Employee {} deleted", key)
        return stored

    def update_employee(self, employee: Employee) -> Employee:
        """Replace name, position and department of the stored employee with the same key."""
        _check_employee(employee)
        with self._session() as session:
            stored = session.get(Employee, employee.empno)
            if stored is None:
                raise NotFoundError("employee", employee.empno)
            stored.name = employee.name
            stored.position = employee.position
            stored.depno = employee.depno
            session.add(stored)
        logger.info("Employee {} updated", stored.empno)
        return stored

    def find_employee_by_id(self, empno: EmployeeId) -> Employee:
        """Get an employee by key."""
        key = _check_key(empno, "Employee")
        with self._session() as session:
            stored = session.get(Employee, key)
        if stored is None:
            logger.debug("No employee found with id {}", key)
            raise NotFoundError("employee", key)
        logger.debug("Employee {} found", key)
        return stored

    def find_all_employees(self) -> list[Employee]:
        """Get every employee, ordered by key."""
        with self._session() as session:
            employees = list(session.exec(select(Employee).order_by(Employee.empno)).all())
        logger.debug("Found {} employees", len(employees))
        return employees

    def find_employees_by_dept(self, depno: DepartmentId) -> list[Employee]:
        """Get all employees in a department."""
        key = _check_key(depno, "Department")
        with self._session() as session:
            employees = list(
                session.exec(
                    select(Employee).where(Employee.depno == key).order_by(Employee.empno)
                ).all()
            )
        logger.debug("Found {} employees in department {}", len(employees), key)
        return employees

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def get_stats(self) -> dict:
        """Get counts and breakdowns."""
        with self._session() as session:
            total_departments = session.exec(
                select(func.count()).select_from(Department)
            ).one()
            rows = session.exec(
                select(Employee.depno, func.count()).group_by(Employee.depno)
            ).all()
        employees_by_department: dict[int | None, int] = {depno: count for depno, count in rows}
        return {
            "total_departments": total_departments,
            "total_employees": sum(employees_by_department.values()),
            "employees_by_department": employees_by_department,
        }

    def reset(self) -> None:
        """Drop and recreate both tables."""
        engine = self._require_engine()
        tables = [Department.__table__, Employee.__table__]
        try:
            SQLModel.metadata.drop_all(engine, tables=tables)
            SQLModel.metadata.create_all(engine, tables=tables)
        except DatabaseError as e:
            logger.error("Could not reset database at {}: {}", self.db_path, e)
            raise StoreConnectionError(f"Database at {self.db_path} is unavailable: {e}") from e
        logger.warning("Database at {} was reset", self.db_path)
