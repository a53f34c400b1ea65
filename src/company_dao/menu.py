"""Interactive numbered menu over the company DAO.

Every action reads its input with ``click.prompt``, calls one DAO operation
and prints the result. Bad input and DAO errors are reported and control
returns to the menu; only option 0 (or end of input) leaves the loop.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import click
from loguru import logger

from company_dao.database.interfaces import CompanyDAOInterface
from company_dao.database.models import Department, DepartmentId, Employee, EmployeeId
from company_dao.exceptions import CompanyDAOError, NotFoundError, ValidationError

MENU_TEXT = """\
Select an option:
\t1) List all Employees
\t2) Find Employee by its ID
\t3) Add new Employee
\t4) Update Employee
\t5) Delete Employee
\t6) List all Departments
\t7) Find Department by its ID
\t8) Add new Department
\t9) Update Department
\t10) Delete Department
\t11) Find Employees by Department
\t0) Exit program"""


# ---------------------------------------------------------------------------
# Table rendering
# ---------------------------------------------------------------------------


def _table(headers: Sequence[str], widths: Sequence[int], rows: Sequence[Sequence[object]]) -> str:
    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(values: Sequence[object]) -> str:
        cells = [f" {'' if v is None else str(v):<{w}} " for v, w in zip(values, widths)]
        return "|" + "|".join(cells) + "|"

    lines = [border, line(headers), border]
    lines.extend(line(r) for r in rows)
    lines.append(border)
    return "\n".join(lines)


def format_employees(employees: Sequence[Employee]) -> str:
    """Render employees as a fixed-width table."""
    return _table(
        ("EMPNO", "NAME", "POSITION", "DEPNO"),
        (5, 14, 14, 5),
        [(e.empno, e.name, e.position, e.depno) for e in employees],
    )


def format_departments(departments: Sequence[Department]) -> str:
    """Render departments as a fixed-width table."""
    return _table(
        ("DEPNO", "NAME", "LOCATION"),
        (5, 14, 14),
        [(d.depno, d.name, d.location) for d in departments],
    )


def format_employee(employee: Employee) -> str:
    return (
        f"Employee(empno={employee.empno}, name={employee.name}, "
        f"position={employee.position}, depno={employee.depno})"
    )


def format_department(department: Department) -> str:
    return (
        f"Department(depno={department.depno}, name={department.name}, "
        f"location={department.location})"
    )


# ---------------------------------------------------------------------------
# Checks shared with the one-shot commands
# ---------------------------------------------------------------------------


def parse_id(raw: str, entity: str) -> int:
    """Parse a typed-in identity value; only unsigned digits are accepted."""
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()):
        raise ValidationError(f"Please provide a valid {entity} ID. {entity} IDs are integer values")
    return int(raw)


def require_text(value: str, field: str) -> str:
    value = value.strip()
    if not value:
        raise ValidationError(f"{field} cannot be empty")
    return value


def require_department(dao: CompanyDAOInterface, depno: int) -> Department:
    """Look up the department an employee points to, with a driver-level message."""
    try:
        return dao.find_department_by_id(DepartmentId(depno))
    except NotFoundError as e:
        raise ValidationError(f"There is no Department with DEPNO {depno}") from e


# ---------------------------------------------------------------------------
# Menu
# ---------------------------------------------------------------------------


class Menu:
    """Numbered console menu; one method per option."""

    def __init__(self, dao: CompanyDAOInterface):
        self.dao = dao
        self.running = False
        self.actions: dict[int, Callable[[], None]] = {
            1: self.list_employees,
            2: self.find_employee,
            3: self.add_employee,
            4: self.update_employee,
            5: self.delete_employee,
            6: self.list_departments,
            7: self.find_department,
            8: self.add_department,
            9: self.update_department,
            10: self.delete_department,
            11: self.employees_by_department,
        }

    def run(self) -> None:
        """Loop until option 0 or end of input, then close the DAO."""
        self.running = True
        try:
            while self.running:
                click.secho("- WELCOME TO THE COMPANY -", fg="black", bg="cyan")
                click.echo(MENU_TEXT)
                try:
                    choice = click.prompt(">", default="", show_default=False)
                except click.Abort:
                    break
                self.dispatch(choice)
        finally:
            self.dao.close()
        click.secho("- SEE YOU SOON -", fg="black", bg="cyan")

    def dispatch(self, choice: str) -> None:
        choice = choice.strip()
        if not choice:
            click.echo("ERROR: Please indicate the option number", err=True)
            return
        if not (choice.isascii() and choice.isdigit()):
            click.echo(
                "ERROR: Please provide a valid input for option! The input must be an Integer value",
                err=True,
            )
            return

        option = int(choice)
        if option == 0:
            self.running = False
            return
        action = self.actions.get(option)
        if action is None:
            click.echo("ERROR: Please provide a valid option", err=True)
            return

        try:
            action()
        except CompanyDAOError as e:
            logger.debug("Menu option {} failed: {}", option, e)
            click.echo(f"ERROR: {e}", err=True)

    # -- input helpers ---------------------------------------------------

    @staticmethod
    def _ask(label: str, current: object | None = None) -> str:
        if current is None:
            return click.prompt(label, default="", show_default=False)
        return click.prompt(f"{label} (current: {current})", default=str(current), show_default=False)

    def _ask_id(self, label: str, entity: str) -> int:
        return parse_id(self._ask(label), entity)

    # -- employees -------------------------------------------------------

    def list_employees(self) -> None:
        employees = self.dao.find_all_employees()
        if not employees:
            click.echo("There are currently no Employees stored")
            return
        click.echo(format_employees(employees))

    def find_employee(self) -> None:
        empno = self._ask_id("Insert Employee's ID", "Employee")
        try:
            employee = self.dao.find_employee_by_id(EmployeeId(empno))
        except NotFoundError:
            click.echo(f"There is no Employee with EMPNO {empno}")
            return
        click.echo("Employee's information:")
        click.echo(format_employee(employee))

    def add_employee(self) -> None:
        empno = self._ask_id("Insert new Employee's ID", "Employee")
        try:
            self.dao.find_employee_by_id(EmployeeId(empno))
        except NotFoundError:
            pass
        else:
            raise ValidationError("There is already an Employee with the same ID")

        name = require_text(self._ask("Insert new Employee's NAME"), "Name")
        position = require_text(self._ask("Insert new Employee's ROLE"), "Role")
        depno = parse_id(self._ask("Insert new Employee's DEPNO"), "Department")
        require_department(self.dao, depno)

        self.dao.add_employee(Employee(empno=empno, name=name, position=position, depno=depno))
        click.secho("New Employee added successfully!", fg="green")

    def update_employee(self) -> None:
        empno = self._ask_id("Insert Employee's ID", "Employee")
        try:
            current = self.dao.find_employee_by_id(EmployeeId(empno))
        except NotFoundError:
            click.echo(f"There is no Employee with EMPNO {empno}")
            return

        click.echo(f"Updating employee with ID: {empno}")
        name = require_text(self._ask("Name", current.name), "Name")
        position = require_text(self._ask("Job", current.position), "Job")
        depno = parse_id(self._ask("Department ID", current.depno), "Department")
        require_department(self.dao, depno)

        updated = self.dao.update_employee(
            Employee(empno=empno, name=name, position=position, depno=depno)
        )
        click.secho("Employee has been successfully updated.", fg="green")
        click.echo(format_employee(updated))

    def delete_employee(self) -> None:
        empno = self._ask_id("Insert Employee's ID", "Employee")
        deleted = self.dao.delete_employee(EmployeeId(empno))
        click.secho("Employee deleted successfully.", fg="green")
        click.echo(format_employee(deleted))

    # -- departments -----------------------------------------------------

    def list_departments(self) -> None:
        departments = self.dao.find_all_departments()
        if not departments:
            click.echo("There are currently no Departments stored")
            return
        click.echo(format_departments(departments))

    def find_department(self) -> None:
        depno = self._ask_id("Insert Department's ID", "Department")
        try:
            department = self.dao.find_department_by_id(DepartmentId(depno))
        except NotFoundError:
            click.echo(f"There is no Department with DEPNO {depno}")
            return
        click.echo("Department's information:")
        click.echo(format_department(department))

    def add_department(self) -> None:
        depno = self._ask_id("Insert new Department's ID", "Department")
        try:
            self.dao.find_department_by_id(DepartmentId(depno))
        except NotFoundError:
            pass
        else:
            raise ValidationError("There is already a Department with the same ID")

        name = require_text(self._ask("Insert new Department's NAME"), "Name")
        location = require_text(self._ask("Insert new Department's LOCATION"), "Location")

        self.dao.add_department(Department(depno=depno, name=name, location=location))
        click.secho("New Department added successfully!", fg="green")

    def update_department(self) -> None:
        depno = self._ask_id("Insert Department's ID", "Department")
        try:
            current = self.dao.find_department_by_id(DepartmentId(depno))
        except NotFoundError:
            click.echo(f"There is no Department with DEPNO {depno}")
            return

        click.echo(f"Updating department with ID: {depno}")
        name = require_text(self._ask("Name", current.name), "Name")
        location = require_text(self._ask("City", current.location), "City")

        updated = self.dao.update_department(Department(depno=depno, name=name, location=location))
        click.secho("Department has been successfully updated.", fg="green")
        click.echo(format_department(updated))

    def delete_department(self) -> None:
        depno = self._ask_id("Insert Department's ID", "Department")
        deleted = self.dao.delete_department(DepartmentId(depno))
        click.secho("Department has been successfully deleted.", fg="green")
        click.echo(format_department(deleted))

    def employees_by_department(self) -> None:
        depno = self._ask_id("Insert Department's ID", "Department")
        employees = self.dao.find_employees_by_dept(DepartmentId(depno))
        if not employees:
            click.echo(f"There are no Employees in Department {depno}")
            return
        click.echo(format_employees(employees))
