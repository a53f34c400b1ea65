"""Command-line driver for the company DAO."""

from __future__ import annotations

import functools
from pathlib import Path

import click

from company_dao.config import get_settings
from company_dao.database.models import Department, DepartmentId, Employee, EmployeeId
from company_dao.database.sqlmodel_dao import SQLModelDAO
from company_dao.exceptions import CompanyDAOError
from company_dao.logging_config import setup_logging
from company_dao.menu import (
    Menu,
    format_department,
    format_departments,
    format_employee,
    format_employees,
    require_department,
    require_text,
)


def dao_command(func):
    """Turn data-access errors into a click error (message + exit code 1)."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except CompanyDAOError as e:
            raise click.ClickException(str(e)) from e

    return wrapper


@click.group()
@click.option(
    "--db-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="SQLite file to use (defaults to COMPANY_DAO_DB_PATH or data/company.sqlite).",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Minimum log level (defaults to COMPANY_DAO_LOG_LEVEL).",
)
@click.pass_context
def cli(ctx: click.Context, db_path: Path | None, log_level: str | None):
    """Manage departments and employees stored in an embedded SQLite file."""
    settings = get_settings()
    setup_logging(level=(log_level or settings.log_level).upper(), json=settings.log_json)

    dao = SQLModelDAO(db_path or settings.db_path)
    ctx.obj = dao
    ctx.call_on_close(dao.close)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


@cli.command()
@click.pass_obj
def check_db(dao: SQLModelDAO):
    """Report whether the database file exists."""
    if dao.check_db_exists():
        click.echo(f"The database file exists: {dao.db_path}")
    else:
        click.echo(f"The database file does not exist: {dao.db_path}")


@cli.command()
@click.pass_obj
@dao_command
def stats(dao: SQLModelDAO):
    """Show record counts."""
    result = dao.get_stats()
    click.echo(f"Departments: {result['total_departments']}")
    click.echo(f"Employees: {result['total_employees']}")
    for depno, count in sorted(
        result["employees_by_department"].items(), key=lambda item: (item[0] is None, item[0] or 0)
    ):
        label = "none" if depno is None else depno
        click.echo(f"  - department {label}: {count}")


@cli.command()
@click.pass_obj
def menu(dao: SQLModelDAO):
    """Run the interactive numbered menu."""
    Menu(dao).run()


# ---------------------------------------------------------------------------
# Employees
# ---------------------------------------------------------------------------


@cli.command("list-employees")
@click.pass_obj
@dao_command
def list_employees(dao: SQLModelDAO):
    """List all employees."""
    employees = dao.find_all_employees()
    if not employees:
        click.echo("There are currently no Employees stored")
        return
    click.echo(format_employees(employees))


@cli.command("find-employee")
@click.argument("empno", type=int)
@click.pass_obj
@dao_command
def find_employee(dao: SQLModelDAO, empno: int):
    """Show the employee with EMPNO."""
    click.echo(format_employee(dao.find_employee_by_id(EmployeeId(empno))))


@cli.command("add-employee")
@click.argument("empno", type=int)
@click.argument("name")
@click.argument("position")
@click.argument("depno", type=int)
@click.pass_obj
@dao_command
def add_employee(dao: SQLModelDAO, empno: int, name: str, position: str, depno: int):
    """Add a new employee to an existing department."""
    require_department(dao, depno)
    employee = dao.add_employee(
        Employee(
            empno=empno,
            name=require_text(name, "Name"),
            position=require_text(position, "Position"),
            depno=depno,
        )
    )
    click.echo(f"Employee added: {format_employee(employee)}")


@cli.command("update-employee")
@click.argument("empno", type=int)
@click.option("--name", default=None, help="New name.")
@click.option("--position", default=None, help="New position.")
@click.option("--depno", type=int, default=None, help="New department number.")
@click.pass_obj
@dao_command
def update_employee(
    dao: SQLModelDAO, empno: int, name: str | None, position: str | None, depno: int | None
):
    """Update an employee; options left out keep their current value."""
    current = dao.find_employee_by_id(EmployeeId(empno))
    if depno is not None:
        require_department(dao, depno)
    employee = dao.update_employee(
        Employee(
            empno=empno,
            name=current.name if name is None else require_text(name, "Name"),
            position=current.position if position is None else require_text(position, "Position"),
            depno=current.depno if depno is None else depno,
        )
    )
    click.echo(f"Employee updated: {format_employee(employee)}")


@cli.command("delete-employee")
@click.argument("empno", type=int)
@click.pass_obj
@dao_command
def delete_employee(dao: SQLModelDAO, empno: int):
    """Delete the employee with EMPNO."""
    employee = dao.delete_employee(EmployeeId(empno))
    click.echo(f"Employee deleted: {format_employee(employee)}")


@cli.command("employees-by-dept")
@click.argument("depno", type=int)
@click.pass_obj
@dao_command
def employees_by_dept(dao: SQLModelDAO, depno: int):
    """List the employees of department DEPNO."""
    employees = dao.find_employees_by_dept(DepartmentId(depno))
    if not employees:
        click.echo(f"There are no Employees in Department {depno}")
        return
    click.echo(format_employees(employees))


# ---------------------------------------------------------------------------
# Departments
# ---------------------------------------------------------------------------


@cli.command("list-departments")
@click.pass_obj
@dao_command
def list_departments(dao: SQLModelDAO):
    """List all departments."""
    departments = dao.find_all_departments()
    if not departments:
        click.echo("There are currently no Departments stored")
        return
    click.echo(format_departments(departments))


@cli.command("find-department")
@click.argument("depno", type=int)
@click.pass_obj
@dao_command
def find_department(dao: SQLModelDAO, depno: int):
    """Show the department with DEPNO."""
    click.echo(format_department(dao.find_department_by_id(DepartmentId(depno))))


@cli.command("add-department")
@click.argument("depno", type=int)
@click.argument("name")
@click.argument("location")
@click.pass_obj
@dao_command
def add_department(dao: SQLModelDAO, depno: int, name: str, location: str):
    """Add a new department."""
    department = dao.add_department(
        Department(
            depno=depno,
            name=require_text(name, "Name"),
            location=require_text(location, "Location"),
        )
    )
    click.echo(f"Department added: {format_department(department)}")


@cli.command("update-department")
@click.argument("depno", type=int)
@click.option("--name", default=None, help="New name.")
@click.option("--location", default=None, help="New location.")
@click.pass_obj
@dao_command
def update_department(dao: SQLModelDAO, depno: int, name: str | None, location: str | None):
    """Update a department; options left out keep their current value."""
    current = dao.find_department_by_id(DepartmentId(depno))
    department = dao.update_department(
        Department(
            depno=depno,
            name=current.name if name is None else require_text(name, "Name"),
            location=current.location if location is None else require_text(location, "Location"),
        )
    )
    click.echo(f"Department updated: {format_department(department)}")


@cli.command("delete-department")
@click.argument("depno", type=int)
@click.pass_obj
@dao_command
def delete_department(dao: SQLModelDAO, depno: int):
    """Delete the department with DEPNO. Its employees are kept."""
    department = dao.delete_department(DepartmentId(depno))
    click.echo(f"Department deleted: {format_department(department)}")


if __name__ == "__main__":
    cli()
