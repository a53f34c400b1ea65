"""Tests for the click commands and the interactive menu."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from company_dao.database.models import Department, Employee
from company_dao.database.sqlmodel_dao import SQLModelDAO
from company_dao.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, temp_db_path):
    """Run a CLI command against the temporary database."""

    def _invoke(*args: str, input: str | None = None):
        return runner.invoke(
            cli,
            ["--db-path", str(temp_db_path), "--log-level", "ERROR", *args],
            input=input,
        )

    return _invoke


@pytest.fixture
def seeded(temp_db_path):
    """Seed the temporary database with one department and one employee."""
    with SQLModelDAO(temp_db_path) as dao:
        dao.add_department(Department(depno=1, name="Sales", location="Madrid"))
        dao.add_employee(Employee(empno=100, name="Ana", position="Clerk", depno=1))
    return temp_db_path


def _stored(db_path):
    with SQLModelDAO(db_path) as dao:
        return dao.find_all_departments(), dao.find_all_employees()


class TestCommands:
    def test_check_db_missing(self, invoke):
        result = invoke("check-db")
        assert result.exit_code == 0
        assert "does not exist" in result.output

    def test_add_and_list_departments(self, invoke, temp_db_path):
        result = invoke("add-department", "1", "Sales", "Madrid")
        assert result.exit_code == 0, result.output
        assert "Department added" in result.output

        result = invoke("list-departments")
        assert result.exit_code == 0
        assert "DEPNO" in result.output
        assert "Sales" in result.output
        assert "Madrid" in result.output

    def test_list_empty(self, invoke):
        result = invoke("list-employees")
        assert result.exit_code == 0
        assert "There are currently no Employees stored" in result.output

    def test_add_employee_requires_existing_department(self, invoke, temp_db_path):
        result = invoke("add-employee", "100", "Ana", "Clerk", "7")
        assert result.exit_code == 1
        assert "There is no Department with DEPNO 7" in result.output
        assert _stored(temp_db_path) == ([], [])

    def test_add_employee(self, invoke, seeded):
        result = invoke("add-employee", "101", "Luis", "Manager", "1")
        assert result.exit_code == 0, result.output

        result = invoke("employees-by-dept", "1")
        assert "Ana" in result.output
        assert "Luis" in result.output

    def test_add_duplicate_employee(self, invoke, seeded):
        result = invoke("add-employee", "100", "Bea", "Boss", "1")
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_find_missing_employee(self, invoke):
        result = invoke("find-employee", "5")
        assert result.exit_code == 1
        assert "No employee found with id 5" in result.output

    def test_update_employee_keeps_unset_fields(self, invoke, seeded):
        result = invoke("update-employee", "100", "--position", "Manager")
        assert result.exit_code == 0, result.output

        _, employees = _stored(seeded)
        assert employees[0].model_dump() == {
            "empno": 100,
            "name": "Ana",
            "position": "Manager",
            "depno": 1,
        }

    def test_update_department(self, invoke, seeded):
        result = invoke("update-department", "1", "--location", "Toledo")
        assert result.exit_code == 0, result.output

        departments, _ = _stored(seeded)
        assert departments[0].location == "Toledo"
        assert departments[0].name == "Sales"

    def test_blank_name_rejected(self, invoke):
        result = invoke("add-department", "1", "  ", "Madrid")
        assert result.exit_code == 1
        assert "cannot be empty" in result.output

    def test_delete_department_keeps_employees(self, invoke, seeded):
        result = invoke("delete-department", "1")
        assert result.exit_code == 0, result.output

        result = invoke("find-department", "1")
        assert result.exit_code == 1

        result = invoke("find-employee", "100")
        assert result.exit_code == 0
        assert "Ana" in result.output

    def test_delete_missing_employee(self, invoke):
        result = invoke("delete-employee", "1")
        assert result.exit_code == 1
        assert "No employee found" in result.output

    def test_employees_by_dept_empty(self, invoke, seeded):
        result = invoke("employees-by-dept", "2")
        assert result.exit_code == 0
        assert "There are no Employees in Department 2" in result.output

    def test_stats(self, invoke, seeded):
        result = invoke("stats")
        assert result.exit_code == 0
        assert "Departments: 1" in result.output
        assert "Employees: 1" in result.output
        assert "department 1: 1" in result.output


class TestMenu:
    def test_exit_immediately(self, invoke):
        result = invoke("menu", input="0\n")
        assert result.exit_code == 0
        assert "WELCOME TO THE COMPANY" in result.output
        assert "SEE YOU SOON" in result.output

    def test_end_of_input_leaves_menu(self, invoke):
        result = invoke("menu", input="")
        assert result.exit_code == 0
        assert "SEE YOU SOON" in result.output

    def test_add_department_then_list(self, invoke, temp_db_path):
        result = invoke("menu", input="8\n1\nSales\nMadrid\n6\n0\n")
        assert result.exit_code == 0, result.output
        assert "New Department added successfully!" in result.output
        assert "Madrid" in result.output

        departments, _ = _stored(temp_db_path)
        assert [d.depno for d in departments] == [1]

    def test_add_employee_to_missing_department(self, invoke, temp_db_path):
        result = invoke("menu", input="3\n100\nAna\nClerk\n9\n0\n")
        assert result.exit_code == 0
        assert "There is no Department with DEPNO 9" in result.output
        assert _stored(temp_db_path) == ([], [])

    def test_add_employee_duplicate_id(self, invoke, seeded):
        result = invoke("menu", input="3\n100\n0\n")
        assert result.exit_code == 0
        assert "There is already an Employee with the same ID" in result.output

    def test_update_employee_defaults_to_current_values(self, invoke, seeded):
        # Keep name and department, change the job
        result = invoke("menu", input="4\n100\n\nManager\n\n0\n")
        assert result.exit_code == 0, result.output
        assert "Employee has been successfully updated." in result.output

        _, employees = _stored(seeded)
        assert employees[0].name == "Ana"
        assert employees[0].position == "Manager"
        assert employees[0].depno == 1

    def test_find_missing_employee(self, invoke):
        result = invoke("menu", input="2\n55\n0\n")
        assert result.exit_code == 0
        assert "There is no Employee with EMPNO 55" in result.output

    def test_invalid_choices_keep_looping(self, invoke):
        result = invoke("menu", input="\nabc\n42\n0\n")
        assert result.exit_code == 0
        assert "Please indicate the option number" in result.output
        assert "The input must be an Integer value" in result.output
        assert "Please provide a valid option" in result.output
        assert "SEE YOU SOON" in result.output

    def test_unicode_digit_choice_reported(self, invoke):
        result = invoke("menu", input="²\n0\n")
        assert result.exit_code == 0, result.output
        assert "The input must be an Integer value" in result.output
        assert "SEE YOU SOON" in result.output

    def test_unicode_digit_id_reported(self, invoke):
        result = invoke("menu", input="7\n²\n0\n")
        assert result.exit_code == 0, result.output
        assert "Please provide a valid Department ID" in result.output
        assert "SEE YOU SOON" in result.output

    def test_three_digit_choice_is_unknown_option(self, invoke):
        result = invoke("menu", input="100\n0\n")
        assert result.exit_code == 0
        assert "Please provide a valid option" in result.output
        assert "The input must be an Integer value" not in result.output

    def test_non_numeric_id_reported(self, invoke):
        result = invoke("menu", input="7\nabc\n0\n")
        assert result.exit_code == 0
        assert "Please provide a valid Department ID" in result.output

    def test_delete_missing_department_reported(self, invoke):
        result = invoke("menu", input="10\n3\n0\n")
        assert result.exit_code == 0
        assert "No department found with id 3" in result.output

    def test_employees_by_department(self, invoke, seeded):
        result = invoke("menu", input="11\n1\n0\n")
        assert result.exit_code == 0
        assert "Ana" in result.output
        assert "Clerk" in result.output
