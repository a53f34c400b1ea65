"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path

import pytest

from company_dao.database.models import Department, Employee
from company_dao.database.sqlmodel_dao import SQLModelDAO


@pytest.fixture
def temp_db_path():
    """Provide a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def dao(temp_db_path):
    """Create a connected SQLModelDAO on a fresh database."""
    dao = SQLModelDAO(temp_db_path)
    dao.connect()
    yield dao
    dao.close()


@pytest.fixture
def populated_dao(dao):
    """DAO holding two departments and three employees."""
    dao.add_department(Department(depno=1, name="Sales", location="Madrid"))
    dao.add_department(Department(depno=2, name="Research", location="Sevilla"))
    dao.add_employee(Employee(empno=100, name="Ana", position="Clerk", depno=1))
    dao.add_employee(Employee(empno=101, name="Luis", position="Manager", depno=1))
    dao.add_employee(Employee(empno=200, name="Marta", position="Analyst", depno=2))
    return dao
