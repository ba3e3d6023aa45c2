"""Fixtures for the Playwright e2e suite.

These tests talk to an already running server over HTTP:

    pytest -m e2e --base-url http://localhost:8000

Employees are created through ``manage.py shell`` against the same
database the server uses.
"""

from __future__ import annotations

import subprocess
from typing import Generator
from uuid import uuid4

import pytest
from playwright.sync_api import APIRequestContext, Playwright

TOKEN_URL = "/api/v1/auth/token/"


@pytest.fixture(scope="session")
def base_url(request) -> str:
    return request.config.getoption("base_url") or "http://localhost:8000"


@pytest.fixture(autouse=True)
def _use_db() -> None:
    """No pytest-django database here; the server owns it."""


@pytest.fixture(scope="session")
def api_request_context(
    playwright: Playwright, base_url: str
) -> Generator[APIRequestContext, None, None]:
    context = playwright.request.new_context(base_url=base_url)
    yield context
    context.dispose()


def _manage_shell(*statements: str) -> None:
    subprocess.run(
        ["python", "src/manage.py", "shell", "-c", "; ".join(statements)],
        check=True,
        capture_output=True,
        text=True,
    )


def create_employee(email: str, password: str, role: str = "admin") -> None:
    _manage_shell(
        "from modules.branches.repositories.django_repository import BranchDjangoRepository",
        "from modules.employees.dtos import CreateEmployeeDTO",
        "from modules.employees.repositories.django_repository import EmployeeDjangoRepository",
        "from modules.employees.services import EmployeeService",
        "EmployeeService(EmployeeDjangoRepository(), BranchDjangoRepository()).create_employee("
        f"CreateEmployeeDTO(name='E2E', email={email!r}, password={password!r}, role={role!r}))",
    )


def deactivate_employee(email: str) -> None:
    _manage_shell(
        "from django.contrib.auth import get_user_model",
        "from modules.employees.models import Employee",
        f"Employee.objects.filter(email={email!r}).update(is_active=False)",
        f"get_user_model().objects.filter(username={email!r}).update(is_active=False)",
    )


@pytest.fixture()
def auth_credentials() -> Generator[tuple[str, str], None, None]:
    """Login of a throwaway admin employee.

    Orders keep a reference to their creator, so the employee is
    deactivated afterwards instead of deleted.
    """
    email = f"e2e-{uuid4().hex[:8]}@cargo.test"
    password = "testpass123"
    create_employee(email, password)
    try:
        yield email, password
    finally:
        deactivate_employee(email)


@pytest.fixture()
def auth_token(api_request_context, auth_credentials) -> str:
    username, password = auth_credentials
    response = api_request_context.post(
        TOKEN_URL, data={"username": username, "password": password}
    )
    assert response.status == 200
    return response.json()["access"]


@pytest.fixture()
def deactivate():
    return deactivate_employee
