import itertools

import pytest
from django.contrib.auth import get_user_model

from rest_framework.test import APIClient

from modules.audit.services import AuditTrail
from modules.branches.models import Branch
from modules.branches.repositories.django_repository import BranchDjangoRepository
from modules.clients.models import Client
from modules.clients.repositories.django_repository import ClientDjangoRepository
from modules.employees.constants import EmployeeRole
from modules.employees.models import Employee
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderHistoryEntry
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService

User = get_user_model()

_sequence = itertools.count(1)


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Branches / clients
# ---------------------------------------------------------------------------


@pytest.fixture()
def branch():
    return Branch.objects.create(
        name="Алматы Центр",
        city="Алматы",
        address="пр. Абая 10",
        phone="+7 727 100 00 01",
        code="ALA-01",
    )


@pytest.fixture()
def other_branch():
    return Branch.objects.create(
        name="Астана",
        city="Астана",
        address="ул. Сыганак 5",
        phone="+7 717 200 00 02",
        code="AST-01",
    )


@pytest.fixture()
def cargo_client():
    return Client.objects.create(
        name="Асель", phone="+7 701 111 22 33", city="Алматы", client_code=1001
    )


# ---------------------------------------------------------------------------
# Employees
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_employee():
    def _make(role, branch=None, name=None):
        n = next(_sequence)
        email = f"{role}-{n}@cargo.test"
        user = User.objects.create_user(username=email, email=email, password="pass12345")
        return Employee.objects.create(
            user=user,
            name=name or f"{role} {n}",
            email=email,
            role=role,
            branch=branch,
        )

    return _make


@pytest.fixture()
def admin_employee(make_employee):
    return make_employee(EmployeeRole.ADMIN)


@pytest.fixture()
def china_employee(make_employee):
    return make_employee(EmployeeRole.CHINA_WORKER)


@pytest.fixture()
def branch_employee(make_employee, branch):
    return make_employee(EmployeeRole.BRANCH_WORKER, branch=branch)


@pytest.fixture()
def admin_actor(admin_employee):
    return admin_employee.to_actor()


@pytest.fixture()
def china_actor(china_employee):
    return china_employee.to_actor()


@pytest.fixture()
def branch_actor(branch_employee):
    return branch_employee.to_actor()


@pytest.fixture()
def client_for():
    """APIClient force-authenticated as the given employee's user."""

    def _client(employee):
        client = APIClient()
        client.force_authenticate(user=employee.user)
        return client

    return _client


@pytest.fixture()
def admin_client(client_for, admin_employee):
    return client_for(admin_employee)


@pytest.fixture()
def china_client(client_for, china_employee):
    return client_for(china_employee)


@pytest.fixture()
def branch_client(client_for, branch_employee):
    return client_for(branch_employee)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


@pytest.fixture()
def order_service():
    return OrderService(
        order_repository=OrderDjangoRepository(),
        branch_repository=BranchDjangoRepository(),
        client_repository=ClientDjangoRepository(),
        audit_trail=AuditTrail(),
    )


@pytest.fixture()
def make_order():
    """Create an order directly in the given status.

    The history holds one entry per version so the history/version
    invariant holds for fixtures too.
    """

    def _make(status=OrderStatus.CREATED, branch=None, client=None, version=1, tracking_number=None):
        order = Order.objects.create(
            tracking_number=tracking_number or f"TRK{next(_sequence):08d}",
            status=status,
            branch=branch,
            client=client,
            version=version,
        )
        for _ in range(version):
            OrderHistoryEntry.objects.create(order=order, status=status)
        return order

    return _make
