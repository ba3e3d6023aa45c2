"""``manage.py seed_data`` development fixtures.

Covers:
- Branches, employees (one per role), clients and orders are created.
- Orders are walked through the real service: history length == version.
- Running twice does not duplicate anything.
"""

from io import StringIO

import pytest
from django.core.management import call_command

from modules.branches.models import Branch
from modules.clients.models import Client
from modules.employees.constants import EmployeeRole
from modules.employees.models import Employee
from modules.orders.models import Order

pytestmark = pytest.mark.integration


def _seed(orders=6):
    out = StringIO()
    call_command("seed_data", orders=orders, stdout=out)
    return out.getvalue()


class TestSeedData:
    def test_creates_reference_data(self):
        output = _seed()

        assert "Seed completed" in output
        assert Branch.objects.alive().count() == 3
        assert Client.objects.count() == 4
        assert set(Employee.objects.values_list("role", flat=True)) == {
            EmployeeRole.ADMIN,
            EmployeeRole.CHINA_WORKER,
            EmployeeRole.BRANCH_WORKER,
        }

    def test_orders_have_consistent_history(self):
        _seed()

        assert Order.objects.count() == 6
        for order in Order.objects.prefetch_related("history"):
            assert len(order.history.all()) == order.version

    def test_idempotent(self):
        _seed()
        _seed()

        assert Branch.objects.count() == 3
        assert Employee.objects.count() == 3
        assert Order.objects.count() == 6
