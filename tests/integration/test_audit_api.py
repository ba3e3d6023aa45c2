"""Integration tests for the audit log endpoint."""

from __future__ import annotations

import pytest

from modules.audit.models import AuditLogEntry
from modules.orders.constants import ORDER_CREATED_ACTION, ORDER_STATUS_UPDATE_ACTION

pytestmark = pytest.mark.integration

URL = "/api/v1/audit-logs/"


@pytest.fixture()
def entries(admin_employee, china_employee):
    return [
        AuditLogEntry.objects.create(
            employee=china_employee, action=ORDER_CREATED_ACTION, payload={"n": 1}
        ),
        AuditLogEntry.objects.create(
            employee=admin_employee, action=ORDER_STATUS_UPDATE_ACTION, payload={"n": 2}
        ),
    ]


class TestAuditApi:
    def test_admin_lists(self, admin_client, entries):
        response = admin_client.get(URL)
        assert response.status_code == 200
        assert response.json()["count"] == 2

    def test_filter_by_action(self, admin_client, entries):
        response = admin_client.get(URL, {"action": ORDER_STATUS_UPDATE_ACTION})
        results = response.json()["results"]
        assert [r["payload"] for r in results] == [{"n": 2}]

    def test_filter_by_employee(self, admin_client, entries, china_employee):
        response = admin_client.get(URL, {"employee": str(china_employee.id)})
        results = response.json()["results"]
        assert [r["employee_name"] for r in results] == [china_employee.name]

    def test_transition_shows_up(self, admin_client, make_order):
        order = make_order()
        admin_client.post(
            f"/api/v1/orders/{order.id}/transition/",
            {"status": "arrived_cn", "version": 1},
            format="json",
        )

        results = admin_client.get(URL, {"action": ORDER_STATUS_UPDATE_ACTION}).json()["results"]
        assert results[0]["payload"]["tracking_number"] == order.tracking_number

    @pytest.mark.parametrize("client_fixture", ["china_client", "branch_client"])
    def test_non_admin_forbidden(self, request, client_fixture):
        assert request.getfixturevalue(client_fixture).get(URL).status_code == 403
