"""Integration tests for ``POST /api/v1/orders/{id}/transition/``.

Covers:
- Happy path per role: status, version bump, history, audit.
- Error taxonomy → HTTP mapping, each with an untouched order row.
- Destination branch on arrival, problem reason, admin override.
- Stale version: the client's version is the one checked.
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.audit.models import AuditLogEntry
from modules.orders.constants import ORDER_STATUS_UPDATE_ACTION, OrderStatus
from modules.orders.models import Order, OrderHistoryEntry

pytestmark = pytest.mark.integration


def _url(order) -> str:
    return f"/api/v1/orders/{order.id}/transition/"


def _assert_untouched(order):
    fresh = Order.objects.get(pk=order.pk)
    assert fresh.status == order.status
    assert fresh.version == order.version
    assert fresh.history.count() == order.version


def _error_code(response) -> str:
    return response.json()["errors"][0]["code"]


# ===========================================================================
# Success
# ===========================================================================


class TestTransitionSuccess:
    def test_china_worker_receives_parcel(self, china_client, china_employee, make_order):
        order = make_order()

        response = china_client.post(
            _url(order), {"status": "arrived_cn", "version": 1}, format="json"
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "arrived_cn"
        assert data["version"] == 2
        assert data["history"][-1]["status"] == "arrived_cn"
        assert data["history"][-1]["changed_by_id"] == str(china_employee.id)
        assert data["available_actions"] == [{"status": "packed", "label": "Упакован"}]

    def test_writes_audit_entry(self, china_client, china_employee, make_order):
        order = make_order()

        china_client.post(
            _url(order), {"status": "arrived_cn", "version": 1, "note": "весы 2.1 кг"}, format="json"
        )

        entry = AuditLogEntry.objects.get(action=ORDER_STATUS_UPDATE_ACTION)
        assert entry.employee_id == china_employee.id
        assert entry.payload == {
            "order_id": str(order.id),
            "tracking_number": order.tracking_number,
            "old_status": "created",
            "new_status": "arrived_cn",
            "note": "весы 2.1 кг",
            "branch_id": None,
        }

    def test_branch_worker_issues_parcel(self, branch_client, make_order, branch):
        order = make_order(OrderStatus.READY_FOR_PICKUP, branch=branch, version=6)

        response = branch_client.post(
            _url(order), {"status": "issued", "version": 6}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["status"] == "issued"
        assert response.json()["available_actions"] == []

    def test_admin_override(self, admin_client, make_order):
        order = make_order(OrderStatus.ISSUED, version=7)

        response = admin_client.post(
            _url(order), {"status": "packed", "version": 7}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["status"] == "packed"


# ===========================================================================
# Arrival at a branch
# ===========================================================================


class TestArrival:
    def test_branch_worker_defaults_to_own_branch(self, branch_client, make_order, branch):
        order = make_order(OrderStatus.IN_TRANSIT, version=5)

        response = branch_client.post(
            _url(order), {"status": "arrived_branch", "version": 5}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["branch_id"] == str(branch.id)

    def test_admin_must_name_branch(self, admin_client, make_order):
        order = make_order(OrderStatus.IN_TRANSIT, version=5)

        response = admin_client.post(
            _url(order), {"status": "arrived_branch", "version": 5}, format="json"
        )

        assert response.status_code == 400
        assert _error_code(response) == "missing_branch"
        _assert_untouched(order)

    def test_admin_names_branch(self, admin_client, make_order, other_branch):
        order = make_order(OrderStatus.IN_TRANSIT, version=5)

        response = admin_client.post(
            _url(order),
            {"status": "arrived_branch", "version": 5, "branch_id": str(other_branch.id)},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["branch_id"] == str(other_branch.id)

    def test_branch_worker_receives_at_chosen_branch(
        self, branch_client, make_order, other_branch
    ):
        order = make_order(OrderStatus.IN_TRANSIT, version=5)

        response = branch_client.post(
            _url(order),
            {"status": "arrived_branch", "version": 5, "branch_id": str(other_branch.id)},
            format="json",
        )

        assert response.status_code == 200
        body = response.json()
        assert body["branch_id"] == str(other_branch.id)
        assert body["version"] == 6
        order.refresh_from_db()
        assert order.branch_id == other_branch.id

    def test_unknown_branch(self, admin_client, make_order):
        order = make_order(OrderStatus.IN_TRANSIT, version=5)

        response = admin_client.post(
            _url(order),
            {"status": "arrived_branch", "version": 5, "branch_id": str(uuid4())},
            format="json",
        )

        assert response.status_code == 404
        assert _error_code(response) == "branch_not_found"
        _assert_untouched(order)


# ===========================================================================
# Problem
# ===========================================================================


class TestProblem:
    def test_requires_reason(self, branch_client, make_order, branch):
        order = make_order(OrderStatus.ARRIVED_BRANCH, branch=branch, version=6)

        response = branch_client.post(
            _url(order), {"status": "problem", "version": 6, "note": "   "}, format="json"
        )

        assert response.status_code == 400
        assert _error_code(response) == "missing_reason"
        _assert_untouched(order)

    def test_reason_lands_in_history(self, china_client, make_order):
        order = make_order(OrderStatus.PACKED, version=3)

        response = china_client.post(
            _url(order),
            {"status": "problem", "version": 3, "note": "Коробка повреждена"},
            format="json",
        )

        assert response.status_code == 200
        entry = OrderHistoryEntry.objects.filter(order=order).last()
        assert entry.status == OrderStatus.PROBLEM
        assert entry.note == "Коробка повреждена"


# ===========================================================================
# Rejections
# ===========================================================================


class TestRejections:
    def test_unknown_status(self, admin_client, make_order):
        order = make_order()
        response = admin_client.post(_url(order), {"status": "lost", "version": 1}, format="json")
        assert response.status_code == 400
        assert _error_code(response) == "unknown_status"
        _assert_untouched(order)

    def test_illegal_transition(self, china_client, make_order):
        order = make_order()
        response = china_client.post(_url(order), {"status": "packed", "version": 1}, format="json")
        assert response.status_code == 409
        assert _error_code(response) == "illegal_transition"
        _assert_untouched(order)

    def test_role_not_permitted(self, china_client, make_order):
        order = make_order(OrderStatus.SENT_TO_KZ, version=4)
        response = china_client.post(
            _url(order), {"status": "in_transit", "version": 4}, format="json"
        )
        assert response.status_code == 403
        assert _error_code(response) == "role_not_permitted"
        _assert_untouched(order)

    def test_branch_mismatch(self, branch_client, make_order, other_branch):
        order = make_order(OrderStatus.READY_FOR_PICKUP, branch=other_branch, version=7)
        response = branch_client.post(_url(order), {"status": "issued", "version": 7}, format="json")
        assert response.status_code == 403
        assert _error_code(response) == "branch_mismatch"
        _assert_untouched(order)

    def test_stale_version(self, china_client, make_order):
        order = make_order(OrderStatus.ARRIVED_CN, version=2)
        response = china_client.post(_url(order), {"status": "packed", "version": 1}, format="json")
        assert response.status_code == 409
        assert response.json()["type"] == "conflict"
        assert _error_code(response) == "stale_version"
        _assert_untouched(order)

    def test_unknown_order(self, admin_client):
        response = admin_client.post(
            f"/api/v1/orders/{uuid4()}/transition/",
            {"status": "arrived_cn", "version": 1},
            format="json",
        )
        assert response.status_code == 404
        assert _error_code(response) == "order_not_found"

    @pytest.mark.parametrize("payload", [{"status": "packed"}, {"status": "packed", "version": 0}])
    def test_version_is_required(self, admin_client, make_order, payload):
        order = make_order()
        response = admin_client.post(_url(order), payload, format="json")
        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"
        assert response.json()["errors"][0]["field"] == "version"

    def test_non_positive_version_rejected_before_any_write(self, admin_client, make_order):
        order = make_order(OrderStatus.CREATED, version=1)

        response = admin_client.post(
            _url(order), {"status": "arrived_cn", "version": -3}, format="json"
        )

        assert response.status_code == 400
        error = response.json()["errors"][0]
        assert error["field"] == "version"
        assert "at least 1" in error["detail"]
        _assert_untouched(order)


# ===========================================================================
# Stale submissions after a concurrent change
# ===========================================================================


class TestSecondSubmission:
    def test_second_submit_of_same_version_is_stale(self, china_client, make_order):
        order = make_order()
        payload = {"status": "arrived_cn", "version": 1}

        first = china_client.post(_url(order), payload, format="json")
        second = china_client.post(_url(order), payload, format="json")

        assert first.status_code == 200
        assert second.status_code == 409
        assert _error_code(second) == "stale_version"
        order.refresh_from_db()
        assert order.version == 2
        assert order.history.count() == 2
