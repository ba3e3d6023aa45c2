"""Integration tests for order history tracking through the service.

Walks a parcel through the whole pipeline with the employees who own
each step and checks that the history mirrors the status changes.
"""

from __future__ import annotations

import pytest

from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO
from modules.orders.exceptions import RoleNotPermitted
from modules.orders.models import OrderHistoryEntry

pytestmark = pytest.mark.integration


@pytest.fixture()
def registered(order_service, china_actor, cargo_client):
    return order_service.create_order(
        CreateOrderDTO(tracking_number="YT3000000001", client_id=cargo_client.id),
        china_actor,
    )


class TestHistoryTracking:
    def test_creation_writes_single_entry(self, registered, china_employee):
        entry = registered.history.get()
        assert entry.status == OrderStatus.CREATED
        assert entry.changed_by_id == china_employee.id

    def test_full_pipeline(
        self, order_service, registered, china_actor, admin_actor, branch_actor, branch
    ):
        steps = [
            (china_actor, OrderStatus.ARRIVED_CN),
            (china_actor, OrderStatus.PACKED),
            (china_actor, OrderStatus.SENT_TO_KZ),
            (admin_actor, OrderStatus.IN_TRANSIT),
            (branch_actor, OrderStatus.ARRIVED_BRANCH),
            (branch_actor, OrderStatus.READY_FOR_PICKUP),
            (branch_actor, OrderStatus.ISSUED),
        ]
        order = registered
        for actor, target in steps:
            order = order_service.attempt_transition(order, target, actor)

        assert order.status == OrderStatus.ISSUED
        assert order.branch_id == branch.id
        assert order.version == len(steps) + 1
        assert [h.status for h in order.history.all()] == ["created"] + [
            str(target) for _, target in steps
        ]

    def test_history_count_tracks_version(
        self, order_service, registered, china_actor
    ):
        order = order_service.attempt_transition(registered, OrderStatus.ARRIVED_CN, china_actor)
        order = order_service.attempt_transition(
            order, OrderStatus.PROBLEM, china_actor, note="Не совпадает вес"
        )

        assert order.history.count() == order.version == 3
        assert OrderHistoryEntry.objects.filter(order=order).last().note == "Не совпадает вес"

    def test_rejected_attempt_writes_nothing(
        self, order_service, registered, branch_actor
    ):
        with pytest.raises(RoleNotPermitted):
            order_service.attempt_transition(registered, OrderStatus.ARRIVED_CN, branch_actor)

        assert registered.history.count() == 1
