"""Integration tests for filtering, search and ordering on list endpoints."""

from __future__ import annotations

from datetime import timedelta

import pytest
from django.utils import timezone

from modules.clients.models import Client
from modules.orders.constants import OrderStatus
from modules.orders.models import Order

pytestmark = pytest.mark.integration


@pytest.fixture()
def order_batch(make_order, branch, other_branch, cargo_client):
    orders = [
        make_order(OrderStatus.PACKED, branch=branch, client=cargo_client, tracking_number="YT100000001"),
        make_order(OrderStatus.PACKED, branch=other_branch, tracking_number="SF200000002"),
        make_order(OrderStatus.ISSUED, branch=branch, tracking_number="LP300000003"),
    ]
    old = timezone.now() - timedelta(days=30)
    Order.objects.filter(pk=orders[2].pk).update(created_at=old)
    return orders


@pytest.fixture()
def client_batch():
    return [
        Client.objects.create(name="Алия", phone="+7 701 000 00 01", client_code=2001),
        Client.objects.create(name="Бауыржан", phone="+7 702 000 00 02", client_code=2002),
        Client.objects.create(name="Вера", phone="+7 703 000 00 03", client_code=2003),
    ]


def _tracking_numbers(response):
    return [o["tracking_number"] for o in response.json()["results"]]


class TestOrderFiltering:
    def test_filter_by_status(self, admin_client, order_batch):
        response = admin_client.get("/api/v1/orders/?status=PACKED")
        assert sorted(_tracking_numbers(response)) == ["SF200000002", "YT100000001"]

    def test_filter_by_branch(self, admin_client, order_batch, other_branch):
        response = admin_client.get(f"/api/v1/orders/?branch={other_branch.id}")
        assert _tracking_numbers(response) == ["SF200000002"]

    def test_filter_date_range(self, admin_client, order_batch):
        today = timezone.now().date().isoformat()
        response = admin_client.get(f"/api/v1/orders/?start_date={today}")
        assert "LP300000003" not in _tracking_numbers(response)

        last_week = (timezone.now() - timedelta(days=7)).date().isoformat()
        response = admin_client.get(f"/api/v1/orders/?end_date={last_week}")
        assert _tracking_numbers(response) == ["LP300000003"]

    def test_active_hides_closed_orders(self, admin_client, order_batch):
        response = admin_client.get("/api/v1/orders/?active=true")
        assert sorted(_tracking_numbers(response)) == ["SF200000002", "YT100000001"]

        response = admin_client.get("/api/v1/orders/?active=false")
        assert _tracking_numbers(response) == ["LP300000003"]

    def test_search_by_client_name(self, admin_client, order_batch, cargo_client):
        response = admin_client.get(f"/api/v1/orders/?search={cargo_client.name}")
        assert _tracking_numbers(response) == ["YT100000001"]

    def test_ordering_by_tracking_number(self, admin_client, order_batch):
        response = admin_client.get("/api/v1/orders/?ordering=tracking_number")
        assert _tracking_numbers(response) == ["LP300000003", "SF200000002", "YT100000001"]

    def test_default_ordering_newest_first(self, admin_client, order_batch):
        response = admin_client.get("/api/v1/orders/")
        assert _tracking_numbers(response)[-1] == "LP300000003"

    def test_combined_filters_pagination(self, admin_client, order_batch):
        response = admin_client.get(
            "/api/v1/orders/?status=packed&ordering=-tracking_number&page_size=1"
        )
        assert response.json()["count"] == 2
        assert _tracking_numbers(response) == ["YT100000001"]


class TestClientSearch:
    def test_search_by_code(self, admin_client, client_batch):
        response = admin_client.get("/api/v1/clients/?search=2002")
        assert [c["client_code"] for c in response.json()["results"]] == [2002]

    def test_ordering_by_code(self, admin_client, client_batch):
        response = admin_client.get("/api/v1/clients/?ordering=-client_code")
        assert [c["client_code"] for c in response.json()["results"]] == [2003, 2002, 2001]


class TestBranchSearch:
    def test_search_by_city(self, admin_client, branch, other_branch):
        response = admin_client.get("/api/v1/branches/?search=Астана")
        assert [b["code"] for b in response.json()] == ["AST-01"]
