"""Integration tests for JWT authentication and employee gating.

Validates:
  - /health is public (plain Django view, no DRF).
  - Protected DRF endpoints return 401 without or with a bad token.
  - SimpleJWT token pair works end to end against ``/api/v1/me``.
  - An authenticated user without an employee profile gets 403.
"""

import pytest
from django.contrib.auth import get_user_model

pytestmark = pytest.mark.integration

User = get_user_model()


class TestPublicEndpoints:
    def test_health_is_public(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestProtectedEndpoints:
    """All DRF endpoints require a valid JWT by default (Fail Closed)."""

    def test_no_token_returns_401(self, api_client):
        response = api_client.get("/api/v1/me")
        assert response.status_code == 401

    def test_invalid_token_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer invalid.token.here")
        response = api_client.get("/api/v1/me")
        assert response.status_code == 401

    def test_malformed_auth_header_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Token some-token")
        response = api_client.get("/api/v1/orders/")
        assert response.status_code == 401

    def test_empty_bearer_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer ")
        response = api_client.get("/api/v1/me")
        assert response.status_code == 401

    def test_401_includes_www_authenticate_header(self, api_client):
        response = api_client.get("/api/v1/me")
        assert "Bearer" in response.get("WWW-Authenticate", "")


class TestTokenFlow:
    def test_token_pair_authenticates_employee(self, api_client, branch_employee):
        response = api_client.post(
            "/api/v1/auth/token/",
            {"username": branch_employee.email, "password": "pass12345"},
            format="json",
        )
        assert response.status_code == 200
        access = response.json()["access"]

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        me = api_client.get("/api/v1/me")

        assert me.status_code == 200
        assert me.json()["role"] == "branch_worker"

    def test_wrong_password(self, api_client, branch_employee):
        response = api_client.post(
            "/api/v1/auth/token/",
            {"username": branch_employee.email, "password": "wrong-password"},
            format="json",
        )
        assert response.status_code == 401

    def test_deactivated_employee_cannot_log_in(self, api_client, admin_client, china_employee):
        admin_client.delete(f"/api/v1/employees/{china_employee.id}/")

        response = api_client.post(
            "/api/v1/auth/token/",
            {"username": china_employee.email, "password": "pass12345"},
            format="json",
        )
        assert response.status_code == 401


class TestEmployeeGate:
    def test_user_without_profile_is_forbidden(self, api_client):
        user = User.objects.create_user(username="outsider", password="pass12345")
        api_client.force_authenticate(user=user)

        response = api_client.get("/api/v1/orders/")

        assert response.status_code == 403
        assert response.json()["type"] == "permission_error"
