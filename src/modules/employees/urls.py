"""Employee URL configuration."""

from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from modules.employees.views import EmployeeViewSet, MeView

router = DefaultRouter(trailing_slash=True)
router.register("employees", EmployeeViewSet, basename="employee")

urlpatterns = [
    path("me", MeView.as_view(), name="current_actor"),
    *router.urls,
]
