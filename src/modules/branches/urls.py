"""Branch URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.branches.views import BranchViewSet

router = DefaultRouter(trailing_slash=True)
router.register("branches", BranchViewSet, basename="branch")

urlpatterns = router.urls
