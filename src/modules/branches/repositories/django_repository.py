"""Django ORM implementation of the Branch repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.branches.models import Branch
from modules.branches.repositories.interfaces import IBranchRepository

logger = structlog.get_logger(__name__)


class BranchDjangoRepository(IBranchRepository):
    """Concrete Branch repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Branch]:
        """Retrieve a live branch; ``None`` for unknown or malformed IDs."""
        try:
            return Branch.objects.alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_code(self, code: str) -> Optional[Branch]:
        return Branch.objects.alive().filter(code=code).first()

    def exists(self, id: str) -> bool:
        try:
            return Branch.objects.alive().filter(id=id).exists()
        except (ValueError, ValidationError):
            return False

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Branch]:
        queryset = Branch.objects.alive()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset.order_by("name"))

    @transaction.atomic
    def save(self, entity: Branch) -> Branch:
        entity.save()
        logger.info("branch.saved", branch_id=str(entity.id))
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        branch = self.get_by_id(id)
        if not branch:
            return False
        branch.delete()
        logger.info("branch.soft_deleted", branch_id=str(id))
        return True
