"""Branch service layer (Use Cases)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.branches.exceptions import BranchAlreadyExists, BranchNotFound
from modules.branches.models import Branch

if TYPE_CHECKING:
    from modules.branches.dtos import CreateBranchDTO
    from modules.branches.repositories.interfaces import IBranchRepository

logger = structlog.get_logger(__name__)


class BranchService:
    """Application service for Branch use-cases."""

    def __init__(self, repository: IBranchRepository) -> None:
        self._repo = repository

    @transaction.atomic
    def create_branch(self, dto: CreateBranchDTO) -> Branch:
        """Register a new pickup branch.

        Raises:
            BranchAlreadyExists: the label code is already taken.
        """
        if dto.code and self._repo.get_by_code(dto.code):
            logger.warning("branch.duplicate_code", code=dto.code)
            raise BranchAlreadyExists(f"Branch code {dto.code} already registered.")

        branch = Branch(
            name=dto.name,
            city=dto.city,
            address=dto.address,
            phone=dto.phone,
            code=dto.code,
            two_gis_link=dto.two_gis_link,
        )
        branch = self._repo.save(branch)
        logger.info("branch.created", branch_id=str(branch.id), city=branch.city)
        return branch

    def list_branches(self, filters: Optional[Dict[str, Any]] = None) -> List[Branch]:
        return self._repo.list(filters)

    def get_branch(self, id: str) -> Branch:
        """Raises ``BranchNotFound`` for unknown IDs."""
        branch = self._repo.get_by_id(id)
        if not branch:
            raise BranchNotFound(f"Branch {id} not found.")
        return branch
