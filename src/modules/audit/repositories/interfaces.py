"""Audit log repository interface (append-only)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from modules.audit.models import AuditLogEntry


class IAuditLogRepository(ABC):
    """Insert and query audit entries.  There is no update or delete."""

    @abstractmethod
    def record(
        self, employee_id: Optional[str], action: str, payload: Dict[str, Any]
    ) -> AuditLogEntry:
        """Append one audit entry."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None):
        """List entries, newest first."""
