"""Client repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.clients.models import Client


class IClientRepository(IRepository["Client"]):
    @abstractmethod
    def get_by_code(self, client_code: int) -> Optional[Client]:
        """Retrieve a client by the code written on their parcels."""
