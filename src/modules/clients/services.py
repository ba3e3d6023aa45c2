"""Client service layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.clients.exceptions import ClientNotFound

if TYPE_CHECKING:
    from modules.clients.models import Client
    from modules.clients.repositories.interfaces import IClientRepository


class ClientService:
    def __init__(self, repository: IClientRepository) -> None:
        self._repo = repository

    def get_client(self, id: str) -> Client:
        """Raises ``ClientNotFound`` for unknown IDs."""
        client = self._repo.get_by_id(id)
        if not client:
            raise ClientNotFound(f"Client {id} not found.")
        return client

    def list_clients(self):
        return self._repo.list()
