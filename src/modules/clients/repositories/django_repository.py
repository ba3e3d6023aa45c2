"""Django ORM implementation of the Client repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.clients.models import Client
from modules.clients.repositories.interfaces import IClientRepository

logger = structlog.get_logger(__name__)


class ClientDjangoRepository(IClientRepository):
    def get_by_id(self, id: str) -> Optional[Client]:
        try:
            return Client.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_code(self, client_code: int) -> Optional[Client]:
        return Client.objects.filter(client_code=client_code).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = Client.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Client) -> Client:
        entity.save()
        logger.info("client.saved", client_id=str(entity.id))
        return entity

    def delete(self, id: str) -> bool:
        deleted, _ = Client.objects.filter(id=id).delete()
        return bool(deleted)
