"""Client model: the recipient of forwarded parcels.

Clients register through the Telegram bot and receive a numeric
``client_code`` that they write on parcels shipped to the China warehouse.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Client(BaseModel):
    name = models.CharField(max_length=255, blank=True, default="")
    phone = models.CharField(max_length=32, blank=True, default="")
    city = models.CharField(max_length=120, blank=True, default="")
    client_code = models.PositiveIntegerField(unique=True, null=True, blank=True)
    telegram_id = models.BigIntegerField(null=True, blank=True)
    language = models.CharField(max_length=8, default="ru")

    class Meta:
        db_table = "clients"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        code = self.client_code if self.client_code is not None else "-"
        return f"{self.name or 'Client'} #{code}"
