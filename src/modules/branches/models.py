"""Branch model: a physical pickup location in Kazakhstan.

Branches scope the authority of branch workers: a worker may only hand
out parcels that arrived at their own branch.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import SoftDeleteModel


class Branch(SoftDeleteModel):
    """Pickup point that receives parcels and issues them to clients.

    ``code`` is the short internal identifier printed on labels (e.g.
    ``ALA-01``).  It is optional but unique when present; MySQL/PostgreSQL
    and SQLite all allow several NULLs in a UNIQUE column.
    """

    name = models.CharField(max_length=255)
    city = models.CharField(max_length=120)
    address = models.TextField()
    phone = models.CharField(max_length=32)
    code = models.CharField(max_length=20, unique=True, null=True, blank=True)
    two_gis_link = models.URLField(max_length=500, blank=True, default="")

    class Meta:
        db_table = "branches"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["city"], name="branches_city_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.city})"
