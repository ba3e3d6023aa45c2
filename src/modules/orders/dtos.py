"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Serializers)
and the Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateOrderDTO``: input for registering a parcel.
- ``TransitionOrderDTO``: input for one status change attempt.

Output goes through the DRF serializers directly.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from modules.orders.constants import (
    TRACKING_NUMBER_MAX_LENGTH,
    TRACKING_NUMBER_MIN_LENGTH,
)


def normalize_tracking_number(value: str) -> str:
    return value.strip().upper()


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderDTO(BaseModel):
    """Immutable DTO for order registration at the China warehouse.

    Validates:
    - ``tracking_number`` is stripped, uppercased and 6-60 characters long.
    """

    model_config = ConfigDict(frozen=True)

    tracking_number: str
    client_id: Optional[UUID] = None
    branch_id: Optional[UUID] = None

    @field_validator("tracking_number")
    @classmethod
    def normalise_tracking_number(cls, v: str) -> str:
        v = normalize_tracking_number(v)
        if not TRACKING_NUMBER_MIN_LENGTH <= len(v) <= TRACKING_NUMBER_MAX_LENGTH:
            raise ValueError(
                f"Tracking number must be {TRACKING_NUMBER_MIN_LENGTH}-"
                f"{TRACKING_NUMBER_MAX_LENGTH} characters long."
            )
        return v


class TransitionOrderDTO(BaseModel):
    """Immutable DTO for a status change request.

    ``version`` is the order version the client last rendered; the change
    is only committed if nobody has advanced the order since.
    """

    model_config = ConfigDict(frozen=True)

    status: str
    version: int
    note: Optional[str] = None
    branch_id: Optional[UUID] = None

    @field_validator("version")
    @classmethod
    def version_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Version must be at least 1.")
        return v
