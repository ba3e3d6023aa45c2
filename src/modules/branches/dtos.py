"""Branch DTOs for the Service Layer (Pydantic v2, immutable)."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class CreateBranchDTO(BaseModel):
    """Input for branch registration.

    ``code`` is normalised to uppercase; an empty code is stored as ``None``.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str
    city: str
    address: str
    phone: str
    code: Optional[str] = None
    two_gis_link: str = ""

    @field_validator("name", "city", "address", "phone")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v:
            raise ValueError("Field must not be blank.")
        return v

    @field_validator("code")
    @classmethod
    def normalise_code(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip().upper()
