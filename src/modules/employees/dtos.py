"""Employee DTOs for the Service Layer (Pydantic v2, immutable)."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from modules.employees.constants import EmployeeRole


class CreateEmployeeDTO(BaseModel):
    """Input for the admin "create employee" use-case.

    Validates:
    - ``role`` is one of the three back-office roles.
    - A ``branch_worker`` is always attached to a branch.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str
    email: str
    password: str
    role: str
    phone: str = ""
    branch_id: Optional[UUID] = None

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError("Invalid email address.")
        return v.lower()

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters long.")
        return v

    @field_validator("role")
    @classmethod
    def role_must_be_known(cls, v: str) -> str:
        if v not in EmployeeRole.values:
            raise ValueError(f"Unknown role {v!r}.")
        return v

    @model_validator(mode="after")
    def branch_worker_needs_branch(self):
        if self.role == EmployeeRole.BRANCH_WORKER and self.branch_id is None:
            raise ValueError("A branch worker must be attached to a branch.")
        return self
