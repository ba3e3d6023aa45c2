"""Employee domain exceptions."""

from __future__ import annotations


class EmployeeNotFound(Exception):
    """The requested employee does not exist or has been deactivated."""


class EmployeeAlreadyExists(Exception):
    """An employee (or auth user) with the same email is already registered."""


class NotAnEmployee(Exception):
    """The authenticated user has no active employee profile."""
