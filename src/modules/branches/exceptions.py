"""Branch domain exceptions."""

from __future__ import annotations


class BranchNotFound(Exception):
    """The requested branch does not exist or has been soft-deleted."""


class BranchAlreadyExists(Exception):
    """A branch with the same code is already registered."""
