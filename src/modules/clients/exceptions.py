"""Client domain exceptions."""

from __future__ import annotations


class ClientNotFound(Exception):
    """The requested client does not exist."""
