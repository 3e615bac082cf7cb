"""Domain exceptions raised by services and caught by the app.

Each subclass is one distinguishable outcome of a perk operation.
Exception handlers in main.py translate them into the standard
error body: {"message": "..."}.
"""

from collections.abc import Sequence
from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationFailedError(DomainError):
    """Raised when client input breaks a rule the schema alone cannot express."""


class NotFoundError(DomainError):
    """Raised when no record matches the requested identifier."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found")


class ConflictError(DomainError):
    """Raised when an operation conflicts with existing state."""


class DuplicateKeyError(ConflictError):
    """Raised when a write violates the store's unique constraint."""


def describe_validation_errors(errors: Sequence[Any]) -> str:
    """Flatten pydantic error dicts into one human-readable message.

    ``body`` and ``query`` prefixes are dropped from the location so the
    message names the offending field only::

        title: String should have at least 2 characters
    """
    parts = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc)
        parts.append(f"{field}: {error['msg']}" if field else error["msg"])
    return "; ".join(parts)
