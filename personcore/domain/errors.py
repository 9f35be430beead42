# personcore/domain/errors.py
from __future__ import annotations

from typing import Dict, Optional


class PersonCoreError(Exception):
    """Base exception for the person module."""
    pass


class ValidationError(PersonCoreError):
    """
    Missing or malformed input. Raised before any write begins;
    `errors` maps field paths to a human-readable detail.
    """

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors: Dict[str, str] = dict(errors or {})

    @classmethod
    def for_field(cls, field: str, detail: str):
        return cls(detail, {field: detail})


class MissingNameError(ValidationError):
    pass


class InvalidDateError(ValidationError):
    pass


class InvalidEnumError(ValidationError):
    pass


class AmbiguousInputError(ValidationError):
    """Mutually exclusive nested inputs were both present (or both absent)."""
    pass


class AmbiguousRoleError(AmbiguousInputError):
    pass


class ReferenceNotFoundError(PersonCoreError):
    """A reference id did not resolve. Non-fatal for writes."""

    def __init__(self, category: str, reference_id: str) -> None:
        super().__init__(f"{category} reference not found: {reference_id}")
        self.category = category
        self.reference_id = reference_id


class PersonNotFoundError(PersonCoreError):
    def __init__(self, person_id: str) -> None:
        super().__init__(f"Person not found: {person_id}")
        self.person_id = person_id


class StorageError(PersonCoreError):
    """Persistence failed mid-transaction; nothing was applied."""
    pass


class CacheError(PersonCoreError):
    """Cache backend failure. Logged and swallowed, never surfaced."""
    pass
