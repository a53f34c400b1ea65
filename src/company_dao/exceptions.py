"""Data-access exceptions.

These are storage-level errors, not console errors. The console driver
(``company_dao.main``) catches ``CompanyDAOError`` and turns it into a
message for the user.
"""

from __future__ import annotations


class CompanyDAOError(Exception):
    """Base class for every error raised by the data-access layer."""


class NotFoundError(CompanyDAOError, LookupError):
    """Raised when a lookup, update or delete targets a key that is not stored."""

    def __init__(self, entity: str, key: int) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"No {entity} found with id {key}")


class StoreConnectionError(CompanyDAOError):
    """Raised when the store is not open or the database file cannot be used."""


class ValidationError(CompanyDAOError, ValueError):
    """Raised for malformed identity values or record fields."""


class DuplicateKeyError(ValidationError):
    """Raised when adding a record whose key is already stored."""

    def __init__(self, entity: str, key: int) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"A {entity} with id {key} already exists")
