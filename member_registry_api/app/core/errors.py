"""
Error hierarchy for the member registry.

Every failure the registry reports to a client is a ``RegistryError``
carrying the HTTP status it maps to.  The JSON API turns these into
the error envelope, the HTML site renders them through the ``error``
template.  Validation and not‑found errors are expected and user
facing; storage and encoding errors are logged as failures.
"""

from fastapi import status


class RegistryError(Exception):
    """Base exception for all registry errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(RegistryError):
    """Missing or blank required field, or a malformed request body."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(RegistryError):
    """No record stored under the requested ID."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, member_id: str) -> None:
        super().__init__(f"no member with ID {member_id}")
        self.member_id = member_id


class StorageError(RegistryError):
    """Underlying database failure or an undecodable stored record."""


class EncodingError(RegistryError):
    """A response could not be serialized."""
