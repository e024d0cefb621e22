from __future__ import annotations

from typing import ClassVar


class DataImportError(RuntimeError):
    """Base exception for failures of a provider import call."""

    http_status: ClassVar[int] = 500


class ImportParameterError(DataImportError, ValueError):
    """A required import parameter is missing or not a positive integer."""

    http_status: ClassVar[int] = 400

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class EntityUpsertError(DataImportError):
    """A bulk entity upsert failed at the database layer."""


class ServiceNotConfiguredError(DataImportError):
    """A collaborator or credential the import depends on is missing."""
