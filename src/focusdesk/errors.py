from __future__ import annotations

from typing import Optional


class StorageError(Exception):
    """Base class for every error raised by the document store and its commands."""


class DirectoryResolutionError(StorageError):
    """The host environment could not supply an application-data root."""

    def __init__(self, message: str = "unable to resolve the application data directory") -> None:
        super().__init__(message)


class IoError(StorageError):
    """
    A filesystem operation (read, write, copy, rename, mkdir) failed.

    Attributes:
        document: the logical document name involved, if any
    """

    def __init__(self, message: str, document: Optional[str] = None) -> None:
        self.document = document
        prefix = f"{document}: " if document else ""
        super().__init__(f"{prefix}{message}")


class CodecError(StorageError):
    """On-disk content could not be parsed into, or serialized from, the document shape."""

    def __init__(self, document: str, message: str) -> None:
        self.document = document
        super().__init__(f"{document}: {message}")


class NotFoundError(StorageError):
    """A command addressed an entity absent from the loaded collection."""

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class ValidationError(StorageError):
    """Caller input violates a business rule; raised before the store is touched."""
