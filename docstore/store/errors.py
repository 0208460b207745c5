"""Failure kinds reported by the document store."""

from __future__ import annotations


class StoreError(Exception):
    """Recoverable per-request failure carrying a human-readable message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class FileNotFound(StoreError):
    """A document could not be read, parsed, or unlinked."""


class InvalidKey(StoreError):
    """A key lookup hit a missing or empty value."""


class AlreadyExists(StoreError):
    """Create was asked for a path that is already present."""


class ParseError(StoreError):
    """A request body was not valid JSON."""


class DirectoryReadError(StoreError):
    """The storage directory could not be listed."""


__all__ = [
    "StoreError",
    "FileNotFound",
    "InvalidKey",
    "AlreadyExists",
    "ParseError",
    "DirectoryReadError",
]
