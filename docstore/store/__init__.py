"""File-backed JSON document store."""

from .aggregate import Aggregator
from .database import Database
from .documents import SEED_DOCUMENTS, DocumentStore
from .errors import AlreadyExists, DirectoryReadError, FileNotFound, InvalidKey, ParseError, StoreError
from .setops import SetOperations

__all__ = [
    "Database",
    "DocumentStore",
    "Aggregator",
    "SetOperations",
    "SEED_DOCUMENTS",
    "StoreError",
    "FileNotFound",
    "InvalidKey",
    "AlreadyExists",
    "ParseError",
    "DirectoryReadError",
]
