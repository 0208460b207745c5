"""Infrastructure utilities for logging, config, locking, and the audit log."""

from .config import AppConfig, ServerConfig, StorageConfig, load_config
from .locks import PathLocks
from .logging import configure_logging
from .storage import AuditLog

__all__ = [
    "configure_logging",
    "load_config",
    "AppConfig",
    "ServerConfig",
    "StorageConfig",
    "PathLocks",
    "AuditLog",
]
