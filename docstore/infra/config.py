"""Config loading for the document store and its HTTP server."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_CONFIG_PATH = "config/settings.yaml"


@dataclass
class StorageConfig:
    data_dir: str = "data"
    log_file: str = "log.txt"
    lock_paths: bool = False
    strict_presence: bool = False


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 5000
    owner: str = "docstore"


@dataclass
class AppConfig:
    storage: StorageConfig = field(default_factory=StorageConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load YAML settings, falling back to defaults when the file is missing."""

    resolved = Path(path or env_or_default("CONFIG_PATH", DEFAULT_CONFIG_PATH)).expanduser().resolve()
    if not resolved.exists():
        logging.getLogger(__name__).warning("Config file %s not found, using defaults", resolved)
        return AppConfig()

    with resolved.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    storage = raw.get("storage") or {}
    server = raw.get("server") or {}

    return AppConfig(
        storage=StorageConfig(
            data_dir=str(storage.get("data_dir", StorageConfig.data_dir)),
            log_file=str(storage.get("log_file", StorageConfig.log_file)),
            lock_paths=bool(storage.get("lock_paths", StorageConfig.lock_paths)),
            strict_presence=bool(storage.get("strict_presence", StorageConfig.strict_presence)),
        ),
        server=ServerConfig(
            host=server.get("host", ServerConfig.host),
            port=int(server.get("port", ServerConfig.port)),
            owner=server.get("owner", ServerConfig.owner),
        ),
    )


def env_or_default(key: str, default: str) -> str:
    return os.getenv(key, default)


__all__ = [
    "load_config",
    "AppConfig",
    "StorageConfig",
    "ServerConfig",
]
