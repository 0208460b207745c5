"""Single entry point bundling every store capability over one storage root."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from docstore.infra.config import StorageConfig
from docstore.infra.locks import PathLocks
from docstore.infra.storage import AuditLog
from docstore.store.aggregate import Aggregator
from docstore.store.documents import Document, DocumentStore
from docstore.store.setops import SetOperations


class Database:
    """The capability set consumed by the HTTP dispatcher."""

    def __init__(self, documents: DocumentStore) -> None:
        self.documents = documents
        self.aggregator = Aggregator(documents)
        self.setops = SetOperations(documents)

    @classmethod
    def open(
        cls,
        root: str | Path,
        log_file: str = "log.txt",
        lock_paths: bool = False,
        strict_presence: bool = False,
        audit: Optional[AuditLog] = None,
    ) -> "Database":
        root = Path(root)
        root.mkdir(parents=True, exist_ok=True)
        documents = DocumentStore(
            root,
            audit or AuditLog(root / log_file),
            locks=PathLocks(enabled=lock_paths),
            strict_presence=strict_presence,
        )
        return cls(documents)

    @classmethod
    def from_config(cls, config: StorageConfig) -> "Database":
        return cls.open(
            config.data_dir,
            log_file=config.log_file,
            lock_paths=config.lock_paths,
            strict_presence=config.strict_presence,
        )

    @property
    def root(self) -> Path:
        return self.documents.root

    @property
    def audit(self) -> AuditLog:
        return self.documents.audit

    async def get(self, file: str, key: str) -> Any:
        return await self.documents.get(file, key)

    async def set(self, file: str, key: str, value: Any) -> str:
        return await self.documents.set(file, key, value)

    async def remove(self, file: str, key: str) -> str:
        return await self.documents.remove(file, key)

    async def delete_file(self, file: str) -> str:
        return await self.documents.delete_file(file)

    async def create_file(self, file: str, content: Any) -> str:
        return await self.documents.create_file(file, content)

    async def reset(self) -> str:
        return await self.documents.reset()

    async def merge_data(self) -> Dict[str, Document]:
        return await self.aggregator.merge_data()

    async def union(self, file_a: str, file_b: str) -> List[str]:
        return await self.setops.union(file_a, file_b)

    async def intersect(self, file_a: str, file_b: str) -> List[str]:
        return await self.setops.intersect(file_a, file_b)

    async def difference(self, file_a: str, file_b: str) -> List[str]:
        return await self.setops.difference(file_a, file_b)


__all__ = ["Database"]
