"""File-backed JSON documents: key mutation, file lifecycle, and reset.

Every operation re-reads its file from disk, mutates the parsed object in
memory, and writes the whole object back. Each call appends exactly one entry
to the audit log, and failures are raised as :class:`StoreError` subclasses
after being logged.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from docstore.infra.locks import PathLocks
from docstore.infra.storage import AuditLog
from docstore.store.errors import AlreadyExists, FileNotFound, InvalidKey

Document = Dict[str, Any]

SEED_DOCUMENTS: Dict[str, Document] = {
    "andrew.json": {
        "firstname": "Andrew",
        "lastname": "Maney",
        "email": "amaney@talentpath.com",
    },
    "scott.json": {
        "firstname": "Scott",
        "lastname": "Roberts",
        "email": "sroberts@talentpath.com",
        "username": "scoot",
    },
    "post.json": {
        "title": "Async/Await lesson",
        "description": "How to write asynchronous JavaScript",
        "date": "July 15, 2019",
    },
}


def is_empty(value: Any) -> bool:
    """Loose truthiness: null, false, zero, and "" are empty; lists and objects are not."""

    if value is None or isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return value == 0 or value != value
    if isinstance(value, str):
        return value == ""
    return False


def render(value: Any) -> str:
    if isinstance(value, str):
        return value
    return dumps(value)


def dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def load_document(path: Path) -> Document:
    parsed = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(parsed, dict):
        raise ValueError(f"{path.name} does not hold a JSON object")
    return parsed


def write_document(path: Path, document: Any) -> None:
    path.write_text(dumps(document), encoding="utf-8")


def create_document(path: Path, document: Any) -> None:
    payload = dumps(document)
    with path.open("x", encoding="utf-8") as f:
        f.write(payload)


class DocumentStore:
    """Read-modify-write operations over JSON files under ``root``."""

    def __init__(
        self,
        root: str | Path,
        audit: AuditLog,
        locks: Optional[PathLocks] = None,
        strict_presence: bool = False,
    ) -> None:
        self.root = Path(root)
        self.audit = audit
        self.locks = locks if locks is not None else PathLocks()
        self.strict_presence = strict_presence
        self.logger = logging.getLogger(__name__)

    def resolve(self, file: str) -> Path:
        """Map a caller-supplied relative name onto the storage root."""

        root = self.root.resolve()
        path = (root / file).resolve()
        if root not in path.parents:
            raise ValueError(f"{file} is outside the storage root")
        return path

    def has_value(self, document: Document, key: str) -> bool:
        if key not in document:
            return False
        return self.strict_presence or not is_empty(document[key])

    async def read(self, file: str) -> Document:
        """Parse ``file``; raises ``OSError`` or ``ValueError`` on failure."""

        path = self.resolve(file)
        return await asyncio.to_thread(load_document, path)

    async def get(self, file: str, key: str) -> Any:
        try:
            document = await self.read(file)
        except (OSError, ValueError):
            await self.audit.fail(
                f"ERROR no such file or directory {file}", FileNotFound(f"{file}: File not found")
            )

        if not self.has_value(document, key):
            await self.audit.fail(
                f"ERROR {key} invalid key on {file}", InvalidKey(f"{file}: Invalid key {key}")
            )

        value = document[key]
        await self.audit.log(render(value))
        return value

    async def set(self, file: str, key: str, value: Any) -> str:
        try:
            path = self.resolve(file)
            async with self.locks.hold(path):
                document = await asyncio.to_thread(load_document, path)
                document[key] = value
                await asyncio.to_thread(write_document, path, document)
        except (OSError, ValueError):
            await self.audit.fail(
                f"ERROR no such file or directory: {file}", FileNotFound(f"{file}: File not found")
            )

        message = f"{file}: {render(value)} wrote to {key}"
        await self.audit.log(message)
        return message

    async def remove(self, file: str, key: str) -> str:
        try:
            path = self.resolve(file)
            async with self.locks.hold(path):
                document = await asyncio.to_thread(load_document, path)
                document.pop(key, None)
                await asyncio.to_thread(write_document, path, document)
        except (OSError, ValueError):
            await self.audit.fail(
                f"ERROR no such file or directory: {file}", FileNotFound(f"{file}: File not found")
            )

        message = f"{file}: {key} removed"
        await self.audit.log(message)
        return message

    async def delete_file(self, file: str) -> str:
        try:
            path = self.resolve(file)
            async with self.locks.hold(path):
                await asyncio.to_thread(path.unlink)
        except (OSError, ValueError):
            await self.audit.fail(
                f"ERROR no such file or directory: {file}", FileNotFound(f"{file}: File not found")
            )

        message = f"{file}: deleted"
        await self.audit.log(message)
        return message

    async def create_file(self, file: str, content: Any) -> str:
        """Write ``content`` to a new file; an existing path is never overwritten."""

        try:
            path = self.resolve(file)
            async with self.locks.hold(path):
                await asyncio.to_thread(create_document, path, content)
        except FileExistsError:
            await self.audit.fail(
                f"ERROR file or directory already exists: {file}",
                AlreadyExists(f"{file}: File already exists"),
            )
        except (OSError, ValueError):
            await self.audit.fail(
                f"ERROR no such file or directory: {file}", FileNotFound(f"{file}: File not found")
            )

        message = f"{file}: created"
        await self.audit.log(message)
        return message

    async def reset(self) -> str:
        """Restore the seed documents and empty the audit log.

        Files outside the seed set are left alone.
        """

        await asyncio.gather(
            *(self._write_seed(name, document) for name, document in SEED_DOCUMENTS.items()),
            self.audit.truncate(),
        )
        self.logger.info("Store reset", extra={"event": "reset", "seeds": sorted(SEED_DOCUMENTS)})
        return "Database reset"

    async def _write_seed(self, name: str, document: Document) -> None:
        path = self.resolve(name)
        async with self.locks.hold(path):
            await asyncio.to_thread(write_document, path, document)


__all__ = [
    "DocumentStore",
    "Document",
    "SEED_DOCUMENTS",
    "is_empty",
    "render",
    "dumps",
    "load_document",
    "write_document",
]
