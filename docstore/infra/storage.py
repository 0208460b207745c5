"""Append-only text audit log shared by every store operation."""

from __future__ import annotations

import asyncio
import logging
import os
import time
from pathlib import Path
from typing import Callable, NoReturn, Optional


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


def flatten(text: str) -> str:
    return " ".join(text.splitlines())


class AuditLog:
    """Timestamped line log, one ``<message> <millis>`` entry per operation.

    Entries are written with a single ``O_APPEND`` write, so concurrent writers
    never split an entry.
    """

    def __init__(
        self,
        path: str | Path,
        clock: Callable[[], int] = epoch_millis,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.clock = clock
        self.logger = logger or logging.getLogger("docstore.audit")

    async def log(self, message: str, error: Optional[BaseException] = None) -> None:
        """Append ``message``; when ``error`` is given, record it and re-raise it."""

        if error is not None:
            await self.fail(message, error)
        await self._record(message)
        self.logger.info(message, extra={"event": "audit"})

    async def fail(self, message: str, error: BaseException) -> NoReturn:
        """Append ``message`` with the error description on the next line, then raise ``error``."""

        await self._record(message, error)
        self.logger.warning(message, extra={"event": "audit_error", "error": str(error)})
        raise error

    async def _record(self, message: str, error: Optional[BaseException] = None) -> None:
        entry = f"{flatten(message)} {self.clock()}\n"
        if error is not None:
            entry += flatten(str(error)) + "\n"
        await asyncio.to_thread(self._append, entry.encode("utf-8"))

    async def truncate(self) -> None:
        await asyncio.to_thread(self.path.write_bytes, b"")

    def read_lines(self) -> list[str]:
        if not self.path.exists():
            return []
        return self.path.read_text(encoding="utf-8").splitlines()

    def _append(self, payload: bytes) -> None:
        fd = os.open(self.path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, 0o644)
        try:
            os.write(fd, payload)
        finally:
            os.close(fd)


__all__ = ["AuditLog", "epoch_millis", "flatten"]
