"""Optional per-path mutual exclusion for read-modify-write cycles."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import AsyncIterator, Dict


@dataclass
class PathLocks:
    """``asyncio.Lock`` per resolved path, held only while someone uses it.

    Each entry counts its holders and waiters and is dropped when the last one
    leaves. When ``enabled`` is false, ``hold`` is a no-op and callers race freely.
    """

    enabled: bool = False
    _locks: Dict[Path, asyncio.Lock] = field(default_factory=dict, init=False, repr=False)
    _users: Dict[Path, int] = field(default_factory=dict, init=False, repr=False)

    @asynccontextmanager
    async def hold(self, path: Path) -> AsyncIterator[None]:
        if not self.enabled:
            yield
            return

        lock = self._locks.get(path)
        if lock is None:
            lock = self._locks[path] = asyncio.Lock()
        self._users[path] = self._users.get(path, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[path] -= 1
            if not self._users[path]:
                del self._users[path]
                del self._locks[path]

    def __len__(self) -> int:
        return len(self._locks)


__all__ = ["PathLocks"]
