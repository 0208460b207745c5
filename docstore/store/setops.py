"""Set algebra over the top-level keys of two documents.

Membership in ``intersect`` and ``difference`` follows the store's presence
rule: unless strict presence is on, a key whose value is empty ("", 0, false,
null) counts as absent. ``intersect`` is therefore asymmetric: it keeps keys
of the first document whose value in the second is non-empty.
"""

from __future__ import annotations

import asyncio
from typing import List, Tuple

from docstore.store.documents import Document, DocumentStore
from docstore.store.errors import FileNotFound

UNION_FILE = "union.txt"
INTERSECT_FILE = "intersect.txt"
DIFFERENCE_FILE = "difference.txt"


class SetOperations:
    """Computes key sets and writes each result to its own text file."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def union(self, file_a: str, file_b: str) -> List[str]:
        doc_a, doc_b = await self._read_pair(file_a, file_b)
        keys = list(dict.fromkeys([*doc_a, *doc_b]))
        return await self._publish(UNION_FILE, keys, file_a, file_b)

    async def intersect(self, file_a: str, file_b: str) -> List[str]:
        doc_a, doc_b = await self._read_pair(file_a, file_b)
        keys = [key for key in doc_a if self.store.has_value(doc_b, key)]
        return await self._publish(INTERSECT_FILE, keys, file_a, file_b)

    async def difference(self, file_a: str, file_b: str) -> List[str]:
        doc_a, doc_b = await self._read_pair(file_a, file_b)
        only_a = [key for key in doc_a if not self.store.has_value(doc_b, key)]
        only_b = [key for key in doc_b if not self.store.has_value(doc_a, key)]
        keys = list(dict.fromkeys(only_a + only_b))
        return await self._publish(DIFFERENCE_FILE, keys, file_a, file_b)

    async def _read_pair(self, file_a: str, file_b: str) -> Tuple[Document, Document]:
        try:
            return await self.store.read(file_a), await self.store.read(file_b)
        except (OSError, ValueError):
            await self.store.audit.fail(
                f"ERROR reading file or directory {file_a} or {file_b}",
                FileNotFound(f"{file_a} or {file_b}: File not found"),
            )

    async def _publish(self, output: str, keys: List[str], file_a: str, file_b: str) -> List[str]:
        path = self.store.resolve(output)
        await asyncio.to_thread(path.write_text, ",".join(keys), encoding="utf-8")
        await self.store.audit.log(f"{file_a} and {file_b}: {output} created")
        return keys


__all__ = ["SetOperations", "UNION_FILE", "INTERSECT_FILE", "DIFFERENCE_FILE"]
