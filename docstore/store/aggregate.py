"""Merge every JSON document in the storage root into one keyed document."""

from __future__ import annotations

import asyncio
import os
from typing import Dict, List

from docstore.store.documents import Document, DocumentStore, load_document, write_document
from docstore.store.errors import DirectoryReadError

MERGED_FILE = "merged.json"
MANIFEST_PREFIX = "package"


class Aggregator:
    """Builds ``merged.json`` from the per-file documents."""

    def __init__(self, store: DocumentStore, output: str = MERGED_FILE) -> None:
        self.store = store
        self.output = output

    def candidates(self, names: List[str]) -> List[str]:
        """Filter a directory listing down to mergeable document names."""

        return [
            name
            for name in sorted(names)
            if name.endswith(".json") and not name.startswith(MANIFEST_PREFIX) and name != self.output
        ]

    async def merge_data(self) -> Dict[str, Document]:
        try:
            names = await asyncio.to_thread(os.listdir, self.store.root)
        except OSError:
            await self.store.audit.fail(
                "ERROR reading directory", DirectoryReadError(f"{self.store.root}: Unable to read directory")
            )

        merged: Dict[str, Document] = {}
        for name in self.candidates(names):
            try:
                merged[name[: -len(".json")]] = await asyncio.to_thread(load_document, self.store.root / name)
            except (OSError, ValueError):
                # A bad file is skipped, not fatal to the merge.
                await self.store.audit.log(f"ERROR reading file or directory: {name}")

        await asyncio.to_thread(write_document, self.store.resolve(self.output), merged)
        await self.store.audit.log(f"{self.output} created")
        return merged


__all__ = ["Aggregator", "MERGED_FILE"]
