"""In-process document store."""

import copy

from updatemanager.store.base import DocumentStore


class MemoryDocumentStore(DocumentStore):
    """Dict-backed store. Documents are deep-copied in and out."""

    def __init__(self, documents: dict[str, dict[str, dict]] | None = None):
        self._collections = copy.deepcopy(documents) if documents else {}

    async def get(self, collection: str, key: str) -> dict | None:
        doc = self._collections.get(collection, {}).get(key)
        return copy.deepcopy(doc) if doc is not None else None

    async def set(self, collection: str, key: str, fields: dict):
        self._collections.setdefault(collection, {})[key] = copy.deepcopy(fields)

    def snapshot(self) -> dict[str, dict[str, dict]]:
        return copy.deepcopy(self._collections)
