"""Local JSON file store — development stand-in for the remote store.

File layout: {"<collection>": {"<key>": {...document...}}}
"""

import asyncio
import json
import logging
import os

from updatemanager.store.base import DocumentStore

logger = logging.getLogger(__name__)


class JsonFileDocumentStore(DocumentStore):
    """Reads and rewrites a single JSON file on every call."""

    def __init__(self, path: str):
        self.path = path

    def _read(self) -> dict:
        if not os.path.isfile(self.path):
            return {}
        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path}: top level must be an object")
        return data

    def _write(self, data: dict):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = self.path + '.tmp'
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, self.path)

    def _get(self, collection: str, key: str) -> dict | None:
        return self._read().get(collection, {}).get(key)

    def _set(self, collection: str, key: str, fields: dict):
        data = self._read()
        data.setdefault(collection, {})[key] = fields
        self._write(data)
        logger.info("Wrote %s/%s to %s", collection, key, self.path)

    async def get(self, collection: str, key: str) -> dict | None:
        return await asyncio.to_thread(self._get, collection, key)

    async def set(self, collection: str, key: str, fields: dict):
        await asyncio.to_thread(self._set, collection, key, fields)
