"""Cloud Firestore adapter.

Requires the ``firestore`` extra (google-cloud-firestore). The client
library is imported when the store is constructed so the rest of the
package stays usable without it.
"""

import logging

from updatemanager.store.base import DocumentStore

logger = logging.getLogger(__name__)


class FirestoreDocumentStore(DocumentStore):
    """DocumentStore backed by google.cloud.firestore.AsyncClient."""

    def __init__(self, client=None, project: str | None = None):
        if client is None:
            from google.cloud import firestore
            client = firestore.AsyncClient(project=project)
        self._client = client

    async def get(self, collection: str, key: str) -> dict | None:
        snapshot = await self._client.collection(collection).document(key).get()
        logger.debug("Firestore %s/%s exists: %s", collection, key, snapshot.exists)
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    async def set(self, collection: str, key: str, fields: dict):
        await self._client.collection(collection).document(key).set(fields)
