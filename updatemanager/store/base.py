"""Remote document store interface."""

from abc import ABC, abstractmethod

from updatemanager.core.models import Platform

DEFAULT_COLLECTION = "AppUpdateManager"

DEFAULT_ANDROID_ID = "com.example.myapp"
DEFAULT_IOS_ID = "123456789"


def sample_documents() -> dict[str, dict]:
    """Documents written by auto-setup: one mandatory sample version per platform."""
    return {
        Platform.ANDROID: {
            'androidId': DEFAULT_ANDROID_ID,
            'versions': [{'version': '0.0.1+1', 'forceUpdate': True}],
        },
        Platform.IOS: {
            'iosId': DEFAULT_IOS_ID,
            'versions': [{'version': '0.0.1+1', 'forceUpdate': True}],
        },
    }


class DocumentStore(ABC):
    """Key-value document store addressed by collection and document key."""

    @abstractmethod
    async def get(self, collection: str, key: str) -> dict | None:
        """Return the document fields, or None if the document doesn't exist."""

    @abstractmethod
    async def set(self, collection: str, key: str, fields: dict):
        """Overwrite the document with fields (no merge)."""
