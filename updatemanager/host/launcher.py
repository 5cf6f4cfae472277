"""Store URLs and the capability that opens them."""

import asyncio
import logging
import webbrowser
from abc import ABC, abstractmethod

from updatemanager.core.models import Platform
from updatemanager.store.base import DEFAULT_ANDROID_ID, DEFAULT_IOS_ID

logger = logging.getLogger(__name__)

PLAY_STORE_URL = "https://play.google.com/store/apps/details?id={}"
APP_STORE_URL = "https://apps.apple.com/app/id{}"


def store_url(platform: str, android_id: str | None = None,
              ios_id: str | None = None) -> str:
    """Build the store page URL, falling back to the placeholder IDs."""
    if platform == Platform.ANDROID:
        return PLAY_STORE_URL.format(android_id or DEFAULT_ANDROID_ID)
    return APP_STORE_URL.format(ios_id or DEFAULT_IOS_ID)


class UrlLauncher(ABC):
    """Opens a URL outside the application."""

    @abstractmethod
    async def open(self, url: str) -> bool:
        """Return True if the URL was handed to a browser or store app."""


class BrowserLauncher(UrlLauncher):
    """Opens URLs with the standard webbrowser module."""

    async def open(self, url: str) -> bool:
        opened = await asyncio.to_thread(webbrowser.open, url)
        if not opened:
            logger.warning("No browser could open %s", url)
        return opened


class QtUrlLauncher(UrlLauncher):
    """Opens URLs through QDesktopServices (requires a QApplication)."""

    async def open(self, url: str) -> bool:
        from PyQt6.QtCore import QUrl
        from PyQt6.QtGui import QDesktopServices
        return QDesktopServices.openUrl(QUrl(url))
