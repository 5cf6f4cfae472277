"""Host environment detection — platform tag and installed version."""

import asyncio
import logging
import sys
from importlib import metadata

from updatemanager.core.models import Platform

logger = logging.getLogger(__name__)


class PlatformDetector:
    """Maps the running interpreter to a document key."""

    @staticmethod
    def get_platform() -> str:
        """Return 'Android' on Android, 'Ios' everywhere else."""
        if sys.platform == 'android':
            return Platform.ANDROID
        return Platform.IOS


class PackageInfo:
    """Installed application version.

    Either a fixed version string, or the version of an installed
    distribution looked up through importlib.metadata.
    """

    def __init__(self, version: str | None = None, distribution: str | None = None):
        if version is None and distribution is None:
            raise ValueError("PackageInfo needs a version or a distribution name")
        self._version = version
        self._distribution = distribution

    async def get_version(self) -> str:
        if self._version is not None:
            return self._version
        version = await asyncio.to_thread(metadata.version, self._distribution)
        logger.debug("Distribution %s is at version %s", self._distribution, version)
        return version
