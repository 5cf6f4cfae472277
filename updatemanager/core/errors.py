"""Exceptions raised by the update manager."""


class UpdateManagerError(Exception):
    """Base class for all update manager errors."""


class DocumentError(UpdateManagerError, ValueError):
    """Remote version document has an unexpected shape."""


class UrlLaunchError(UpdateManagerError, RuntimeError):
    """Store URL could not be opened."""

    def __init__(self, url: str):
        super().__init__(f"Could not launch {url}")
        self.url = url
