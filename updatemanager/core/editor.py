"""Editable view of both platform documents, for admin screens.

Loads the Android and Ios documents, lets a UI add/remove/edit version
entries and store IDs, reports unsaved changes, and writes everything
back in the simplified schema.
"""

import copy
import logging

from packaging.version import InvalidVersion, Version

from updatemanager.core.errors import DocumentError
from updatemanager.core.models import Platform
from updatemanager.store.base import DEFAULT_COLLECTION, DocumentStore

logger = logging.getLogger(__name__)


def validate_version_string(version: str) -> str | None:
    """Return an error message, or None if version is MAJOR.MINOR.PATCH[+BUILD]."""
    if not version.strip():
        return "version is empty"
    try:
        parsed = Version(version)
    except InvalidVersion:
        return f"'{version}' is not a valid version"
    if len(parsed.release) != 3 or parsed.pre or parsed.post or parsed.dev or parsed.epoch:
        return f"'{version}' must look like MAJOR.MINOR.PATCH[+BUILD]"
    if str(parsed) != version:
        return f"'{version}' is not in canonical form (expected '{parsed}')"
    return None


class VersionConfigEditor:

    def __init__(self, store: DocumentStore, collection: str = DEFAULT_COLLECTION):
        self._store = store
        self._collection = collection
        self.android_id = ""
        self.ios_id = ""
        self.versions: dict[str, list[dict]] = {p: [] for p in Platform.ALL}
        self._original = self._state()

    def _state(self) -> dict:
        return {
            'androidId': self.android_id,
            'iosId': self.ios_id,
            'versions': copy.deepcopy(self.versions),
        }

    async def load(self):
        android = await self._store.get(self._collection, Platform.ANDROID) or {}
        ios = await self._store.get(self._collection, Platform.IOS) or {}

        self.android_id = android.get('androidId') or ""
        self.ios_id = ios.get('iosId') or ""
        self.versions = {
            Platform.ANDROID: [self._entry(r) for r in android.get('versions') or []],
            Platform.IOS: [self._entry(r) for r in ios.get('versions') or []],
        }
        self._original = self._state()
        logger.info("Loaded %d Android and %d iOS version entries",
                    len(self.versions[Platform.ANDROID]), len(self.versions[Platform.IOS]))

    @staticmethod
    def _entry(raw) -> dict:
        if not isinstance(raw, dict):
            raise DocumentError(f"Version record must be a mapping, got {raw!r}")
        return {
            'version': raw.get('version') or "",
            'forceUpdate': bool(raw.get('forceUpdate', False)),
        }

    # ── Editing ──────────────────────────────────────────────────────

    def add_version(self, platform: str, version: str = "", force_update: bool = False) -> int:
        entries = self.versions[platform]
        entries.append({'version': version, 'forceUpdate': force_update})
        return len(entries) - 1

    def remove_version(self, platform: str, index: int):
        del self.versions[platform][index]

    def set_version(self, platform: str, index: int, version: str):
        self.versions[platform][index]['version'] = version.strip()

    def set_force_update(self, platform: str, index: int, force_update: bool):
        self.versions[platform][index]['forceUpdate'] = force_update

    def has_changes(self) -> bool:
        return self._state() != self._original

    def validate(self) -> list[str]:
        problems = []
        for platform in Platform.ALL:
            seen = set()
            for i, entry in enumerate(self.versions[platform]):
                error = validate_version_string(entry['version'])
                if error:
                    problems.append(f"{platform} #{i + 1}: {error}")
                elif entry['version'] in seen:
                    problems.append(f"{platform} #{i + 1}: duplicate version {entry['version']}")
                seen.add(entry['version'])
        return problems

    # ── Persistence ──────────────────────────────────────────────────

    async def save(self):
        """Overwrite both documents. Raises DocumentError if validation fails."""
        problems = self.validate()
        if problems:
            raise DocumentError("; ".join(problems))

        await self._store.set(self._collection, Platform.ANDROID, {
            'androidId': self.android_id,
            'versions': copy.deepcopy(self.versions[Platform.ANDROID]),
        })
        await self._store.set(self._collection, Platform.IOS, {
            'iosId': self.ios_id,
            'versions': copy.deepcopy(self.versions[Platform.IOS]),
        })
        self._original = self._state()
        logger.info("Saved version configuration to %s", self._collection)
