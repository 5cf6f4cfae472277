"""Version document data models.

Wire format (one document per platform, collection "AppUpdateManager"):

    {
      "androidId": "com.example.myapp",
      "versions": [{"version": "1.2.0+5", "forceUpdate": false}],
      "discontinuedVersions": ["1.0.0+1"]      # legacy schema only
    }
"""

from dataclasses import dataclass, field

from updatemanager.core.errors import DocumentError


class Platform:
    ANDROID = "Android"
    IOS = "Ios"

    ALL = (ANDROID, IOS)


class Schema:
    SIMPLIFIED = "simplified"
    LEGACY = "legacy"


def base_version(version: str) -> str:
    """Strip a trailing +BUILD suffix: '1.0.0+3' -> '1.0.0'."""
    return version.split('+', 1)[0]


def _flag(raw: dict, key: str) -> bool:
    value = raw.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise DocumentError(f"'{key}' must be a boolean, got {value!r}")
    return value


@dataclass(frozen=True)
class VersionRecord:
    """One entry of a document's versions list."""

    version: str
    force_update: bool = False
    is_discontinued: bool = False    # Legacy schema only

    @staticmethod
    def from_dict(raw: dict) -> 'VersionRecord':
        if not isinstance(raw, dict):
            raise DocumentError(f"Version record must be a mapping, got {raw!r}")
        version = raw.get('version')
        if not isinstance(version, str):
            raise DocumentError(f"Version record without a version string: {raw!r}")
        return VersionRecord(
            version=version,
            force_update=_flag(raw, 'forceUpdate'),
            is_discontinued=_flag(raw, 'isDiscontinued'),
        )

    def to_dict(self) -> dict:
        data = {'version': self.version, 'forceUpdate': self.force_update}
        if self.is_discontinued:
            data['isDiscontinued'] = True
        return data


@dataclass(frozen=True)
class PlatformDocument:
    """Snapshot of the remote document for one platform."""

    schema: str = Schema.LEGACY
    versions: tuple[VersionRecord, ...] = ()
    discontinued_versions: frozenset[str] = field(default_factory=frozenset)
    android_id: str | None = None
    ios_id: str | None = None

    @staticmethod
    def from_dict(data: dict) -> 'PlatformDocument':
        """Parse a wire document and classify its schema.

        A versions list whose records carry forceUpdate flags always wins;
        legacy fields are then ignored. Without such flags the document is
        legacy as soon as a legacy marker (discontinuedVersions, or a
        record-level isDiscontinued) is present.
        """
        if not isinstance(data, dict):
            raise DocumentError(f"Document must be a mapping, got {type(data).__name__}")

        raw_versions = data.get('versions', [])
        if raw_versions is None:
            raw_versions = []
        if not isinstance(raw_versions, list):
            raise DocumentError("'versions' must be a list")
        versions = tuple(VersionRecord.from_dict(r) for r in raw_versions)

        has_inline_flags = any('forceUpdate' in r for r in raw_versions)
        has_legacy_markers = (
            'discontinuedVersions' in data
            or any(r.is_discontinued for r in versions)
        )
        simplified = 'versions' in data and (has_inline_flags or not has_legacy_markers)

        android_id = data.get('androidId') or None
        ios_id = data.get('iosId') or None

        if simplified:
            return PlatformDocument(
                schema=Schema.SIMPLIFIED,
                versions=versions,
                android_id=android_id,
                ios_id=ios_id,
            )

        raw_discontinued = data.get('discontinuedVersions') or []
        if not isinstance(raw_discontinued, list) or not all(
                isinstance(v, str) for v in raw_discontinued):
            raise DocumentError("'discontinuedVersions' must be a list of strings")

        return PlatformDocument(
            schema=Schema.LEGACY,
            versions=versions,
            discontinued_versions=frozenset(raw_discontinued),
            android_id=android_id,
            ios_id=ios_id,
        )


@dataclass(frozen=True)
class UpdateDecision:
    """Resolver output. is_force_update is meaningless when should_show is False."""

    should_show: bool
    is_force_update: bool = False
    record: VersionRecord | None = None    # Record that decided, for logging

    @staticmethod
    def no_update() -> 'UpdateDecision':
        return UpdateDecision(should_show=False)
