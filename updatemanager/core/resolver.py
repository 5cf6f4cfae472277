"""Version resolver: decides whether an update dialog is shown.

Pure functions, no I/O. List order is significant for both schemas: the
first decisive record wins, and no semantic version ordering is applied.
"""

import logging

from updatemanager.core.models import (
    PlatformDocument, Schema, UpdateDecision, base_version,
)

logger = logging.getLogger(__name__)


def versions_match(record_version: str, installed: str) -> bool:
    """Three-tier match between a document version and the installed one.

    A build suffix is only compared when both sides carry one; when a single
    side omits it, the base versions are compared instead.
    """
    if record_version == installed:
        return True

    record_has_build = '+' in record_version
    installed_has_build = '+' in installed

    if not record_has_build and installed_has_build:
        return record_version == base_version(installed)
    if record_has_build and not installed_has_build:
        return base_version(record_version) == installed
    return False


def resolve_simplified(installed: str, versions) -> UpdateDecision:
    for record in versions:
        if versions_match(record.version, installed):
            logger.debug("Version %s matches record %s (forceUpdate: %s)",
                         installed, record.version, record.force_update)
            return UpdateDecision(True, record.force_update, record)
    return UpdateDecision.no_update()


def resolve_legacy(installed: str, versions, discontinued=frozenset()) -> UpdateDecision:
    if installed in discontinued:
        logger.debug("Version %s is discontinued", installed)
        return UpdateDecision(True, True)

    installed_base = base_version(installed)

    for record in versions:
        if record.is_discontinued and base_version(record.version) == installed_base:
            logger.debug("Version %s flagged discontinued by record %s",
                         installed, record.version)
            return UpdateDecision(True, True, record)

    for record in versions:
        if base_version(record.version) != installed_base:
            logger.debug("Version %s differs from listed %s",
                         installed, record.version)
            return UpdateDecision(True, record.force_update, record)

    return UpdateDecision.no_update()


def resolve(installed: str, document: PlatformDocument) -> UpdateDecision:
    """Return the update decision for an installed version string."""
    if document.schema == Schema.SIMPLIFIED:
        return resolve_simplified(installed, document.versions)
    return resolve_legacy(installed, document.versions, document.discontinued_versions)
