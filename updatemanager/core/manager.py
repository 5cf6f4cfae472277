"""Update orchestrator — fetch, resolve, prompt, launch.

Architecture:
  resolver       — pure decision logic (no I/O)
  UpdateManager  — async sequencing around injected collaborators:
                   DocumentStore, DialogPresenter, UrlLauncher,
                   PackageInfo and a platform detector callable

Each check_for_update() call is independent: a fresh fetch, a fresh
decision, no shared state. Operational failures end the cycle quietly.
"""

import logging

from updatemanager.config.settings import ManagerConfig
from updatemanager.core.errors import UrlLaunchError
from updatemanager.core.models import Platform, PlatformDocument, UpdateDecision
from updatemanager.core.resolver import resolve
from updatemanager.host.detector import PackageInfo, PlatformDetector
from updatemanager.host.launcher import BrowserLauncher, UrlLauncher, store_url
from updatemanager.store.base import DocumentStore, sample_documents
from updatemanager.ui.presenter import DEFAULT_APP_NAME, DialogPresenter, UpdatePrompt

logger = logging.getLogger(__name__)


class UpdateManager:
    """Checks the remote version document and prompts for an update."""

    def __init__(self, store: DocumentStore, presenter: DialogPresenter, *,
                 package_info: PackageInfo,
                 config: ManagerConfig | None = None,
                 launcher: UrlLauncher | None = None,
                 platform_detector=None):
        self.store = store
        self.presenter = presenter
        self.package_info = package_info
        self.config = config or ManagerConfig()
        self.launcher = launcher or BrowserLauncher()
        self._detect_platform = platform_detector or PlatformDetector.get_platform

    # ── Check ────────────────────────────────────────────────────────

    async def check_for_update(self) -> UpdateDecision:
        """Run one update check.

        Never raises for network or data problems; those are logged and
        yield a no-update decision. Only a failure to open the store URL,
        after the user picked "Update Now", propagates (UrlLaunchError).
        """
        logger.info("Starting update check")

        if self.config.auto_setup:
            await self.auto_setup()

        try:
            current_version = await self.package_info.get_version()
            logger.info("Current app version: %s", current_version)

            platform = self._detect_platform()
            logger.info("Platform detected: %s", platform)

            document = await self.fetch_document(platform)
        except Exception as e:
            logger.warning("Update check failed: %s", e)
            return UpdateDecision.no_update()

        if document is None:
            logger.info("No version document for platform %s", platform)
            return UpdateDecision.no_update()

        decision = resolve(current_version, document)
        if not decision.should_show:
            logger.info("No matching version entry, no update needed")
            return decision

        logger.info("Update required (forceUpdate: %s)", decision.is_force_update)
        await self._show_update_dialog(decision, platform, document)
        return decision

    async def fetch_document(self, platform: str) -> PlatformDocument | None:
        """Fetch and parse the document for a platform key."""
        data = await self.store.get(self.config.collection, platform)
        if data is None:
            return None
        document = PlatformDocument.from_dict(data)
        logger.debug("Using %s schema with %d version entries",
                     document.schema, len(document.versions))
        return document

    # ── Dialog ───────────────────────────────────────────────────────

    async def _show_update_dialog(self, decision: UpdateDecision, platform: str,
                                  document: PlatformDocument):
        if not self.presenter.can_present():
            logger.info("UI host unavailable, skipping update dialog")
            return

        async def on_update():
            await self.launch_store(platform, document)

        async def on_later():
            logger.info("Update postponed by user")

        allow_later = self.config.show_later_button and not decision.is_force_update
        prompt = UpdatePrompt(
            is_force_update=decision.is_force_update,
            app_name=self.config.app_name or DEFAULT_APP_NAME,
            on_update=on_update,
            on_later=on_later if allow_later else None,
        )
        await self.presenter.present(prompt)

    # ── Launch ───────────────────────────────────────────────────────

    def resolve_store_url(self, platform: str,
                          document: PlatformDocument | None = None) -> str:
        """Store URL for a platform; document IDs win over configured ones."""
        android_id = (document.android_id if document else None) or self.config.android_id
        ios_id = (document.ios_id if document else None) or self.config.ios_id
        return store_url(platform, android_id=android_id, ios_id=ios_id)

    async def launch_store(self, platform: str, document: PlatformDocument | None = None):
        """Open the store page. Raises UrlLaunchError if it can't be opened."""
        url = self.resolve_store_url(platform, document)
        logger.info("Launching URL: %s", url)
        if not await self.launcher.open(url):
            raise UrlLaunchError(url)

    # ── Setup ────────────────────────────────────────────────────────

    async def auto_setup(self):
        """Write sample documents for both platforms.

        Destructive: replaces whatever is stored under the collection's
        Android and Ios keys. Run it once, then turn auto_setup off.
        """
        logger.warning("Auto setup enabled, overwriting %s/%s and %s/%s",
                       self.config.collection, Platform.ANDROID,
                       self.config.collection, Platform.IOS)
        try:
            for key, fields in sample_documents().items():
                await self.store.set(self.config.collection, key, fields)
        except Exception as e:
            logger.warning("Auto setup failed: %s", e)
            return

        logger.info("Sample documents created in collection %s", self.config.collection)
        logger.warning("Set auto_setup to False now to avoid overwriting your data")
