import unittest
from unittest import mock

from updatemanager.config.settings import ManagerConfig
from updatemanager.core.errors import UrlLaunchError
from updatemanager.core.manager import UpdateManager
from updatemanager.core.models import Platform
from updatemanager.host.detector import PackageInfo
from updatemanager.host.launcher import UrlLauncher
from updatemanager.store.base import DEFAULT_COLLECTION, DocumentStore
from updatemanager.store.memory import MemoryDocumentStore
from updatemanager.ui.presenter import CallbackPresenter


class RecordingLauncher(UrlLauncher):
    def __init__(self, result: bool = True):
        self.result = result
        self.opened = []

    async def open(self, url: str) -> bool:
        self.opened.append(url)
        return self.result


class FailingStore(DocumentStore):
    async def get(self, collection, key):
        raise ConnectionError("backend unavailable")

    async def set(self, collection, key, fields):
        raise ConnectionError("backend unavailable")


def make_manager(documents=None, choice=None, version="1.0.0+1",
                 platform=Platform.ANDROID, store=None, launcher=None,
                 available=True, **config):
    prompts = []

    def renderer(prompt):
        prompts.append(prompt)
        return choice

    if store is None:
        store = MemoryDocumentStore({DEFAULT_COLLECTION: documents or {}})
    manager = UpdateManager(
        store,
        CallbackPresenter(renderer, is_available=lambda: available),
        package_info=PackageInfo(version=version),
        config=ManagerConfig(**config),
        launcher=launcher or RecordingLauncher(),
        platform_detector=lambda: platform,
    )
    return manager, prompts


class CheckForUpdateTests(unittest.IsolatedAsyncioTestCase):
    async def test_no_document_for_platform(self) -> None:
        manager, prompts = make_manager(documents={
            Platform.IOS: {'versions': [{'version': "1.0.0", 'forceUpdate': True}]},
        })
        decision = await manager.check_for_update()
        self.assertFalse(decision.should_show)
        self.assertEqual(prompts, [])

    async def test_matching_version_shows_prompt(self) -> None:
        manager, prompts = make_manager(
            documents={Platform.ANDROID: {
                'versions': [{'version': "1.0.0", 'forceUpdate': False}],
            }},
            app_name="Acme",
            show_later_button=True,
        )
        decision = await manager.check_for_update()
        self.assertTrue(decision.should_show)
        self.assertEqual(len(prompts), 1)
        self.assertFalse(prompts[0].is_force_update)
        self.assertEqual(prompts[0].app_name, "Acme")
        self.assertIsNotNone(prompts[0].on_later)

    async def test_force_update_has_no_later_action(self) -> None:
        manager, prompts = make_manager(
            documents={Platform.ANDROID: {
                'versions': [{'version': "1.0.0+1", 'forceUpdate': True}],
            }},
            show_later_button=True,
        )
        await manager.check_for_update()
        self.assertTrue(prompts[0].is_force_update)
        self.assertIsNone(prompts[0].on_later)
        self.assertEqual(prompts[0].app_name, "App")

    async def test_later_disabled_by_config(self) -> None:
        manager, prompts = make_manager(documents={Platform.ANDROID: {
            'versions': [{'version': "1.0.0", 'forceUpdate': False}],
        }})
        await manager.check_for_update()
        self.assertIsNone(prompts[0].on_later)

    async def test_later_choice_does_not_launch(self) -> None:
        launcher = RecordingLauncher()
        manager, _ = make_manager(
            documents={Platform.ANDROID: {'versions': [{'version': "1.0.0"}]}},
            choice=CallbackPresenter.LATER,
            launcher=launcher,
            show_later_button=True,
        )
        await manager.check_for_update()
        self.assertEqual(launcher.opened, [])

    async def test_update_choice_prefers_document_store_id(self) -> None:
        launcher = RecordingLauncher()
        manager, _ = make_manager(
            documents={Platform.ANDROID: {
                'androidId': "com.remote.app",
                'versions': [{'version': "1.0.0", 'forceUpdate': True}],
            }},
            choice=CallbackPresenter.UPDATE,
            launcher=launcher,
            android_id="com.local.app",
        )
        await manager.check_for_update()
        self.assertEqual(launcher.opened,
                         ["https://play.google.com/store/apps/details?id=com.remote.app"])

    async def test_update_choice_falls_back_to_configured_id(self) -> None:
        launcher = RecordingLauncher()
        manager, _ = make_manager(
            documents={Platform.IOS: {'versions': [{'version': "1.0.0"}]}},
            choice=CallbackPresenter.UPDATE,
            launcher=launcher,
            platform=Platform.IOS,
            ios_id="555",
        )
        await manager.check_for_update()
        self.assertEqual(launcher.opened, ["https://apps.apple.com/app/id555"])

    async def test_launch_failure_propagates(self) -> None:
        manager, _ = make_manager(
            documents={Platform.ANDROID: {'versions': [{'version': "1.0.0"}]}},
            choice=CallbackPresenter.UPDATE,
            launcher=RecordingLauncher(result=False),
        )
        with self.assertRaises(UrlLaunchError) as ctx:
            await manager.check_for_update()
        self.assertIn("com.example.myapp", ctx.exception.url)

    async def test_store_failure_is_swallowed(self) -> None:
        manager, prompts = make_manager(store=FailingStore())
        with self.assertLogs("updatemanager.core.manager", level="WARNING"):
            decision = await manager.check_for_update()
        self.assertFalse(decision.should_show)
        self.assertEqual(prompts, [])

    async def test_malformed_document_is_swallowed(self) -> None:
        manager, prompts = make_manager(documents={
            Platform.ANDROID: {'versions': "1.0.0"},
        })
        decision = await manager.check_for_update()
        self.assertFalse(decision.should_show)
        self.assertEqual(prompts, [])

    async def test_version_lookup_failure_is_swallowed(self) -> None:
        manager, _ = make_manager()
        manager.package_info = PackageInfo(distribution="surely-not-installed-dist-xyz")
        decision = await manager.check_for_update()
        self.assertFalse(decision.should_show)

    async def test_unavailable_host_skips_dialog(self) -> None:
        manager, prompts = make_manager(
            documents={Platform.ANDROID: {'versions': [{'version': "1.0.0"}]}},
            available=False,
        )
        decision = await manager.check_for_update()
        self.assertTrue(decision.should_show)
        self.assertEqual(prompts, [])


class AutoSetupTests(unittest.IsolatedAsyncioTestCase):
    async def test_auto_setup_overwrites_both_platforms(self) -> None:
        store = MemoryDocumentStore({DEFAULT_COLLECTION: {
            Platform.ANDROID: {'versions': [{'version': "9.9.9"}], 'custom': True},
        }})
        manager, _ = make_manager(store=store)
        await manager.auto_setup()

        docs = store.snapshot()[DEFAULT_COLLECTION]
        self.assertEqual(docs[Platform.ANDROID], {
            'androidId': "com.example.myapp",
            'versions': [{'version': "0.0.1+1", 'forceUpdate': True}],
        })
        self.assertEqual(docs[Platform.IOS]['iosId'], "123456789")

    async def test_check_runs_auto_setup_first(self) -> None:
        manager, prompts = make_manager(version="0.0.1+1", auto_setup=True)
        decision = await manager.check_for_update()
        self.assertTrue(decision.should_show)
        self.assertTrue(decision.is_force_update)
        self.assertEqual(len(prompts), 1)

    async def test_auto_setup_failure_does_not_block_check(self) -> None:
        manager, _ = make_manager(store=FailingStore(), auto_setup=True)
        with mock.patch.object(manager, "fetch_document",
                               mock.AsyncMock(return_value=None)) as fetch:
            decision = await manager.check_for_update()
        fetch.assert_awaited_once_with(Platform.ANDROID)
        self.assertFalse(decision.should_show)


class StoreUrlTests(unittest.TestCase):
    def test_placeholder_when_no_ids(self) -> None:
        manager, _ = make_manager()
        self.assertEqual(manager.resolve_store_url(Platform.ANDROID),
                         "https://play.google.com/store/apps/details?id=com.example.myapp")
        self.assertEqual(manager.resolve_store_url(Platform.IOS),
                         "https://apps.apple.com/app/id123456789")


if __name__ == "__main__":
    unittest.main()
