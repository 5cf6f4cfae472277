"""Demo app — runs one update check against a local JSON document file.

Usage: python -m updatemanager [config.json] [documents.json]
"""

import asyncio
import logging
import os
import sys

from updatemanager.branding import AppBranding
from updatemanager.config.settings import ManagerConfig
from updatemanager.core.errors import UrlLaunchError
from updatemanager.core.manager import UpdateManager
from updatemanager.host.detector import PackageInfo
from updatemanager.store.json_file import JsonFileDocumentStore

DEFAULT_DATA_DIR = os.path.join(os.path.expanduser('~'), '.updatemanager')


def setup_logging(data_dir: str):
    """Configure logging to file and console."""
    log_dir = os.path.join(data_dir, 'logs')
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'updatemanager.log')

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(),
        ],
    )


def main():
    args = sys.argv[1:]
    config_path = args[0] if args else os.path.join(DEFAULT_DATA_DIR, 'config.json')
    documents_path = args[1] if len(args) > 1 else os.path.join(DEFAULT_DATA_DIR, 'documents.json')

    setup_logging(DEFAULT_DATA_DIR)
    logger = logging.getLogger(__name__)
    logger.info("%s demo starting", AppBranding.APP_NAME)

    config = ManagerConfig.load(config_path)
    if not config.app_name:
        config.app_name = AppBranding.APP_NAME

    from PyQt6.QtCore import QTimer
    from PyQt6.QtWidgets import QApplication, QLabel, QMainWindow
    from updatemanager.host.launcher import QtUrlLauncher
    from updatemanager.ui.update_dialog import QtDialogPresenter

    app = QApplication(sys.argv)
    app.setApplicationName(AppBranding.APP_NAME)

    window = QMainWindow()
    window.setWindowTitle(AppBranding.window_title())
    window.setMinimumSize(480, 240)
    status = QLabel(f"Installed version: {AppBranding.VERSION}")
    status.setContentsMargins(16, 16, 16, 16)
    window.setCentralWidget(status)
    window.show()

    manager = UpdateManager(
        JsonFileDocumentStore(documents_path),
        QtDialogPresenter(window),
        package_info=PackageInfo(version=AppBranding.VERSION),
        config=config,
        launcher=QtUrlLauncher(),
    )

    def run_check():
        try:
            decision = asyncio.run(manager.check_for_update())
        except UrlLaunchError as e:
            logger.error("Could not open store page: %s", e)
            status.setText(f"Could not open store page: {e}")
            return
        if decision.should_show:
            kind = "mandatory" if decision.is_force_update else "optional"
            status.setText(f"Update prompt shown ({kind})")
        else:
            status.setText("No update needed")

    QTimer.singleShot(0, run_check)

    exit_code = app.exec()
    logger.info("Goodbye")
    sys.exit(exit_code)


if __name__ == '__main__':
    main()
