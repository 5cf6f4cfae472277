"""Default update dialog — minimal PyQt6 skin for the presenter contract."""

import logging

from PyQt6 import sip
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QApplication, QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
)

from updatemanager.ui.presenter import (
    DIALOG_TITLE, DialogPresenter, UpdatePrompt, dialog_message,
)

logger = logging.getLogger(__name__)


class UpdateDialog(QDialog):
    """Modal 'Update Available' dialog.

    Accepted = "Update Now", rejected = "Later" (or closed). A forced
    dialog has no Later button and ignores Escape / window close.
    """

    def __init__(self, parent=None, app_name: str = "", is_force_update: bool = False,
                 show_later: bool = True):
        super().__init__(parent)
        self._force = is_force_update
        self.setWindowTitle(DIALOG_TITLE)
        self.setMinimumWidth(360)
        self.setModal(True)
        if is_force_update:
            self.setWindowFlag(Qt.WindowType.WindowCloseButtonHint, False)

        layout = QVBoxLayout(self)

        title = QLabel(DIALOG_TITLE)
        title.setStyleSheet("font-size: 16px; font-weight: bold;")
        layout.addWidget(title)

        message = QLabel(dialog_message(app_name))
        message.setWordWrap(True)
        layout.addWidget(message)

        buttons = QHBoxLayout()
        buttons.addStretch()

        if show_later and not is_force_update:
            later_btn = QPushButton("Later")
            later_btn.clicked.connect(self.reject)
            buttons.addWidget(later_btn)

        update_btn = QPushButton("Update Now")
        update_btn.setDefault(True)
        update_btn.clicked.connect(self.accept)
        buttons.addWidget(update_btn)

        layout.addLayout(buttons)

    def reject(self):
        if self._force:
            return
        super().reject()

    def closeEvent(self, event):
        if self._force and self.result() != QDialog.DialogCode.Accepted.value:
            event.ignore()
            return
        super().closeEvent(event)


class QtDialogPresenter(DialogPresenter):
    """Shows UpdateDialog on top of a host widget."""

    def __init__(self, parent=None):
        self._parent = parent

    def can_present(self) -> bool:
        if QApplication.instance() is None:
            logger.info("No QApplication running, skipping dialog")
            return False
        if self._parent is not None and sip.isdeleted(self._parent):
            logger.info("Host widget was destroyed, skipping dialog")
            return False
        return True

    async def present(self, prompt: UpdatePrompt):
        """Run the dialog modally.

        A forced dialog comes back after every launch of the store page,
        so the app stays blocked until it is replaced by the new version.
        """
        while True:
            dialog = UpdateDialog(
                self._parent,
                app_name=prompt.app_name,
                is_force_update=prompt.is_force_update,
                show_later=prompt.on_later is not None,
            )
            accepted = dialog.exec() == QDialog.DialogCode.Accepted.value
            dialog.deleteLater()

            if accepted:
                await prompt.on_update()
            elif prompt.on_later is not None:
                await prompt.on_later()

            if not prompt.is_force_update or not self.can_present():
                return
