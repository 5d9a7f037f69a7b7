"""托盘入口：加载本地记录，为未完成的提醒重新排程通知，常驻托盘。"""
import logging
import sys

from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import QApplication, QMenu, QStyle, QSystemTrayIcon

from pet_care import __version__
from pet_care.config import ensure_dirs, setup_logging
from pet_care.errors import StorageError
from pet_care.notifications.qt import QtNotificationScheduler
from pet_care.reminders.service import ReminderService
from pet_care.storage.kv import FileKeyValueStore
from pet_care.storage.record_store import RecordStore

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging()
    ensure_dirs()
    app = QApplication(sys.argv)
    app.setApplicationName("Pet Care")
    app.setApplicationVersion(__version__)
    app.setQuitOnLastWindowClosed(False)

    icon = app.style().standardIcon(QStyle.StandardPixmap.SP_MessageBoxInformation)
    tray = QSystemTrayIcon(icon)
    tray.setToolTip("Pet Care")
    menu = QMenu()
    quit_action = QAction("Quit", menu)
    quit_action.triggered.connect(app.quit)
    menu.addAction(quit_action)
    tray.setContextMenu(menu)
    tray.show()

    scheduler = QtNotificationScheduler(tray, parent=app)
    reminders = ReminderService(RecordStore(FileKeyValueStore()), scheduler)
    try:
        reminders.reschedule_outstanding()
    except StorageError as e:
        logger.error(f"Cannot load reminders: {e}")
        tray.showMessage("Pet Care", "Failed to load reminders", QSystemTrayIcon.MessageIcon.Warning)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
