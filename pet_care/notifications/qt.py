"""基于 Qt 的本地通知：QTimer 定时，到点由系统托盘弹出消息。"""
import logging
import uuid
from datetime import datetime
from typing import Dict, Optional

from PyQt6.QtCore import QObject, QTimer
from PyQt6.QtWidgets import QSystemTrayIcon

from pet_care.notifications.scheduler import NotificationScheduler

logger = logging.getLogger(__name__)

# QTimer 间隔上限（int32 毫秒，约 24.8 天），更远的时刻分段重新定时
MAX_TIMER_MS = 2**31 - 1


class QtNotificationScheduler(NotificationScheduler):
    """句柄为 uuid hex，每个句柄对应一个单次 QTimer。进程退出后定时失效。"""

    def __init__(self, tray_icon: QSystemTrayIcon, parent: Optional[QObject] = None):
        self._tray = tray_icon
        self._parent = parent
        self._timers: Dict[str, QTimer] = {}

    def _request_permissions(self) -> bool:
        return QSystemTrayIcon.isSystemTrayAvailable() and QSystemTrayIcon.supportsMessages()

    def _schedule(self, title: str, body: str, when: datetime) -> str:
        handle = uuid.uuid4().hex
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.timeout.connect(lambda: self._on_timeout(handle, title, body, when))
        self._timers[handle] = timer
        self._arm(timer, when)
        return handle

    def _arm(self, timer: QTimer, when: datetime) -> None:
        remaining_ms = int((when - datetime.now().astimezone()).total_seconds() * 1000)
        timer.start(max(0, min(remaining_ms, MAX_TIMER_MS)))

    def _on_timeout(self, handle: str, title: str, body: str, when: datetime) -> None:
        timer = self._timers.get(handle)
        if timer is None:
            return
        if when > datetime.now().astimezone():
            self._arm(timer, when)
            return
        self._release(handle)
        logger.info(f"Showing notification {handle}: {title}")
        self._tray.showMessage(title, body, QSystemTrayIcon.MessageIcon.Information)

    def _release(self, handle: str) -> None:
        timer = self._timers.pop(handle, None)
        if timer is not None:
            timer.stop()
            timer.deleteLater()

    def _cancel(self, handle: str) -> None:
        self._release(handle)

    def _cancel_all(self) -> None:
        for handle in list(self._timers):
            self._release(handle)
