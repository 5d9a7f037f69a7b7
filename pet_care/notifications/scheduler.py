"""通知排程接口：给提醒排一次性本地通知，返回句柄。"""
import logging
from datetime import datetime
from typing import Optional, Tuple

from pet_care.config import NOTIFICATION_TITLE_PREFIX
from pet_care.reminders.models import Reminder

logger = logging.getLogger(__name__)


def build_notification(reminder: Reminder, pet_name: str) -> Tuple[str, str]:
    """通知标题与正文。"""
    title = f"{NOTIFICATION_TITLE_PREFIX}: {reminder.title}"
    body = f"{pet_name} - {reminder.description}"
    return title, body


class NotificationScheduler:
    """子类实现 _request_permissions / _schedule / _cancel / _cancel_all。

    公共方法负责权限检查、过期判断与错误日志；取消失败只记录不抛出。
    """

    def request_permissions(self) -> bool:
        try:
            granted = self._request_permissions()
        except Exception as e:
            logger.error(f"Error requesting notification permissions: {e}", exc_info=True)
            return False
        if not granted:
            logger.warning("Notification permissions not granted")
        return granted

    def schedule(self, reminder: Reminder, pet_name: str) -> Optional[str]:
        """排程通知；无权限或到期时刻不在未来时返回 None。"""
        if not self.request_permissions():
            return None
        due_at = reminder.due_at()
        if due_at <= datetime.now().astimezone():
            logger.warning(f"Not scheduling reminder {reminder.id}: {due_at.isoformat()} is in the past")
            return None
        title, body = build_notification(reminder, pet_name)
        try:
            handle = self._schedule(title, body, due_at)
        except Exception as e:
            logger.error(f"Error scheduling notification for {reminder.id}: {e}", exc_info=True)
            return None
        logger.info(f"Scheduled notification {handle} for reminder {reminder.id} at {due_at.isoformat()}")
        return handle

    def cancel(self, handle: str) -> None:
        try:
            self._cancel(handle)
        except Exception as e:
            logger.error(f"Error canceling notification {handle}: {e}", exc_info=True)

    def cancel_all(self) -> None:
        try:
            self._cancel_all()
        except Exception as e:
            logger.error(f"Error canceling all notifications: {e}", exc_info=True)

    def _request_permissions(self) -> bool:
        raise NotImplementedError

    def _schedule(self, title: str, body: str, when: datetime) -> str:
        raise NotImplementedError

    def _cancel(self, handle: str) -> None:
        raise NotImplementedError

    def _cancel_all(self) -> None:
        raise NotImplementedError
