"""本地提醒通知。"""
from pet_care.notifications.scheduler import NotificationScheduler, build_notification

__all__ = ["NotificationScheduler", "build_notification"]
