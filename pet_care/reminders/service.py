"""提醒的保存、完成、删除与通知句柄维护。

改期前先取消旧通知，再保存新句柄（排程被拒则清空）；删除前先取消通知。
"""
import datetime as dt
import logging
import re
import uuid
from typing import Any, Dict, List, Optional, Union

from pet_care.config import NOTIFICATION_FALLBACK_PET_NAME
from pet_care.errors import InvalidRecordError, RecordNotFoundError
from pet_care.notifications.scheduler import NotificationScheduler
from pet_care.reminders.models import TIME_PATTERN, Reminder, normalize_time, sort_by_due
from pet_care.storage.record_store import RecordStore

logger = logging.getLogger(__name__)


class ReminderService:
    """界面层的提醒操作；scheduler 为 None 时不排程通知。"""

    def __init__(self, store: RecordStore, scheduler: Optional[NotificationScheduler] = None):
        self.store = store
        self.scheduler = scheduler

    def _pet_name(self, pet_id: str) -> str:
        pet = self.store.get_pet(pet_id)
        return pet.name if pet and pet.name else NOTIFICATION_FALLBACK_PET_NAME

    def _require(self, reminder_id: str) -> Reminder:
        reminder = self.store.get_reminder(reminder_id)
        if reminder is None:
            raise RecordNotFoundError("Reminder", reminder_id)
        return reminder

    def _schedule(self, reminder: Reminder) -> Optional[str]:
        if self.scheduler is None or reminder.is_completed:
            return None
        return self.scheduler.schedule(reminder, self._pet_name(reminder.pet_id))

    def _cancel(self, reminder: Reminder) -> None:
        if self.scheduler is not None and reminder.notification_id:
            self.scheduler.cancel(reminder.notification_id)

    def save_reminder(
        self,
        pet_id: str,
        title: str,
        description: str,
        date: Union[dt.date, dt.datetime],
        time: str,
        reminder_id: Optional[str] = None,
    ) -> Reminder:
        """新增或编辑提醒，并重新排程通知。"""
        title = (title or "").strip()
        if not title:
            raise InvalidRecordError("Reminder title is required")
        time = normalize_time(time or "")
        if not re.match(TIME_PATTERN, time):
            raise InvalidRecordError(f"Invalid time {time!r}, expected HH:MM")
        if isinstance(date, dt.datetime):
            date = date.date()

        existing = self._require(reminder_id) if reminder_id else None
        reminder = Reminder(
            id=reminder_id or str(uuid.uuid4()),
            pet_id=pet_id,
            title=title,
            description=(description or "").strip(),
            date=date,
            time=time,
            is_completed=existing.is_completed if existing else False,
        )
        if existing:
            self._cancel(existing)
        reminder.notification_id = self._schedule(reminder)

        if existing:
            self.store.update_reminder(reminder.id, {
                "pet_id": reminder.pet_id,
                "title": reminder.title,
                "description": reminder.description,
                "date": reminder.date,
                "time": reminder.time,
                "notification_id": reminder.notification_id,
            })
        else:
            self.store.add_reminder(reminder)
        return self._require(reminder.id)

    def set_completed(self, reminder_id: str, completed: bool) -> Reminder:
        """完成时取消通知；重新打开时重新排程。"""
        reminder = self._require(reminder_id)
        changes: Dict[str, Any] = {"is_completed": completed}
        if completed:
            self._cancel(reminder)
            changes["notification_id"] = None
        elif not reminder.notification_id:
            reopened = reminder.model_copy(update={"is_completed": False})
            changes["notification_id"] = self._schedule(reopened)
        self.store.update_reminder(reminder_id, changes)
        return self._require(reminder_id)

    def toggle_completed(self, reminder_id: str) -> Reminder:
        reminder = self._require(reminder_id)
        return self.set_completed(reminder_id, not reminder.is_completed)

    def delete_reminder(self, reminder_id: str) -> List[Reminder]:
        """先取消通知再删除。"""
        reminder = self.store.get_reminder(reminder_id)
        if reminder is not None:
            self._cancel(reminder)
        return self.store.delete_reminder(reminder_id)

    def list_for_pet(self, pet_id: str) -> List[Reminder]:
        """某宠物的提醒，按到期时刻排序。"""
        return sort_by_due(self.store.get_reminders_by_pet_id(pet_id))

    def overdue(self, now: Optional[dt.datetime] = None) -> List[Reminder]:
        return [r for r in sort_by_due(self.store.get_reminders()) if r.is_overdue(now)]

    def reschedule_outstanding(self) -> int:
        """启动时为所有未完成的提醒重新排程，返回成功排程的数量。"""
        if self.scheduler is None:
            return 0
        scheduled = 0
        for reminder in self.store.get_reminders():
            if reminder.is_completed:
                continue
            self._cancel(reminder)
            handle = self._schedule(reminder)
            if handle:
                scheduled += 1
            if handle != reminder.notification_id:
                self.store.update_reminder(reminder.id, {"notification_id": handle})
        logger.info(f"Rescheduled {scheduled} reminder notifications")
        return scheduled

    def check_notifications(self) -> bool:
        """通知权限是否可用。"""
        return self.scheduler is not None and self.scheduler.request_permissions()

    def clear_all(self) -> None:
        """清空所有宠物与提醒，并取消所有通知。"""
        self.store.clear_all()
        if self.scheduler is not None:
            self.scheduler.cancel_all()
        logger.info("Cleared all data")
