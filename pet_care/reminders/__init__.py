"""照护提醒。"""
from pet_care.reminders.models import Reminder, sort_by_due
from pet_care.reminders.store import ReminderStore

__all__ = ["Reminder", "ReminderStore", "sort_by_due"]
