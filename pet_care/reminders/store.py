"""提醒本地存储。"""
from typing import List

from pet_care.config import REMINDERS_STORAGE_KEY
from pet_care.reminders.models import Reminder
from pet_care.storage.collection import JsonCollection
from pet_care.storage.kv import KeyValueStore


class ReminderStore(JsonCollection[Reminder]):
    """所有提醒存为 @reminders 下的一个 JSON 数组，按 pet_id 关联宠物。"""

    def __init__(self, kv: KeyValueStore, key: str = REMINDERS_STORAGE_KEY):
        super().__init__(kv, key, Reminder)

    def list_by_pet_id(self, pet_id: str) -> List[Reminder]:
        """某宠物的所有提醒（不排序）。"""
        return [r for r in self.list() if r.pet_id == pet_id]

    def delete_by_pet_id(self, pet_id: str) -> List[Reminder]:
        """删除某宠物的所有提醒，返回剩余提醒。"""
        return self.delete_where(lambda r: r.pet_id == pet_id)
