"""记录存储入口：宠物与提醒两个集合，删除宠物时级联删除其提醒。"""
import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

from pet_care.pets.models import Pet
from pet_care.pets.store import PetStore
from pet_care.reminders.models import Reminder
from pet_care.reminders.store import ReminderStore
from pet_care.storage.kv import FileKeyValueStore, KeyValueStore

logger = logging.getLogger(__name__)


class RecordStore:
    """界面层调用的全部存储操作。

    默认使用 FileKeyValueStore（数据目录下）；测试可传 MemoryKeyValueStore。
    """

    def __init__(self, kv: Optional[KeyValueStore] = None):
        self.kv = kv if kv is not None else FileKeyValueStore()
        self.pets = PetStore(self.kv)
        self.reminders = ReminderStore(self.kv)

    # 宠物

    def get_pets(self) -> List[Pet]:
        return self.pets.list()

    def get_pet(self, pet_id: str) -> Optional[Pet]:
        return self.pets.get(pet_id)

    def save_pets(self, pets: Sequence[Pet]) -> None:
        self.pets.replace_all(pets)

    def add_pet(self, pet: Union[Pet, Mapping[str, Any]]) -> List[Pet]:
        return self.pets.add(pet)

    def update_pet(self, pet_id: str, fields: Mapping[str, Any]) -> List[Pet]:
        return self.pets.update(pet_id, fields)

    def delete_pet(self, pet_id: str) -> List[Pet]:
        """删除宠物，再单独删除其提醒（两次独立的读-改-写，非原子）。"""
        pets = self.pets.delete(pet_id)
        self.delete_reminders_by_pet_id(pet_id)
        return pets

    # 提醒

    def get_reminders(self) -> List[Reminder]:
        return self.reminders.list()

    def get_reminder(self, reminder_id: str) -> Optional[Reminder]:
        return self.reminders.get(reminder_id)

    def save_reminders(self, reminders: Sequence[Reminder]) -> None:
        self.reminders.replace_all(reminders)

    def get_reminders_by_pet_id(self, pet_id: str) -> List[Reminder]:
        return self.reminders.list_by_pet_id(pet_id)

    def add_reminder(self, reminder: Union[Reminder, Mapping[str, Any]]) -> List[Reminder]:
        return self.reminders.add(reminder)

    def update_reminder(self, reminder_id: str, fields: Mapping[str, Any]) -> List[Reminder]:
        return self.reminders.update(reminder_id, fields)

    def delete_reminder(self, reminder_id: str) -> List[Reminder]:
        return self.reminders.delete(reminder_id)

    def delete_reminders_by_pet_id(self, pet_id: str) -> List[Reminder]:
        reminders = self.reminders.delete_by_pet_id(pet_id)
        logger.info(f"Deleted reminders of pet: {pet_id}")
        return reminders

    def clear_all(self) -> None:
        """清空宠物与提醒。"""
        self.pets.clear()
        self.reminders.clear()
