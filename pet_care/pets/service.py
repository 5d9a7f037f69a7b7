"""宠物档案的新增、编辑与删除（含输入校验和通知清理）。"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from pet_care.errors import InvalidRecordError
from pet_care.notifications.scheduler import NotificationScheduler
from pet_care.pets.models import Pet
from pet_care.storage.record_store import RecordStore

logger = logging.getLogger(__name__)


def _clean_text(value: Any, label: str) -> str:
    text = str(value or "").strip()
    if not text:
        raise InvalidRecordError(f"Pet {label} is required")
    return text


def _clean_age(value: Any) -> int:
    try:
        age = int(str(value).strip())
    except (TypeError, ValueError):
        raise InvalidRecordError("Please enter a valid age") from None
    if age < 0:
        raise InvalidRecordError("Please enter a valid age")
    return age


class PetService:
    """界面层的宠物操作。"""

    def __init__(self, store: RecordStore, scheduler: Optional[NotificationScheduler] = None):
        self.store = store
        self.scheduler = scheduler

    def create_pet(self, name: str, type: str, age: Any, image_uri: Optional[str] = None) -> Pet:
        """校验后新建宠物，id 为 uuid4。"""
        pet = Pet(
            id=str(uuid.uuid4()),
            name=_clean_text(name, "name"),
            type=_clean_text(type, "type"),
            age=_clean_age(age),
            image_uri=image_uri or None,
        )
        self.store.add_pet(pet)
        return pet

    def edit_pet(self, pet_id: str, **fields: Any) -> List[Pet]:
        """部分更新；只校验传入的字段。"""
        changes: Dict[str, Any] = {}
        for key, value in fields.items():
            if key in ("name", "type"):
                changes[key] = _clean_text(value, key)
            elif key == "age":
                changes[key] = _clean_age(value)
            elif key in ("image_uri", "imageUri"):
                changes["image_uri"] = value or None
            else:
                raise InvalidRecordError(f"Unknown pet field: {key}")
        return self.store.update_pet(pet_id, changes)

    def delete_pet(self, pet_id: str) -> List[Pet]:
        """先取消该宠物所有提醒的通知，再删除宠物（级联删除提醒）。"""
        if self.scheduler is not None:
            for reminder in self.store.get_reminders_by_pet_id(pet_id):
                if reminder.notification_id:
                    self.scheduler.cancel(reminder.notification_id)
        return self.store.delete_pet(pet_id)
