"""宠物档案本地存储。"""
from pet_care.config import PETS_STORAGE_KEY
from pet_care.pets.models import Pet
from pet_care.storage.collection import JsonCollection
from pet_care.storage.kv import KeyValueStore


class PetStore(JsonCollection[Pet]):
    """所有宠物存为 @pets 下的一个 JSON 数组。"""

    def __init__(self, kv: KeyValueStore, key: str = PETS_STORAGE_KEY):
        super().__init__(kv, key, Pet)
