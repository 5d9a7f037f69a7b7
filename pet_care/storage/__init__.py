"""本地键值存储与记录集合。"""
from pet_care.storage.collection import JsonCollection
from pet_care.storage.kv import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore
from pet_care.storage.models import Record

__all__ = [
    "JsonCollection",
    "FileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "Record",
]
