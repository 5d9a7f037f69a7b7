"""宠物档案存储与服务测试。"""
import tempfile
from pathlib import Path

import pytest

from pet_care.errors import DuplicateRecordError, InvalidRecordError, RecordNotFoundError
from pet_care.pets.models import Pet
from pet_care.pets.service import PetService
from pet_care.reminders.models import Reminder
from pet_care.storage.kv import FileKeyValueStore, MemoryKeyValueStore
from pet_care.storage.record_store import RecordStore


def test_add_pet_appends_one_record() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        store = RecordStore(FileKeyValueStore(base_dir=Path(tmp)))
        store.add_pet(Pet(id="p1", name="Rex", type="dog", age=3))
        before = store.get_pets()
        pets = store.add_pet(Pet(id="p2", name="Tom", type="cat", age=1))
        assert len(pets) == len(before) + 1
        loaded = store.get_pets()
        assert [p.id for p in loaded] == ["p1", "p2"]
        tom = store.get_pet("p2")
        assert tom is not None
        assert tom.created_at == tom.updated_at


def test_add_pet_from_mapping() -> None:
    store = RecordStore(MemoryKeyValueStore())
    store.add_pet({"id": "p1", "name": "Rex", "type": "dog", "age": 2, "imageUri": "file:///rex.jpg"})
    pet = store.get_pet("p1")
    assert pet.image_uri == "file:///rex.jpg"


def test_add_duplicate_id_rejected() -> None:
    store = RecordStore(MemoryKeyValueStore())
    store.add_pet(Pet(id="p1", name="Rex"))
    raw = store.kv.get_item("@pets")
    with pytest.raises(DuplicateRecordError):
        store.add_pet(Pet(id="p1", name="Other"))
    assert store.kv.get_item("@pets") == raw


def test_update_pet_changes_only_given_fields() -> None:
    store = RecordStore(MemoryKeyValueStore())
    store.add_pet(Pet(id="p1", name="Rex", type="dog", age=3, image_uri="file:///rex.jpg"))
    original = store.get_pet("p1")

    store.update_pet("p1", {"name": "X"})
    updated = store.get_pet("p1")
    assert updated.name == "X"
    assert updated.type == original.type
    assert updated.age == original.age
    assert updated.image_uri == original.image_uri
    assert updated.created_at == original.created_at
    assert updated.updated_at >= original.updated_at


def test_update_ignores_identity_and_created_at() -> None:
    store = RecordStore(MemoryKeyValueStore())
    store.add_pet(Pet(id="p1", name="Rex"))
    original = store.get_pet("p1")
    store.update_pet("p1", {"id": "p2", "createdAt": "2000-01-01T00:00:00.000Z", "imageUri": "file:///a.png"})
    updated = store.get_pet("p1")
    assert store.get_pet("p2") is None
    assert updated.created_at == original.created_at
    assert updated.image_uri == "file:///a.png"


def test_update_missing_pet_leaves_storage_untouched() -> None:
    store = RecordStore(MemoryKeyValueStore())
    store.add_pet(Pet(id="p1", name="Rex"))
    raw = store.kv.get_item("@pets")
    with pytest.raises(RecordNotFoundError) as exc_info:
        store.update_pet("missing", {"name": "X"})
    assert exc_info.value.record_id == "missing"
    assert store.kv.get_item("@pets") == raw


def test_delete_pet_cascades_to_its_reminders() -> None:
    store = RecordStore(MemoryKeyValueStore())
    store.add_pet(Pet(id="p1", name="Rex"))
    store.add_pet(Pet(id="p2", name="Tom"))
    store.add_reminder(Reminder(id="r1", pet_id="p1", title="Walk"))
    store.add_reminder(Reminder(id="r2", pet_id="p1", title="Vet"))
    store.add_reminder(Reminder(id="r3", pet_id="p2", title="Brush"))

    pets = store.delete_pet("p1")
    assert [p.id for p in pets] == ["p2"]
    assert [p.id for p in store.get_pets()] == ["p2"]
    assert [r.id for r in store.get_reminders()] == ["r3"]


def test_pet_service_create_validates_input() -> None:
    service = PetService(RecordStore(MemoryKeyValueStore()))
    pet = service.create_pet("  Rex ", "dog", "4")
    assert pet.name == "Rex"
    assert pet.age == 4
    assert pet.id
    assert service.store.get_pet(pet.id) == pet

    with pytest.raises(InvalidRecordError):
        service.create_pet("", "dog", 1)
    with pytest.raises(InvalidRecordError):
        service.create_pet("Rex", "  ", 1)
    with pytest.raises(InvalidRecordError):
        service.create_pet("Rex", "dog", -1)
    with pytest.raises(InvalidRecordError):
        service.create_pet("Rex", "dog", "abc")
    assert len(service.store.get_pets()) == 1


def test_pet_service_edit() -> None:
    service = PetService(RecordStore(MemoryKeyValueStore()))
    pet = service.create_pet("Rex", "dog", 4)
    service.edit_pet(pet.id, age=5, image_uri="file:///rex.png")
    edited = service.store.get_pet(pet.id)
    assert edited.age == 5
    assert edited.image_uri == "file:///rex.png"
    with pytest.raises(InvalidRecordError):
        service.edit_pet(pet.id, name="")
    with pytest.raises(RecordNotFoundError):
        service.edit_pet("missing", name="Max")


def test_pet_service_delete_cancels_notifications(scheduler) -> None:
    store = RecordStore(MemoryKeyValueStore())
    service = PetService(store, scheduler)
    store.add_pet(Pet(id="p1", name="Rex"))
    store.add_reminder(Reminder(id="r1", pet_id="p1", title="Walk", notification_id="h1"))
    store.add_reminder(Reminder(id="r2", pet_id="p1", title="Vet"))
    store.add_reminder(Reminder(id="r3", pet_id="p2", title="Brush", notification_id="h3"))

    service.delete_pet("p1")
    assert scheduler.cancelled == ["h1"]
    assert [r.id for r in store.get_reminders()] == ["r3"]
