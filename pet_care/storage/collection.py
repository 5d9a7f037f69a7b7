"""单个 key 下的记录集合：整表读、整表写、读-改-写。"""
import logging
import threading
from typing import Any, Callable, Generic, List, Mapping, Optional, Sequence, Type, TypeVar, Union

from pydantic import ValidationError

from pet_care.errors import CorruptDataError, DuplicateRecordError, InvalidRecordError, RecordNotFoundError
from pet_care.storage.codec import decode_records, encode_records
from pet_care.storage.kv import KeyValueStore
from pet_care.storage.models import Record, utc_now

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Record)

# 更新时不允许覆盖的字段
_IMMUTABLE_FIELDS = ("id", "created_at", "createdAt")


class JsonCollection(Generic[T]):
    """一个 JSON 数组存在一个 key 下；增删改都是整表重写。

    每个集合一把锁，读-改-写串行执行，避免并发写互相覆盖。
    """

    def __init__(self, kv: KeyValueStore, key: str, model: Type[T]):
        self.kv = kv
        self.key = key
        self.model = model
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self.model.__name__

    def list(self) -> List[T]:
        """读取整个集合；key 不存在返回空列表，内容损坏则删除 key 后返回空列表。"""
        raw = self.kv.get_item(self.key)
        if not raw:
            return []
        try:
            return decode_records(self.model, raw)
        except CorruptDataError as e:
            logger.warning(f"Corrupted data under {self.key}, discarding: {e}")
            self.kv.remove_item(self.key)
            return []

    def replace_all(self, records: Sequence[T]) -> None:
        """整表覆盖写入。"""
        self.kv.set_item(self.key, encode_records(records))
        logger.debug(f"Saved {len(records)} records under {self.key}")

    def get(self, record_id: str) -> Optional[T]:
        for record in self.list():
            if record.id == record_id:
                return record
        return None

    def add(self, record: Union[T, Mapping[str, Any]]) -> List[T]:
        """追加一条记录，返回新的完整列表。"""
        if not isinstance(record, self.model):
            record = self._validate(record)
        with self._lock:
            records = self.list()
            if any(r.id == record.id for r in records):
                raise DuplicateRecordError(self.name, record.id)
            records.append(record)
            self.replace_all(records)
        logger.info(f"Added {self.name}: {record.id}")
        return records

    def update(self, record_id: str, fields: Mapping[str, Any]) -> List[T]:
        """合并部分字段，保留 createdAt，刷新 updatedAt；找不到则抛 RecordNotFoundError。"""
        with self._lock:
            records = self.list()
            for index, existing in enumerate(records):
                if existing.id == record_id:
                    break
            else:
                raise RecordNotFoundError(self.name, record_id)
            data = existing.model_dump(by_alias=True)
            for key, value in fields.items():
                if key in _IMMUTABLE_FIELDS:
                    continue
                data[self._alias(key)] = value
            data["updatedAt"] = utc_now()
            records[index] = self._validate(data)
            self.replace_all(records)
        logger.info(f"Updated {self.name}: {record_id}")
        return records

    def delete(self, record_id: str) -> List[T]:
        """删除指定 id，返回新的完整列表；id 不存在时原样写回。"""
        records = self.delete_where(lambda r: r.id == record_id)
        logger.info(f"Deleted {self.name}: {record_id}")
        return records

    def delete_where(self, predicate: Callable[[T], bool]) -> List[T]:
        with self._lock:
            records = [r for r in self.list() if not predicate(r)]
            self.replace_all(records)
        return records

    def clear(self) -> None:
        with self._lock:
            self.replace_all([])
        logger.info(f"Cleared {self.key}")

    def _validate(self, data: Mapping[str, Any]) -> T:
        try:
            return self.model.model_validate(data)
        except ValidationError as e:
            raise InvalidRecordError(f"Invalid {self.name}: {e}") from e

    def _alias(self, key: str) -> str:
        info = self.model.model_fields.get(key)
        if info is not None and info.alias:
            return info.alias
        return key
