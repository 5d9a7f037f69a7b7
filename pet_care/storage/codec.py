"""记录数组与 JSON 字符串的互转。

解码时按字段兜底：缺失、为 null 或校验失败的字段改用模型默认值，
单条坏记录不影响整个集合加载。
"""
import json
import logging
from typing import Any, List, Optional, Sequence, Set, Type, TypeVar

from pydantic import ValidationError

from pet_care.errors import CorruptDataError
from pet_care.storage.models import Record

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Record)


def encode_records(records: Sequence[Record]) -> str:
    """整个集合序列化为 JSON 数组字符串。"""
    return json.dumps([r.to_wire() for r in records], ensure_ascii=False)


def decode_records(model: Type[T], raw: str) -> List[T]:
    """解析 JSON 数组；不是数组时抛 CorruptDataError。"""
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise CorruptDataError(f"Invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise CorruptDataError(f"Expected a JSON array, got {type(data).__name__}")
    records = []
    for index, item in enumerate(data):
        record = decode_record(model, item)
        if record is None:
            logger.warning(f"Skipping malformed {model.__name__} at index {index}")
            continue
        records.append(record)
    return records


def _field_keys(model: Type[Record], loc: Any) -> Set[str]:
    """错误位置对应的字段名与别名。"""
    for name, info in model.model_fields.items():
        if loc in (name, info.alias):
            return {name, info.alias or name}
    return set()


def decode_record(model: Type[T], item: Any) -> Optional[T]:
    """解码单条记录，失败字段退回默认值；仍失败返回 None。"""
    if not isinstance(item, dict):
        return None
    data = {k: v for k, v in item.items() if v is not None}
    try:
        return model.model_validate(data)
    except ValidationError as e:
        bad_keys: Set[str] = set()
        for err in e.errors():
            if err["loc"]:
                bad_keys |= _field_keys(model, err["loc"][0])
        if not bad_keys:
            return None
        logger.warning(
            f"{model.__name__} {data.get('id', '')!r}: defaulting invalid fields {sorted(bad_keys)}"
        )
    data = {k: v for k, v in data.items() if k not in bad_keys}
    try:
        return model.model_validate(data)
    except ValidationError:
        return None
