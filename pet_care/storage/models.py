"""记录基类：id 与创建/更新时间，camelCase 存储字段名。"""
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """当前 UTC 时间（毫秒精度）。"""
    return _to_millis(datetime.now(timezone.utc))


def _to_millis(value: datetime) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def to_wire_timestamp(value: datetime) -> str:
    """ISO-8601 UTC 时间串，如 2024-01-01T08:00:00.000Z。"""
    return _to_millis(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Record(BaseModel):
    """所有持久化记录的公共字段。"""
    id: str = Field("", description="唯一 ID（调用方生成）")
    created_at: datetime = Field(..., description="创建时间 UTC")
    updated_at: datetime = Field(..., description="更新时间 UTC")

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _fill_timestamps(cls, data: Any) -> Any:
        # 缺失时两者取同一个 now，新记录 createdAt == updatedAt
        if not isinstance(data, dict):
            return data
        data = dict(data)
        created = data.pop("created_at", None) or data.pop("createdAt", None)
        updated = data.pop("updated_at", None) or data.pop("updatedAt", None)
        data.pop("createdAt", None)
        data.pop("updatedAt", None)
        if created is None and updated is None:
            created = updated = utc_now()
        data["createdAt"] = created if created is not None else updated
        data["updatedAt"] = updated if updated is not None else created
        return data

    @field_validator("created_at", "updated_at")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return _to_millis(value)

    @model_validator(mode="after")
    def _updated_not_before_created(self) -> "Record":
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at
        return self

    @field_serializer("created_at", "updated_at", when_used="json")
    def _serialize_timestamp(self, value: datetime) -> str:
        return to_wire_timestamp(value)

    def to_wire(self) -> dict:
        """转为存储用的 dict（camelCase，省略空的可选字段）。"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
