"""照护提醒数据模型。"""
import datetime as dt
import re
from typing import Any, Iterable, List, Optional

from pydantic import Field, field_serializer, field_validator

from pet_care.config import DEFAULT_REMINDER_TIME
from pet_care.storage.models import Record, to_wire_timestamp

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
_LOOSE_TIME = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def _local_date(value: dt.datetime) -> dt.date:
    # 带时区的时刻按本地时区取日历日期；不带时区的按本地墙钟
    if value.tzinfo is None:
        return value.date()
    return value.astimezone().date()


def normalize_time(value: str) -> str:
    """把 "9:05" 之类补齐成 "09:05"；格式不对原样返回交给校验。"""
    m = _LOOSE_TIME.match(value)
    if not m:
        return value
    return f"{int(m.group(1)):02d}:{m.group(2)}"


class Reminder(Record):
    """单条提醒。到期时刻由 date + time 现算，不持久化。"""
    pet_id: str = Field("", description="所属宠物 ID")
    title: str = Field("", description="标题")
    description: str = Field("", description="描述，可为空")
    date: dt.date = Field(default_factory=dt.date.today, description="日期（忽略时分）")
    time: str = Field(DEFAULT_REMINDER_TIME, pattern=TIME_PATTERN, description="时间 HH:MM，24 小时制")
    is_completed: bool = Field(False, description="是否已完成")
    notification_id: Optional[str] = Field(None, description="已排程通知的句柄")

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Any:
        if isinstance(value, dt.datetime):
            return _local_date(value)
        if isinstance(value, str) and "T" in value:
            return _local_date(dt.datetime.fromisoformat(value.strip().replace("Z", "+00:00")))
        return value

    @field_validator("time", mode="before")
    @classmethod
    def _parse_time(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_time(value)
        return value

    @field_serializer("date", when_used="json")
    def _serialize_date(self, value: dt.date) -> str:
        # 存为该日本地零点对应的 UTC 时刻
        return to_wire_timestamp(dt.datetime.combine(value, dt.time()).astimezone())

    def due_at(self) -> dt.datetime:
        """到期时刻（本地时区）。"""
        hours, minutes = (int(part) for part in self.time.split(":"))
        return dt.datetime.combine(self.date, dt.time(hours, minutes)).astimezone()

    def is_overdue(self, now: Optional[dt.datetime] = None) -> bool:
        """未完成且到期时刻早于 now 即为逾期。"""
        if self.is_completed:
            return False
        now = (now or dt.datetime.now()).astimezone()
        return self.due_at() < now


def sort_by_due(reminders: Iterable[Reminder]) -> List[Reminder]:
    """按到期时刻升序排序（稳定）。"""
    return sorted(reminders, key=lambda r: r.due_at())
