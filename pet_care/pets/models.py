"""宠物档案数据模型。"""
from typing import Optional

from pydantic import Field

from pet_care.storage.models import Record


class Pet(Record):
    """宠物档案。图片只保存外部引用，不保存内容。"""
    name: str = Field("", description="宠物名字")
    type: str = Field("", description="物种/类别，自由文本")
    age: int = Field(0, ge=0, description="年龄（岁）")
    image_uri: Optional[str] = Field(None, description="图片引用（外部资源）")
