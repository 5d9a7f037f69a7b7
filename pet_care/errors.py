"""异常类型。"""


class PetCareError(Exception):
    """所有本项目异常的基类。"""


class StorageError(PetCareError):
    """底层键值存储读写失败，需要提示用户并中止当前操作。"""


class CorruptDataError(PetCareError):
    """存储内容不是合法的记录数组；只在内部使用，由存储层自愈。"""


class RecordNotFoundError(PetCareError, KeyError):
    """按 id 更新时找不到记录。"""

    def __init__(self, collection: str, record_id: str):
        super().__init__(f"{collection}: record {record_id!r} not found")
        self.collection = collection
        self.record_id = record_id

    def __str__(self) -> str:
        return self.args[0]


class DuplicateRecordError(PetCareError, ValueError):
    """新增记录的 id 已存在。"""

    def __init__(self, collection: str, record_id: str):
        super().__init__(f"{collection}: record {record_id!r} already exists")
        self.collection = collection
        self.record_id = record_id


class InvalidRecordError(PetCareError, ValueError):
    """用户输入不合法（名字为空、年龄为负等）。"""
