"""键值存储：整块读、整块写、删除 key。"""
import logging
import re
from pathlib import Path
from typing import Dict, Optional

from pet_care.config import STORAGE_DIR
from pet_care.errors import StorageError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class KeyValueStore:
    """字符串到字符串的持久映射，没有局部更新。"""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    """进程内存储，不落盘。"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()


class FileKeyValueStore(KeyValueStore):
    """每个 key 一个 UTF-8 文件；写入先写临时文件再替换。"""
    _suffix = ".json"

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = Path(base_dir) if base_dir else STORAGE_DIR
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create storage directory {self.base_dir}: {e}", exc_info=True)
            raise StorageError(f"Cannot create storage directory: {e}") from e
        logger.info(f"FileKeyValueStore initialized: {self.base_dir}")

    def _path(self, key: str) -> Path:
        name = _UNSAFE_CHARS.sub("_", key.lstrip("@"))
        if not name.strip("._"):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.base_dir / f"{name}{self._suffix}"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {key}: {e}", exc_info=True)
            raise StorageError(f"Cannot read {key}: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        temp_path = path.with_suffix(".tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(value)
            temp_path.replace(path)
        except OSError as e:
            logger.error(f"Failed to write {key}: {e}", exc_info=True)
            raise StorageError(f"Cannot write {key}: {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            self._path(key).unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to remove {key}: {e}", exc_info=True)
            raise StorageError(f"Cannot remove {key}: {e}") from e

    def clear(self) -> None:
        try:
            for path in self.base_dir.glob(f"*{self._suffix}"):
                path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to clear storage: {e}", exc_info=True)
            raise StorageError(f"Cannot clear storage: {e}") from e
