"""全局配置与路径。"""
import logging
import os
from pathlib import Path
from typing import Optional

# 项目根目录（pet_care 包所在目录的上一级）
ROOT_DIR = Path(__file__).resolve().parent.parent
# 数据目录：可用环境变量 PET_CARE_DATA_DIR 覆盖
DATA_DIR = Path(os.environ.get("PET_CARE_DATA_DIR", "").strip() or ROOT_DIR / "data")
STORAGE_DIR = DATA_DIR / "storage"  # 键值存储，每个 key 一个文件

# 存储 key
PETS_STORAGE_KEY = "@pets"
REMINDERS_STORAGE_KEY = "@reminders"

# 提醒默认时间（HH:MM）
DEFAULT_REMINDER_TIME = "09:00"

# 通知
NOTIFICATION_TITLE_PREFIX = "Pet Reminder"
NOTIFICATION_FALLBACK_PET_NAME = "Your pet"

# 日志
LOG_LEVEL = os.environ.get("PET_CARE_LOG_LEVEL", "INFO").strip().upper() or "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def ensure_dirs() -> None:
    """确保数据目录存在。"""
    for d in (DATA_DIR, STORAGE_DIR):
        d.mkdir(parents=True, exist_ok=True)


def setup_logging(level: Optional[str] = None) -> None:
    """配置根日志（重复调用无副作用）。"""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
