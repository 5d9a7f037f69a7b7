"""测试公用：记录调用的通知排程器。"""
import itertools
from datetime import datetime
from typing import Dict, List, Tuple

import pytest

from pet_care.notifications.scheduler import NotificationScheduler


class FakeScheduler(NotificationScheduler):
    """不真正弹通知，只记录 schedule / cancel 调用。"""

    def __init__(self, granted: bool = True):
        self.granted = granted
        self.scheduled: Dict[str, Tuple[str, str, datetime]] = {}
        self.cancelled: List[str] = []
        self.cancel_all_calls = 0
        self._ids = itertools.count(1)

    def _request_permissions(self) -> bool:
        return self.granted

    def _schedule(self, title: str, body: str, when: datetime) -> str:
        handle = f"n{next(self._ids)}"
        self.scheduled[handle] = (title, body, when)
        return handle

    def _cancel(self, handle: str) -> None:
        self.cancelled.append(handle)

    def _cancel_all(self) -> None:
        self.cancel_all_calls += 1


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()
