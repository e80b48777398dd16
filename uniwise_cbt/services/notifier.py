"""
services/notifier.py — toast notifications for the client.

Pure output: the engine pushes, the API drains on the next poll.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import List, Literal

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class Notification(BaseModel):
    title: str
    description: str = ""
    variant: Literal["default", "destructive"] = "default"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ToastQueue:
    """In-memory notification sink for one client context."""

    def __init__(self, maxlen: int = 50) -> None:
        self._lock = threading.Lock()
        self._items: List[Notification] = []
        self._maxlen = maxlen

    def notify(self, title: str, description: str = "", variant: str = "default") -> None:
        note = Notification(title=title, description=description, variant=variant)
        if note.variant == "destructive":
            logger.warning(f"[toast] {title}: {description}")
        else:
            logger.info(f"[toast] {title}: {description}")
        with self._lock:
            self._items.append(note)
            del self._items[:-self._maxlen]

    def drain(self) -> List[Notification]:
        with self._lock:
            items, self._items = self._items, []
        return items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
