# app/services/achievement_cache.py
import threading
import time
from typing import Any

from app.config import settings

class AchievementCache:
    """Process-local cache of user achievement summaries.

    Keyed by user id. Synchronization runs invalidate entries through
    ``invalidate`` (passed to the synchronizer as its callback).
    """

    def __init__(self, ttl_seconds: int = 300):
        self.ttl_seconds = ttl_seconds
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(user_id)
            if entry is None:
                return None
            stored_at, value = entry
            if time.monotonic() - stored_at > self.ttl_seconds:
                del self._entries[user_id]
                return None
            return value

    def set(self, user_id: str, value: Any) -> None:
        if self.ttl_seconds == 0:
            return
        with self._lock:
            self._entries[user_id] = (time.monotonic(), value)

    def invalidate(self, competition_id: str, user_id: str) -> None:
        """Synchronizer callback; competition_id is unused since entries are per user"""
        with self._lock:
            self._entries.pop(user_id, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self):
        with self._lock:
            return len(self._entries)

# Singleton instance
achievement_cache = AchievementCache(ttl_seconds=settings.achievements_cache_ttl_seconds)
