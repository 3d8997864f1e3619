import time
from threading import Lock
from typing import Dict, Optional, Tuple

from core.services.cacher import Cacher


class MemoryCacher(Cacher):
    """Process-local cache with per-key expiry, for demo mode and tests."""
    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._items: Dict[str, Tuple[float, bytes]] = {}
        self._lock = Lock()

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            item = self._items.get(key)
            if item is None:
                return None
            expires_at, value = item
            if expires_at <= self._clock():
                del self._items[key]
                return None
            return value

    def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        with self._lock:
            self._items[key] = (self._clock() + ttl_seconds, value)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
