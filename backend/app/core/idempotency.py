"""
In-memory idempotency cache for order submission

A client attaches an Idempotency-Key to each checkout attempt. Retrying with
the same key inside the TTL returns the first result instead of inserting a
second order.

For production with multiple instances, consider using Redis.
"""
import time
from typing import Any, Dict, Optional, Tuple


class IdempotencyCache:
    """Key -> result store with a fixed time-to-live"""

    def __init__(self, ttl_seconds: int = 600):
        self.ttl_seconds = ttl_seconds
        # {key: (stored_at, result)}
        self._entries: Dict[str, Tuple[float, Any]] = {}
        self._last_cleanup = time.time()
        self._cleanup_interval = 60  # seconds

    def _cleanup_expired(self):
        """Drop expired entries, at most once per cleanup interval"""
        now = time.time()
        if now - self._last_cleanup < self._cleanup_interval:
            return

        cutoff = now - self.ttl_seconds
        for key in list(self._entries.keys()):
            if self._entries[key][0] <= cutoff:
                del self._entries[key]

        self._last_cleanup = now

    def get(self, key: str) -> Optional[Any]:
        """Return the stored result for key, or None if absent or expired"""
        self._cleanup_expired()

        entry = self._entries.get(key)
        if entry is None:
            return None

        stored_at, result = entry
        if time.time() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return result

    def put(self, key: str, result: Any):
        self._entries[key] = (time.time(), result)

    def __len__(self) -> int:
        return len(self._entries)
