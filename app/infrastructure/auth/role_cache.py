"""
In-memory cache of user roles.
Saves a profile read on every authenticated request.
"""

import logging
import time
from collections import OrderedDict
from typing import Callable, Optional, Tuple

logger = logging.getLogger(__name__)


class RoleCache:
    """
    TTL cache mapping user IDs to roles, bounded with LRU eviction.
    One instance lives on app.state; the clock is injectable for tests.
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        max_size: int = 10000,
        clock: Callable[[], float] = time.monotonic
    ):
        self.ttl_seconds = ttl_seconds
        self.max_size = max(1, max_size)
        self.clock = clock
        self._entries: "OrderedDict[str, Tuple[str, float]]" = OrderedDict()

    def get(self, user_id: str) -> Optional[str]:
        """Cached role, or None when absent or expired."""
        entry = self._entries.get(user_id)
        if entry is None:
            return None

        role, expires_at = entry
        if self.clock() >= expires_at:
            self._entries.pop(user_id, None)
            return None
        # Most recently used last
        self._entries.move_to_end(user_id)
        return role

    def set(self, user_id: str, role: str) -> None:
        """Cache a role, evicting the least recently used entry when full."""
        if user_id in self._entries:
            self._entries.move_to_end(user_id)
        elif len(self._entries) >= self.max_size:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Role cache full, evicted {evicted}")

        self._entries[user_id] = (role, self.clock() + self.ttl_seconds)

    def invalidate(self, user_id: str) -> None:
        self._entries.pop(user_id, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
