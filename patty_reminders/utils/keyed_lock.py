"""
Per-key asyncio locks.

Serializes coroutines that touch the same key while letting unrelated keys
proceed. Multi-key holders always acquire in sorted order, so two holders
with overlapping key sets cannot deadlock.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List

logger = logging.getLogger(__name__)


class KeyedLock:
    """A lazily populated map of asyncio.Lock objects keyed by string."""

    def __init__(self, enabled: bool = True) -> None:
        self._enabled = enabled
        self._locks: Dict[str, asyncio.Lock] = {}

    @property
    def enabled(self) -> bool:
        return self._enabled

    def _lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def locked(self, key: str) -> bool:
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    @asynccontextmanager
    async def hold(self, *keys: str) -> AsyncIterator[None]:
        """Hold the locks for every key in `keys` for the duration of the block."""
        if not self._enabled:
            yield
            return

        acquired: List[asyncio.Lock] = []
        try:
            for key in sorted(set(keys)):
                lock = self._lock_for(key)
                await lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()
