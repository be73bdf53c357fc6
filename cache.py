import math
import time
from typing import Any, Awaitable, Callable, NamedTuple

from cachetools import TLRUCache


class _Entry(NamedTuple):
    value: Any
    ttl: float


def _expires_at(key, entry: _Entry, now: float) -> float:
    return now + entry.ttl


class ExpiringCache:
    """In-memory key/value store where every entry carries its own ttl.

    Expiry is absolute (set once when the value is stored) and lazy: stale
    entries are dropped the next time the cache is populated. ``None`` is a
    legitimate value and is cached like any other result.
    """

    def __init__(self, timer: Callable[[], float] = time.monotonic, maxsize: float = math.inf):
        self._entries = TLRUCache(maxsize=maxsize, ttu=_expires_at, timer=timer)

    async def get_or_create(self, key: str, ttl: float, producer: Callable[[], Awaitable[Any]]) -> Any:
        entry = self._entries.get(key)
        if entry is not None:
            return entry.value

        value = await producer()
        self._entries.expire()
        self._entries[key] = _Entry(value, ttl)
        return value

    def get(self, key: str, default: Any = None) -> Any:
        entry = self._entries.get(key)
        return default if entry is None else entry.value

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        self._entries.expire()
        return len(self._entries)
