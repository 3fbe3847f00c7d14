"""Short-lived, thread-safe cache for repeated per-user reads.

Collapses identical reads made in quick succession (e.g. the assistant calling
listProjects several times in one reply) into one store scan. Entries are
keyed by (user_id, operation) and expire after a fixed TTL. Concurrent misses
for the same key share one computation.

Bookkeeping for in-flight computations (per-key locks, per-user generations)
exists only while a computation is running, so an idle cache holds nothing
but its entries.
"""

import threading
import time
from typing import Any, Callable, Hashable


class TTLCache:
    """Expiring (user_id, operation) -> value cache guarded by a lock."""

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic) -> None:
        self._ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[tuple[str, Hashable], tuple[float, Any]] = {}
        # key -> [lock, callers holding or waiting on it]
        self._key_locks: dict[tuple[str, Hashable], list] = {}
        # user_id -> [running computations, generation]
        self._in_flight: dict[str, list] = {}

    def get(self, key: tuple[str, Hashable]) -> tuple[bool, Any]:
        """Return (hit, value); expired entries are dropped."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False, None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return False, None
            return True, value

    def set(self, key: tuple[str, Hashable], value: Any) -> None:
        with self._lock:
            self._entries[key] = (self._clock() + self._ttl, value)

    def get_or_compute(self, key: tuple[str, Hashable], compute: Callable[[], Any]) -> Any:
        """Return the cached value for key, computing it at most once per expiry.

        A result is not stored if the user's entries were invalidated while
        it was being computed; the caller still receives it. Exceptions from
        compute propagate and nothing is cached.
        """
        hit, value = self.get(key)
        if hit:
            return value

        with self._lock:
            key_slot = self._key_locks.setdefault(key, [threading.Lock(), 0])
            key_slot[1] += 1
        try:
            with key_slot[0]:
                hit, value = self.get(key)
                if hit:
                    return value
                return self._compute_and_store(key, compute)
        finally:
            with self._lock:
                key_slot[1] -= 1
                if key_slot[1] == 0 and self._key_locks.get(key) is key_slot:
                    del self._key_locks[key]

    def _compute_and_store(self, key: tuple[str, Hashable], compute: Callable[[], Any]) -> Any:
        user_id = key[0]
        with self._lock:
            user_slot = self._in_flight.setdefault(user_id, [0, 0])
            user_slot[0] += 1
            generation = user_slot[1]

        try:
            value = compute()
        except BaseException:
            with self._lock:
                self._release_user(user_id, user_slot)
            raise

        with self._lock:
            if user_slot[1] == generation and self._ttl > 0:
                self._entries[key] = (self._clock() + self._ttl, value)
            self._release_user(user_id, user_slot)
        return value

    def _release_user(self, user_id: str, user_slot: list) -> None:
        # Caller holds self._lock.
        user_slot[0] -= 1
        if user_slot[0] == 0 and self._in_flight.get(user_id) is user_slot:
            del self._in_flight[user_id]

    def invalidate_user(self, user_id: str) -> None:
        """Drop every entry belonging to user_id, including in-flight results."""
        with self._lock:
            for key in [k for k in self._entries if k[0] == user_id]:
                del self._entries[key]
            if user_id in self._in_flight:
                self._in_flight[user_id][1] += 1

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            for user_slot in self._in_flight.values():
                user_slot[1] += 1
