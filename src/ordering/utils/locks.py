"""Per-key mutual exclusion for in-process stores."""

from collections.abc import Hashable, Iterator
from contextlib import contextmanager
from threading import Lock


class KeyedLocks:
    """Hands out one lock per key so unrelated keys never contend.

    A key's lock exists only while some thread holds or waits for it, so the
    registry stays as small as the set of keys currently in use.
    """

    def __init__(self):
        self._locks: dict[Hashable, Lock] = {}
        self._waiters: dict[Hashable, int] = {}
        self._registry_lock = Lock()

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._locks)

    def _checkout(self, key: Hashable) -> Lock:
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = Lock()
            self._waiters[key] = self._waiters.get(key, 0) + 1
            return lock

    def _checkin(self, key: Hashable) -> None:
        with self._registry_lock:
            self._waiters[key] -= 1
            if not self._waiters[key]:
                del self._waiters[key]
                del self._locks[key]

    @contextmanager
    def hold(self, key: Hashable) -> Iterator[None]:
        lock = self._checkout(key)
        try:
            with lock:
                yield
        finally:
            self._checkin(key)
