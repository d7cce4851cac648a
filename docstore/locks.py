from __future__ import annotations

import threading
from pathlib import Path


class PathLockRegistry:
    """
    Provides a stable lock per normalized file path to avoid global contention.

    Also remembers which paths the current thread holds, so a nested transaction
    can be rejected instead of deadlocking on the non-reentrant lock.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._held = threading.local()

    @staticmethod
    def key_for(path: Path) -> str:
        return str(path.resolve())

    def lock_for(self, path: Path) -> threading.Lock:
        key = self.key_for(path)
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    def held_by_current_thread(self, path: Path) -> bool:
        return self.key_for(path) in self._held_keys()

    def mark_held(self, path: Path) -> None:
        self._held_keys().add(self.key_for(path))

    def mark_released(self, path: Path) -> None:
        self._held_keys().discard(self.key_for(path))

    def _held_keys(self) -> set[str]:
        keys = getattr(self._held, "keys", None)
        if keys is None:
            keys = set()
            self._held.keys = keys
        return keys


GLOBAL_PATH_LOCKS = PathLockRegistry()
