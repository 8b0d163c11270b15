# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import threading


class BoundedCache:
    """
    Insertion-ordered in-memory cache.
    - `set` evicts the oldest insertions once `max_size` is exceeded.
    - `trim(keep)` is the periodic sweep run by the scheduler.
    """

    def __init__(self, max_size: int):
        self.max_size = max_size
        self._data = {}
        self._lock = threading.Lock()

    def get(self, key, default=None):
        with self._lock:
            return self._data.get(key, default)

    def set(self, key, value) -> None:
        with self._lock:
            self._data.pop(key, None)
            self._data[key] = value
            self._evict_to(self.max_size)

    def delete(self, key) -> None:
        with self._lock:
            self._data.pop(key, None)

    def trim(self, keep: int) -> int:
        """Drops oldest entries until at most `keep` remain. Returns how many were dropped."""
        with self._lock:
            return self._evict_to(keep)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def items(self) -> list:
        with self._lock:
            return list(self._data.items())

    def _evict_to(self, size: int) -> int:
        dropped = 0
        while len(self._data) > size:
            oldest = next(iter(self._data))
            del self._data[oldest]
            dropped += 1
        return dropped

    def __contains__(self, key) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
