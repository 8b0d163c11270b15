# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import threading


class TasbihCounter:
    """Process-local dhikr counts keyed by user id. Counts reset on restart."""

    def __init__(self):
        self._counts = {}
        self._lock = threading.Lock()

    def increment(self, user_id: int) -> int:
        with self._lock:
            self._counts[user_id] = self._counts.get(user_id, 0) + 1
            return self._counts[user_id]

    def get(self, user_id: int) -> int:
        with self._lock:
            return self._counts.get(user_id, 0)

    def reset(self, user_id: int) -> int:
        with self._lock:
            self._counts[user_id] = 0
            return 0

    def clear(self) -> None:
        with self._lock:
            self._counts.clear()


tasbih_counter = TasbihCounter()
