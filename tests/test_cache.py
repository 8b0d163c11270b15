# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import datetime, timedelta

from mirror_of_heart.utils.cache import BoundedCache
from mirror_of_heart.utils.timeframes import timeframe_start


def test_set_evicts_oldest_beyond_bound():
    cache = BoundedCache(3)
    for key in "abcd":
        cache.set(key, key.upper())

    assert len(cache) == 3
    assert "a" not in cache
    assert cache.get("d") == "D"


def test_reinsert_refreshes_position():
    cache = BoundedCache(2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("a", 3)
    cache.set("c", 4)

    assert "b" not in cache
    assert cache.get("a") == 3


def test_trim_drops_oldest():
    cache = BoundedCache(10)
    for i in range(8):
        cache.set(i, i)

    assert cache.trim(5) == 3
    assert [k for k, _ in cache.items()] == [3, 4, 5, 6, 7]
    assert cache.trim(5) == 0


def test_timeframe_start():
    week = timeframe_start("7d")
    month = timeframe_start("unknown")
    assert month < week

    year_ago = datetime.utcnow() - timedelta(days=365)
    assert abs((timeframe_start("all") - year_ago).total_seconds()) < 5
