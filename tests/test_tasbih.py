# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


def test_count_starts_at_zero(client, auth):
    assert client.get("/tasbih/count", headers=auth).json()["count"] == 0


def test_increment_and_reset(client, auth):
    for expected in (1, 2, 3):
        assert client.post("/tasbih/count", headers=auth).json()["count"] == expected

    assert client.post("/tasbih/reset", headers=auth).json()["count"] == 0
    assert client.get("/tasbih/count", headers=auth).json()["count"] == 0


def test_counts_are_per_user(client, make_user):
    _, first = make_user("first")
    _, second = make_user("second")

    client.post("/tasbih/count", headers=first)
    client.post("/tasbih/count", headers=first)
    client.post("/tasbih/count", headers=second)

    assert client.get("/tasbih/count", headers=first).json()["count"] == 2
    assert client.get("/tasbih/count", headers=second).json()["count"] == 1
