# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import json


def _analyze(client, headers, content="so sad and lonely", **options):
    body = {"input": {"type": "text", "content": content}}
    if options:
        body["options"] = options
    return client.post("/mood/analyze", headers=headers, json=body)


def test_analyze_returns_envelope_and_headers(client, auth):
    response = _analyze(client, auth)
    assert response.status_code == 200

    data = response.json()["data"]
    assert data["primary_emotion"] == "sad"
    assert data["api_version"] == "2.0"
    assert data["entry_id"] is not None
    assert response.headers["X-Primary-Emotion"] == "sad"
    assert response.headers["X-Cache-Status"] == "MISS"
    assert response.headers["X-Response-Time"].endswith("ms")

    again = _analyze(client, auth)
    assert again.headers["X-Cache-Status"] == "HIT"


def test_analyze_rejects_bad_input(client, auth):
    response = client.post("/mood/analyze", headers=auth, json={"input": {"type": "text", "content": ""}})
    assert response.status_code == 400
    assert response.json()["detail"]["error_code"] == "MISSING_TEXT_CONTENT"


def test_analyze_requires_auth(client):
    assert _analyze(client, {}).status_code == 401


def test_history_and_emotion_filter(client, auth):
    _analyze(client, auth, "so sad and lonely")
    _analyze(client, auth, "wonderful amazing day")

    history = client.get("/mood/history?emotions=joyful", headers=auth).json()["data"]
    assert history["pagination"]["total"] == 1
    assert history["entries"][0]["primary_emotion"] == "joyful"
    assert "insights" not in history["entries"][0]

    assert client.get("/mood/history?emotions=bored", headers=auth).status_code == 400
    assert client.get("/mood/history?timeframe=2w", headers=auth).status_code == 400


def test_entry_lifecycle(client, auth):
    entry_id = _analyze(client, auth).json()["data"]["entry_id"]

    entry = client.get(f"/mood/entries/{entry_id}", headers=auth)
    assert entry.status_code == 200
    assert entry.json()["data"]["primary_emotion"] == "sad"

    feedback = client.post(f"/mood/entries/{entry_id}/feedback", headers=auth,
                           json={"accuracy_rating": 5, "helpfulness_rating": 4})
    assert feedback.status_code == 200
    assert feedback.json()["data"]["feedback"]["accuracy_rating"] == 5

    bad_rating = client.post(f"/mood/entries/{entry_id}/feedback", headers=auth,
                             json={"accuracy_rating": 9, "helpfulness_rating": 4})
    assert bad_rating.status_code == 400

    assert client.delete(f"/mood/entries/{entry_id}", headers=auth).status_code == 200
    assert client.get(f"/mood/entries/{entry_id}", headers=auth).status_code == 404


def test_entries_are_private(client, make_user):
    _, owner = make_user("owner")
    _, other = make_user("other")
    entry_id = _analyze(client, owner).json()["data"]["entry_id"]
    assert client.get(f"/mood/entries/{entry_id}", headers=other).status_code == 404


def test_analytics(client, auth):
    _analyze(client, auth)
    data = client.get("/mood/analytics?timeframe=7d", headers=auth).json()["data"]
    assert data["total_entries"] == 1
    assert data["dominant_emotion"] == "sad"
    assert "generated_at" in data


def test_suggestions(client, auth):
    response = client.get("/mood/suggestions?emotion=anxious&intensity=high", headers=auth)
    assert response.status_code == 200
    assert response.json()["data"]["suggestions"][0]["type"] == "emergency"

    islamic = client.get(
        "/mood/suggestions",
        params={"emotion": "peaceful", "context": json.dumps({"suggested_tradition": "Islam"})},
        headers=auth,
    )
    assert any(s["type"] == "tasbih" for s in islamic.json()["data"]["suggestions"])

    assert client.get("/mood/suggestions?emotion=bored", headers=auth).status_code == 400
    assert client.get("/mood/suggestions?intensity=extreme", headers=auth).status_code == 400
    assert client.get("/mood/suggestions?context=not-json", headers=auth).status_code == 400


def test_export_json_and_csv(client, auth):
    _analyze(client, auth)

    as_json = client.get("/mood/export?format=json", headers=auth)
    assert as_json.status_code == 200
    assert "attachment" in as_json.headers["Content-Disposition"]
    assert as_json.json()["total_entries"] == 1

    as_csv = client.get("/mood/export?format=csv&timeframe=all", headers=auth)
    assert as_csv.status_code == 200
    assert as_csv.headers["Content-Type"].startswith("text/csv")
    assert as_csv.text.startswith('"Date"')


def test_emotions_catalogue(client):
    data = client.get("/mood/emotions").json()["data"]
    assert len(data["emotions"]) == 9
    assert data["intensity_levels"] == ["low", "medium", "high"]


def test_health_needs_no_auth(client):
    response = client.get("/mood/health")
    assert response.status_code == 200
    assert response.json()["data"]["database"]["status"] == "connected"
