# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


def _send(client, headers, message="I feel so sad today", **extra):
    return client.post("/chatbot/message", headers=headers, json={"message": message, **extra})


def test_send_message(client, auth, gemini):
    response = _send(client, auth)
    assert response.status_code == 200

    data = response.json()["data"]
    assert data["session_id"]
    assert data["emotion"]["emotion"] == "sad"
    assert data["message_count"] == 2
    assert len(data["suggested_actions"]) == 3


def test_unknown_tone_and_input_type_degrade_to_defaults(client, auth, gemini):
    response = _send(client, auth, conversation_tone="sarcastic", input_type="video")
    assert response.status_code == 200
    session_id = response.json()["data"]["session_id"]

    conversation = client.get(f"/chatbot/conversations/{session_id}", headers=auth).json()["data"]
    assert conversation["context"]["conversation_tone"] == "supportive"
    assert conversation["messages"][0]["metadata"]["input_type"] == "text"


def test_empty_message_is_rejected(client, auth, gemini):
    response = _send(client, auth, message="   ")
    assert response.status_code == 400
    assert response.json()["detail"]["error_code"] == "EMPTY_MESSAGE"


def test_missing_message_is_validation_error(client, auth):
    response = client.post("/chatbot/message", headers=auth, json={})
    assert response.status_code == 400
    assert response.json()["detail"] == "Validation failed"


def test_foreign_session_is_rejected(client, make_user, gemini):
    _, owner = make_user("owner")
    _, other = make_user("other")
    session_id = _send(client, owner).json()["data"]["session_id"]

    response = _send(client, other, session_id=session_id)
    assert response.status_code == 400
    assert response.json()["detail"]["error_code"] == "INVALID_SESSION"
    assert client.get(f"/chatbot/conversations/{session_id}", headers=other).status_code == 404


def test_conversation_management(client, auth, gemini):
    session_id = _send(client, auth).json()["data"]["session_id"]
    _send(client, auth, message="and tired", session_id=session_id)

    listing = client.get("/chatbot/conversations", headers=auth).json()["data"]
    assert listing["pagination"]["total"] == 1
    assert listing["conversations"][0]["message_count"] == 4

    renamed = client.put(f"/chatbot/conversations/{session_id}/title", headers=auth, json={"title": "Hard week"})
    assert renamed.status_code == 200
    detail = client.get(f"/chatbot/conversations/{session_id}", headers=auth).json()["data"]
    assert detail["title"] == "Hard week"
    assert len(detail["messages"]) == 4

    too_long = client.put(f"/chatbot/conversations/{session_id}/title", headers=auth, json={"title": "x" * 101})
    assert too_long.status_code == 400
    assert too_long.json()["detail"]["error_code"] == "TITLE_TOO_LONG"

    assert client.delete(f"/chatbot/conversations/{session_id}", headers=auth).status_code == 200
    assert client.get(f"/chatbot/conversations/{session_id}", headers=auth).status_code == 404
    assert client.delete(f"/chatbot/conversations/{session_id}", headers=auth).status_code == 404


def test_rename_unknown_conversation(client, auth):
    response = client.put("/chatbot/conversations/missing/title", headers=auth, json={"title": "Hello"})
    assert response.status_code == 404


def test_analytics_defaults_invalid_timeframe(client, auth, gemini):
    _send(client, auth)
    data = client.get("/chatbot/analytics?timeframe=forever", headers=auth).json()["data"]
    assert data["timeframe"] == "7d"
    assert data["total_conversations"] == 1


def test_health_needs_no_auth(client):
    response = client.get("/chatbot/health")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "healthy"
