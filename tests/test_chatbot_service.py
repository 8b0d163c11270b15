# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import pytest

from mirror_of_heart.models.api_log import ApiLog
from mirror_of_heart.models.conversation import Conversation
from mirror_of_heart.models.user import User
from mirror_of_heart.services.chatbot_service import (
    ChatbotError,
    chatbot_service,
    fallback_response,
    post_process_response,
    suggested_actions,
)
from mirror_of_heart.services.gemini_service import GeminiServiceError
from mirror_of_heart.utils.prompt_templates import EMOTION_FALLBACKS, TONE_FALLBACKS


@pytest.fixture
def user(make_user, db):
    user_id, _ = make_user("hana")
    return db.query(User).filter(User.id == user_id).first()


@pytest.fixture
def gemini_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "server-key")


def test_fallback_without_api_key(db, user, gemini):
    result = chatbot_service.process_message(db, user, "I feel so sad and lonely")

    assert result["response_metadata"]["response_source"] == "fallback"
    assert result["response"] in EMOTION_FALLBACKS["sad"]
    assert result["emotion"]["emotion"] == "sad"
    assert result["message_count"] == 2
    assert gemini.calls == []


def test_gemini_reply_and_prompt(db, user, gemini, gemini_key, no_random_flourish):
    result = chatbot_service.process_message(db, user, "I feel anxious about tomorrow", tone="reflective")

    assert result["response"] == "I hear you, and you are not alone in this."
    assert result["response_metadata"]["response_source"] == "gemini"

    call = gemini.calls[0]
    assert call["api_key"] == "server-key"
    prompt = call["payload"]["contents"][0]["parts"][0]["text"]
    assert "I feel anxious about tomorrow" in prompt
    assert call["payload"]["generationConfig"]["temperature"] == 0.8
    assert len(call["payload"]["safetySettings"]) == 4


def test_user_key_overrides_server_key(db, make_user, gemini, gemini_key):
    user_id, _ = make_user("keyed", gemini_api_key="personal-key")
    keyed = db.query(User).filter(User.id == user_id).first()

    chatbot_service.process_message(db, keyed, "hello there")
    assert gemini.calls[0]["api_key"] == "personal-key"


def test_gemini_failure_falls_back(db, user, gemini, gemini_key):
    gemini.error = GeminiServiceError("Gemini API request failed", details="quota")
    result = chatbot_service.process_message(db, user, "hello there", tone="celebratory")

    assert result["response_metadata"]["response_source"] == "fallback"
    assert result["response"] in TONE_FALLBACKS["celebratory"]


def test_blocked_reply_falls_back(db, user, gemini, gemini_key):
    gemini.reply = {"candidates": []}
    result = chatbot_service.process_message(db, user, "hello there")
    assert result["response_metadata"]["response_source"] == "fallback"


def test_repeated_message_is_served_from_cache(db, user, gemini, gemini_key):
    first = chatbot_service.process_message(db, user, "I feel so sad today")
    second = chatbot_service.process_message(db, user, "I feel so sad today", session_id=first["session_id"])

    assert second["response_metadata"]["response_source"] == "cache"
    assert second["response_metadata"]["cache_used"] is True
    assert len(gemini.calls) == 1


def test_high_priority_skips_cache(db, user, gemini, gemini_key):
    first = chatbot_service.process_message(db, user, "I feel so sad today")
    chatbot_service.process_message(db, user, "I feel so sad today", session_id=first["session_id"], priority="high")
    assert len(gemini.calls) == 2


def test_title_generated_after_two_exchanges(db, user, gemini):
    first = chatbot_service.process_message(db, user, "Thinking about my grandmother and her garden today")
    assert first["conversation_title"] == "New Conversation"

    second = chatbot_service.process_message(db, user, "She loved roses", session_id=first["session_id"])
    assert second["conversation_title"] == "Thinking about my grandmother and her..."


def test_repeated_mood_raises_confidence(db, user, gemini):
    session = chatbot_service.process_message(db, user, "I am sad")["session_id"]
    chatbot_service.process_message(db, user, "still sad", session_id=session)
    third = chatbot_service.process_message(db, user, "so sad", session_id=session)

    assert third["emotion"]["pattern"] == "consistent"
    assert third["emotion"]["confidence"] == 0.8


def test_stored_messages_are_capped(db, user, gemini):
    session = None
    for i in range(16):
        session = chatbot_service.process_message(db, user, f"message number {i}", session_id=session)["session_id"]

    conversation = db.query(Conversation).filter(Conversation.session_id == session).first()
    db.refresh(conversation)
    assert len(conversation.messages) == 30
    assert conversation.messages[0].content == "message number 1"


def test_foreign_session_is_rejected(db, user, make_user, gemini):
    session = chatbot_service.process_message(db, user, "hello there")["session_id"]
    other_id, _ = make_user("other")
    other = db.query(User).filter(User.id == other_id).first()

    with pytest.raises(ChatbotError) as excinfo:
        chatbot_service.process_message(db, other, "hi", session_id=session)
    assert excinfo.value.error_code == "INVALID_SESSION"


@pytest.mark.parametrize("message, tone, input_type, code", [
    ("   ", "supportive", "text", "EMPTY_MESSAGE"),
    ("x" * 2001, "supportive", "text", "MESSAGE_TOO_LONG"),
    ("hello", "sarcastic", "text", "INVALID_TONE"),
    ("hello", "supportive", "video", "INVALID_INPUT_TYPE"),
])
def test_validation_error_codes(message, tone, input_type, code):
    with pytest.raises(ChatbotError) as excinfo:
        chatbot_service.validate_input(message, tone, input_type)
    assert excinfo.value.error_code == code


def test_interactions_are_logged(db, user, gemini):
    chatbot_service.process_message(db, user, "hello there")
    log = db.query(ApiLog).filter(ApiLog.user_id == user.id).first()

    assert log.endpoint == "/chatbot/message"
    assert log.status == 200
    assert log.details["response_source"] == "fallback"


def test_analytics(db, user, gemini):
    session = chatbot_service.process_message(db, user, "I am sad", tone="spiritual")["session_id"]
    chatbot_service.process_message(db, user, "so sad", session_id=session, tone="spiritual")
    chatbot_service.process_message(db, user, "what a wonderful day")

    analytics = chatbot_service.get_analytics(db, user.id, "7d")
    assert analytics["total_conversations"] == 2
    assert analytics["total_messages"] == 6
    assert analytics["emotion_distribution"] == {"sad": 2, "happy": 1}
    assert analytics["dominant_emotion"] == "sad"
    assert analytics["tone_usage"] == {"spiritual": 1, "supportive": 1}
    assert analytics["average_messages_per_conversation"] == 3


def test_post_process_strips_markdown_and_short_replies():
    assert post_process_response("**Breathe** slowly, you are doing well.", "supportive") == \
        "Breathe slowly, you are doing well."
    assert post_process_response("ok", "supportive", "sad") in EMOTION_FALLBACKS["sad"]


def test_fallback_prefers_emotion_then_tone():
    assert fallback_response("reflective", "angry") in EMOTION_FALLBACKS["angry"]
    assert fallback_response("reflective", "neutral") in TONE_FALLBACKS["reflective"]


def test_suggested_actions_are_capped():
    assert len(suggested_actions({"emotion": "sad"}, "spiritual")) == 3
    assert suggested_actions({"emotion": "neutral"}, "spiritual") == [
        {"type": "tasbih", "text": "Digital Tasbih", "icon": "📿"}
    ]
