# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import re
import copy
import time
import uuid
import random
import logging
import threading
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session

from mirror_of_heart.models.api_log import ApiLog
from mirror_of_heart.models.conversation import Conversation, ChatMessage, DEFAULT_TITLE, default_context
from mirror_of_heart.models.user import User
from mirror_of_heart.services import gemini_service
from mirror_of_heart.utils.cache import BoundedCache
from mirror_of_heart.utils.emotion_analysis import analyze_text_emotion
from mirror_of_heart.utils.timeframes import timeframe_start
from mirror_of_heart.utils.prompt_templates import (
    CONVERSATION_TONES,
    SAFETY_SETTINGS,
    EMOTION_FALLBACKS,
    TONE_FALLBACKS,
    GENERIC_FALLBACKS,
    EMOTION_ACTIONS,
    TASBIH_ACTION,
    generation_config,
    system_prompt,
    contextual_info,
    conversation_history,
    chat_prompt,
)

logger = logging.getLogger(__name__)

INPUT_TYPES = ["text", "voice", "image"]
MAX_MESSAGE_LENGTH = 2000
MAX_TITLE_LENGTH = 100
MAX_STORED_MESSAGES = 30
MAX_MOOD_HISTORY = 20
MAX_LAST_EMOTIONS = 10
MAX_EMOTION_PATTERNS = 50
MAX_HISTORY_PAGE = 50
TITLE_AFTER_MESSAGES = 4

_MARKDOWN = [
    (re.compile(r"\*\*(.*?)\*\*"), r"\1"),
    (re.compile(r"\*(.*?)\*"), r"\1"),
    (re.compile(r"#{1,6}\s"), ""),
]


class ChatbotError(ValueError):
    def __init__(self, message: str, error_code: str = "INVALID_INPUT"):
        super().__init__(message)
        self.error_code = error_code


def current_time() -> datetime:
    return datetime.now()


def fallback_response(tone: str = "supportive", emotion: Optional[str] = None) -> str:
    """Canned reply chosen by emotion first, then tone."""
    if emotion and emotion in EMOTION_FALLBACKS:
        return random.choice(EMOTION_FALLBACKS[emotion])
    if tone in TONE_FALLBACKS:
        return random.choice(TONE_FALLBACKS[tone])
    return random.choice(GENERIC_FALLBACKS)


def post_process_response(text: str, tone: str, emotion: Optional[str] = None) -> str:
    cleaned = text
    for pattern, replacement in _MARKDOWN:
        cleaned = pattern.sub(replacement, cleaned)
    cleaned = cleaned.strip()

    if len(cleaned) > 600:
        sentences = cleaned.split(". ")
        cleaned = ". ".join(sentences[:4]) + ("." if len(sentences) > 4 else "")

    if tone == "spiritual" and "peace" not in cleaned and "blessing" not in cleaned:
        if random.random() < 0.3:
            cleaned += " May you find peace in this moment."

    if len(cleaned) < 20:
        return fallback_response(tone, emotion)
    return cleaned


def suggested_actions(emotion: Optional[dict], tone: str) -> list:
    actions = []
    if emotion and emotion.get("emotion"):
        actions.extend(dict(a) for a in EMOTION_ACTIONS.get(emotion["emotion"], []))
    if tone == "spiritual":
        actions.append(dict(TASBIH_ACTION))
    return actions[:3]


class ChatbotService:
    """
    Emotion-aware chat over the Gemini API.
    Conversations live in the database; the caches below only hold summaries,
    recent replies and per-user emotion patterns for this process.
    """

    def __init__(self):
        self.conversation_cache = BoundedCache(150)
        self.response_cache = BoundedCache(200)
        self.emotion_patterns = {}
        self._patterns_lock = threading.Lock()
        self._metrics_lock = threading.Lock()
        self.reset_metrics()

    # -------------------------
    # Validation
    # -------------------------

    @staticmethod
    def validate_input(message: str, tone: str, input_type: str) -> None:
        if not message or not isinstance(message, str) or not message.strip():
            raise ChatbotError("Message cannot be empty", "EMPTY_MESSAGE")
        if len(message) > MAX_MESSAGE_LENGTH:
            raise ChatbotError("Message too long. Please keep messages under 2000 characters.", "MESSAGE_TOO_LONG")
        if tone not in CONVERSATION_TONES:
            raise ChatbotError(
                f"Invalid conversation tone. Must be one of: {', '.join(CONVERSATION_TONES)}", "INVALID_TONE"
            )
        if input_type not in INPUT_TYPES:
            raise ChatbotError(
                f"Invalid input type. Must be one of: {', '.join(INPUT_TYPES)}", "INVALID_INPUT_TYPE"
            )

    # -------------------------
    # Main entry point
    # -------------------------

    def process_message(self, db: Session, user: User, message: str, session_id: Optional[str] = None,
                        input_type: str = "text", tone: str = "supportive", context: Optional[dict] = None,
                        priority: str = "normal", include_emotion: bool = True) -> dict:
        started = time.perf_counter()
        context = context or {}
        self._bump("total_requests")

        try:
            self.validate_input(message, tone, input_type)

            conversation = self.get_or_create_conversation(db, user, session_id or str(uuid.uuid4()), context)

            emotion = None
            if include_emotion:
                emotion = self.analyze_message_emotion(message, input_type, conversation)
                self._cache_emotion_pattern(user.id, emotion)
                self._update_emotional_context(conversation, emotion)

            conversation.messages.append(ChatMessage(
                role="user",
                content=message.strip(),
                timestamp=datetime.utcnow(),
                meta={
                    "emotion": emotion["emotion"] if emotion else None,
                    "confidence": emotion["confidence"] if emotion else None,
                    "input_type": input_type,
                    "context": context,
                    "priority": priority,
                    "message_length": len(message),
                    "word_count": len(message.split()),
                },
            ))

            reply, cache_used, source = self.generate_response(conversation, user, tone, emotion, priority)
            processing_time = round((time.perf_counter() - started) * 1000, 2)

            conversation.messages.append(ChatMessage(
                role="assistant",
                content=reply,
                timestamp=datetime.utcnow(),
                meta={
                    "input_type": "text",
                    "generated_by": source,
                    "conversation_tone": tone,
                    "response_length": len(reply),
                    "processing_time": processing_time,
                },
            ))

            self._update_conversation_metadata(conversation, tone, emotion)
            db.commit()
            db.refresh(conversation)
            self.conversation_cache.set(conversation.session_id, conversation.to_summary())

            processing_time = round((time.perf_counter() - started) * 1000, 2)
            self._record_response_time(processing_time)
            self.log_interaction(db, user.id, 200, {
                "session_id": conversation.session_id,
                "conversation_tone": tone,
                "input_type": input_type,
                "priority": priority,
                "emotion": emotion["emotion"] if emotion else None,
                "response_time": processing_time,
                "message_length": len(message),
                "response_length": len(reply),
                "response_source": source,
            })

            return {
                "response": reply,
                "emotion": emotion,
                "session_id": conversation.session_id,
                "conversation_id": conversation.id,
                "message_count": len(conversation.messages),
                "conversation_title": conversation.title,
                "suggested_actions": suggested_actions(emotion, tone),
                "response_metadata": {
                    "processing_time": processing_time,
                    "cache_used": cache_used,
                    "response_source": source,
                    "emotion_confidence": emotion["confidence"] if emotion else 0,
                },
            }

        except ChatbotError:
            self._bump("errors")
            raise
        except Exception as e:
            self._bump("errors")
            db.rollback()
            logger.exception("❌ Chatbot failed to process message")
            self.log_interaction(db, user.id, 500, {"error": str(e), "session_id": session_id})
            raise

    # -------------------------
    # Conversations
    # -------------------------

    def get_or_create_conversation(self, db: Session, user: User, session_id: str, context: dict) -> Conversation:
        conversation = db.query(Conversation).filter(Conversation.session_id == session_id).first()
        if conversation:
            if conversation.user_id != user.id:
                raise ChatbotError("Session does not belong to this user", "INVALID_SESSION")
            return conversation

        initial = default_context()
        religion = context.get("religion") or user.spiritual_background
        if religion:
            initial["spiritual_preferences"]["religion"] = religion

        conversation = Conversation(
            user_id=user.id,
            session_id=session_id,
            title=DEFAULT_TITLE,
            context=initial,
            last_activity=datetime.utcnow(),
        )
        db.add(conversation)
        db.flush()
        logger.info(f"💬 New conversation {session_id} for user {user.id}")
        return conversation

    def get_conversation_history(self, db: Session, user_id: int, limit: int = 20, offset: int = 0) -> dict:
        limit = max(1, min(limit, MAX_HISTORY_PAGE))
        offset = max(0, offset)
        query = db.query(Conversation).filter(Conversation.user_id == user_id, Conversation.is_active.is_(True))
        total = query.count()
        conversations = (
            query.order_by(Conversation.last_activity.desc(), Conversation.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return {
            "conversations": [c.to_summary() for c in conversations],
            "pagination": {"total": total, "limit": limit, "offset": offset, "has_more": offset + limit < total},
        }

    def _owned(self, db: Session, user_id: int, session_id: str) -> Optional[Conversation]:
        return (
            db.query(Conversation)
            .filter(Conversation.session_id == session_id, Conversation.user_id == user_id,
                    Conversation.is_active.is_(True))
            .first()
        )

    def get_conversation_by_id(self, db: Session, user_id: int, session_id: str) -> Optional[dict]:
        conversation = self._owned(db, user_id, session_id)
        return conversation.to_dict() if conversation else None

    def update_conversation_title(self, db: Session, user_id: int, session_id: str, title: str) -> bool:
        if not title or not title.strip():
            raise ChatbotError("Title is required and cannot be empty", "EMPTY_TITLE")
        if len(title) > MAX_TITLE_LENGTH:
            raise ChatbotError("Title too long. Please keep titles under 100 characters.", "TITLE_TOO_LONG")

        conversation = self._owned(db, user_id, session_id)
        if not conversation:
            return False
        conversation.title = title.strip()
        db.commit()
        self.conversation_cache.delete(session_id)
        return True

    def delete_conversation(self, db: Session, user_id: int, session_id: str) -> bool:
        conversation = self._owned(db, user_id, session_id)
        if not conversation:
            return False
        db.delete(conversation)
        db.commit()
        self.conversation_cache.delete(session_id)
        logger.info(f"🗑️ Conversation {session_id} deleted for user {user_id}")
        return True

    # -------------------------
    # Emotion
    # -------------------------

    def analyze_message_emotion(self, message: str, input_type: str, conversation: Conversation) -> dict:
        if input_type != "text":
            # Voice and image messages carry no analyzable signal yet
            return {"emotion": "neutral", "confidence": 0.5}

        result = analyze_text_emotion(message)
        emotion = {"emotion": result["emotion"], "confidence": result["confidence"]}

        history = ((conversation.context or {}).get("emotional_state") or {}).get("mood_history") or []
        recent = history[-3:]
        if recent:
            same = sum(1 for entry in recent if entry.get("mood") == emotion["emotion"])
            if same >= 2:
                emotion["confidence"] = round(min(emotion["confidence"] + 0.1, 0.95), 2)
                emotion["pattern"] = "consistent"
            else:
                emotion["pattern"] = "shifting"
        return emotion

    def _update_emotional_context(self, conversation: Conversation, emotion: dict) -> None:
        # JSON columns only persist on reassignment
        context = copy.deepcopy(conversation.context or default_context())
        state = context.setdefault("emotional_state", {"current_mood": None, "mood_history": []})
        state["current_mood"] = emotion["emotion"]
        history = state.get("mood_history") or []
        history.append({
            "mood": emotion["emotion"],
            "confidence": emotion["confidence"],
            "timestamp": datetime.utcnow().isoformat(),
        })
        state["mood_history"] = history[-MAX_MOOD_HISTORY:]
        conversation.context = context

    def _cache_emotion_pattern(self, user_id: int, emotion: dict) -> None:
        with self._patterns_lock:
            patterns = self.emotion_patterns.setdefault(user_id, [])
            patterns.append({
                "emotion": emotion["emotion"],
                "confidence": emotion["confidence"],
                "timestamp": datetime.utcnow().isoformat(),
            })
            if len(patterns) > MAX_EMOTION_PATTERNS:
                del patterns[:len(patterns) - MAX_EMOTION_PATTERNS]

    # -------------------------
    # Reply generation
    # -------------------------

    @staticmethod
    def response_cache_key(conversation: Conversation, tone: str, emotion: Optional[dict]) -> str:
        messages = conversation.messages
        last = messages[-1].content if messages else ""
        label = (emotion or {}).get("emotion") or \
            ((conversation.context or {}).get("emotional_state") or {}).get("current_mood") or "neutral"
        bucket = len(messages) // 5 * 5
        return f"{tone}-{label}-{bucket}-{last[:30]}"

    def generate_response(self, conversation: Conversation, user: User, tone: str,
                          emotion: Optional[dict], priority: str = "normal") -> tuple:
        """Returns (reply, cache_used, source) where source is 'cache', 'gemini' or 'fallback'."""
        label = (emotion or {}).get("emotion")
        cache_key = self.response_cache_key(conversation, tone, emotion)

        if priority != "high":
            cached = self.response_cache.get(cache_key)
            if cached:
                self._bump("cache_hits")
                return cached, True, "cache"

        api_key = gemini_service.resolve_api_key(user.gemini_api_key)
        if not api_key:
            logger.warning("⚠️ No Gemini API key configured, using fallback reply.")
            return fallback_response(tone, label), False, "fallback"

        messages = [
            {"role": m.role, "content": m.content, "timestamp": m.timestamp, "metadata": m.meta or {}}
            for m in conversation.messages
        ]
        context = conversation.context or default_context()
        now = current_time()
        prompt = chat_prompt(
            system_prompt(
                tone,
                emotion,
                (context.get("spiritual_preferences") or {}).get("religion"),
                len(messages),
                now.hour,
            ),
            contextual_info((context.get("emotional_state") or {}).get("mood_history") or [], emotion, len(messages), now),
            conversation_history(messages),
            emotion,
        )
        payload = gemini_service.build_payload(prompt, generation_config(tone), SAFETY_SETTINGS)

        try:
            result = gemini_service.generate_content(payload, api_key)
        except gemini_service.GeminiServiceError as e:
            logger.warning(f"⚠️ Gemini unavailable, using fallback reply: {e}")
            return fallback_response(tone, label), False, "fallback"

        text = gemini_service.extract_text(result)
        if not text:
            return fallback_response(tone, label), False, "fallback"

        reply = post_process_response(text, tone, label)
        if priority != "high":
            self.response_cache.set(cache_key, reply)
        return reply, False, "gemini"

    # -------------------------
    # Metadata & logging
    # -------------------------

    def _update_conversation_metadata(self, conversation: Conversation, tone: str, emotion: Optional[dict]) -> None:
        conversation.last_activity = datetime.utcnow()

        context = copy.deepcopy(conversation.context or default_context())
        context["conversation_tone"] = tone
        conversation.context = context

        if conversation.title == DEFAULT_TITLE and len(conversation.messages) >= TITLE_AFTER_MESSAGES:
            conversation.title = self.generate_title(conversation)

        stats = copy.deepcopy(conversation.stats) if conversation.stats else {
            "total_messages": 0,
            "emotion_counts": {},
            "last_emotions": [],
        }
        stats["total_messages"] = len(conversation.messages)
        if emotion and emotion.get("emotion"):
            counts = stats.setdefault("emotion_counts", {})
            counts[emotion["emotion"]] = counts.get(emotion["emotion"], 0) + 1
            last = stats.setdefault("last_emotions", [])
            last.append({
                "emotion": emotion["emotion"],
                "confidence": emotion["confidence"],
                "timestamp": datetime.utcnow().isoformat(),
            })
            stats["last_emotions"] = last[-MAX_LAST_EMOTIONS:]
        conversation.stats = stats

        # delete-orphan removes the trimmed rows
        overflow = len(conversation.messages) - MAX_STORED_MESSAGES
        for old in list(conversation.messages[:max(overflow, 0)]):
            conversation.messages.remove(old)

    @staticmethod
    def generate_title(conversation: Conversation) -> str:
        first = next((m.content for m in conversation.messages if m.role == "user"), "")
        words = first.split()
        title = " ".join(words[:6])
        if len(title) > 50:
            title = title[:47].rstrip() + "..."
        elif len(words) > 6:
            title += "..."
        return title or DEFAULT_TITLE

    @staticmethod
    def log_interaction(db: Session, user_id: int, status: int, details: dict) -> None:
        try:
            db.add(ApiLog(user_id=user_id, endpoint="/chatbot/message", method="POST", status=status, details=details))
            db.commit()
        except Exception as e:
            db.rollback()
            logger.warning(f"⚠️ Failed to write chatbot ApiLog: {e}")

    # -------------------------
    # Analytics & health
    # -------------------------

    def get_analytics(self, db: Session, user_id: int, timeframe: str = "7d") -> dict:
        start = timeframe_start(timeframe, default_days=7)
        query = db.query(Conversation).filter(
            Conversation.user_id == user_id,
            Conversation.last_activity >= start,
        )
        conversations = query.all()

        total_messages = 0
        emotion_distribution = {}
        tone_usage = {}
        for conversation in conversations:
            tone = (conversation.context or {}).get("conversation_tone") or "supportive"
            tone_usage[tone] = tone_usage.get(tone, 0) + 1
            for message in conversation.messages:
                if start is not None and message.timestamp and message.timestamp < start:
                    continue
                total_messages += 1
                label = (message.meta or {}).get("emotion") if message.role == "user" else None
                if label:
                    emotion_distribution[label] = emotion_distribution.get(label, 0) + 1

        dominant = max(emotion_distribution, key=emotion_distribution.get) if emotion_distribution else None
        average = round(total_messages / len(conversations), 2) if conversations else 0

        return {
            "timeframe": timeframe,
            "total_conversations": len(conversations),
            "total_messages": total_messages,
            "emotion_distribution": emotion_distribution,
            "dominant_emotion": dominant,
            "tone_usage": tone_usage,
            "average_messages_per_conversation": average,
        }

    def _bump(self, key: str) -> None:
        with self._metrics_lock:
            self.metrics[key] += 1

    def _record_response_time(self, elapsed: float) -> None:
        with self._metrics_lock:
            self.metrics["responses"] += 1
            count = self.metrics["responses"]
            previous = self.metrics["average_response_time"]
            self.metrics["average_response_time"] = round(previous + (elapsed - previous) / count, 2)

    def reset_metrics(self) -> None:
        with self._metrics_lock:
            self.metrics = {
                "total_requests": 0,
                "responses": 0,
                "average_response_time": 0.0,
                "errors": 0,
                "cache_hits": 0,
            }

    def trim_caches(self) -> dict:
        """Periodic sweep: conversations down to 100, replies down to 150, patterns to the last 30 per user."""
        with self._patterns_lock:
            for user_id, patterns in self.emotion_patterns.items():
                if len(patterns) > 30:
                    self.emotion_patterns[user_id] = patterns[-30:]
        return {
            "conversation_cache": self.conversation_cache.trim(100),
            "response_cache": self.response_cache.trim(150),
        }

    def forget_user(self, user_id: int, session_ids: list) -> None:
        for session_id in session_ids:
            self.conversation_cache.delete(session_id)
        with self._patterns_lock:
            self.emotion_patterns.pop(user_id, None)

    def clear_caches(self) -> None:
        self.conversation_cache.clear()
        self.response_cache.clear()
        with self._patterns_lock:
            self.emotion_patterns.clear()

    def get_health_metrics(self) -> dict:
        with self._metrics_lock:
            metrics = dict(self.metrics)
        return {
            "status": "healthy",
            "metrics": metrics,
            "cache_stats": {
                "conversation_cache_size": len(self.conversation_cache),
                "response_cache_size": len(self.response_cache),
                "emotion_pattern_cache_size": len(self.emotion_patterns),
            },
            "timestamp": datetime.utcnow().isoformat(),
        }


chatbot_service = ChatbotService()
