# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import csv
import io
import time
import logging
import threading
from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy.orm import Session

from mirror_of_heart.models.mood import MoodEntry, MOOD_EMOTIONS, POSITIVE_EMOTIONS, NEGATIVE_EMOTIONS, ANALYSIS_TYPES
from mirror_of_heart.models.user import User
from mirror_of_heart.services.emotion_model_service import classify_emotion
from mirror_of_heart.utils.cache import BoundedCache
from mirror_of_heart.utils.emotion_analysis import analyze_text_emotion, dominant_label
from mirror_of_heart.utils.timeframes import timeframe_start
from mirror_of_heart.utils.spiritual_guidance import (
    EMOTION_CATEGORIES,
    SPIRITUAL_TRADITIONS,
    GENERAL_SPIRITUAL_TERMS,
    DEFAULT_GUIDANCE,
    EMOTION_SUGGESTIONS,
    TASBIH_SUGGESTION,
    IMMEDIATE_SUPPORT_SUGGESTION,
)

logger = logging.getLogger(__name__)

MAX_CONTENT_LENGTH = 5000
MODEL_VERSION = "2.0"
API_VERSION = "2.0"

SORT_FIELDS = {
    "created_at": MoodEntry.created_at,
    "confidence": MoodEntry.confidence,
    "primary_emotion": MoodEntry.primary_emotion,
}

# Keyword tagger labels that differ from mood labels
KEYWORD_TO_MOOD = {"happy": "joyful"}

# Confidence used when suggestions are requested for a bare intensity
INTENSITY_CONFIDENCE = {"high": 0.85, "medium": 0.7, "low": 0.5}

NEUTRAL_ANALYSIS = {"emotion": "neutral", "confidence": 0.5, "scores": {"neutral": 0.5}}

# Trend needs positive counts over the 5 newest and the next 5 entries
TREND_WINDOW = 5


class MoodAnalysisError(ValueError):
    def __init__(self, message: str, error_code: str = "INVALID_INPUT"):
        super().__init__(message)
        self.error_code = error_code


def current_hour() -> int:
    return datetime.now().hour


def _neutral() -> dict:
    return {**NEUTRAL_ANALYSIS, "scores": dict(NEUTRAL_ANALYSIS["scores"])}


def _mentions(text: str, term: str) -> bool:
    # Substring match, so "prayers" counts for "prayer"
    return term in text


def calculate_intensity(confidence: float) -> str:
    if confidence >= 0.8:
        return "high"
    if confidence >= 0.6:
        return "medium"
    return "low"


def trend_between(recent: list, older: list) -> str:
    recent_positive = sum(1 for e in recent if e in POSITIVE_EMOTIONS)
    older_positive = sum(1 for e in older if e in POSITIVE_EMOTIONS)
    if recent_positive > older_positive:
        return "improving"
    if recent_positive < older_positive:
        return "declining"
    return "stable"


def combine_analyses(analyses: list) -> dict:
    """
    Weighted mean of per-label scores.
    `analyses` is a list of (result, weight) pairs; a result without `scores`
    contributes its confidence to its own label.
    """
    if not analyses:
        return _neutral()

    emotion_scores = {}
    total_weight = 0.0
    for result, weight in analyses:
        total_weight += weight
        scores = result.get("scores") or {result["emotion"]: result["confidence"]}
        for emotion, score in scores.items():
            emotion_scores[emotion] = emotion_scores.get(emotion, 0.0) + score * weight

    if total_weight <= 0:
        return _neutral()

    emotion_scores = {emotion: score / total_weight for emotion, score in emotion_scores.items()}
    dominant = dominant_label(emotion_scores)
    return {
        "emotion": dominant,
        "confidence": emotion_scores[dominant],
        "scores": emotion_scores,
        "method": "combined",
    }


class MoodDetectionService:
    """
    Mood analysis with spiritual context awareness.
    Holds the analysis/user-context caches and running metrics for the process.
    """

    def __init__(self, analysis_cache_size: int = 200, context_cache_size: int = 100):
        self.analysis_cache = BoundedCache(analysis_cache_size)
        self.user_context_cache = BoundedCache(context_cache_size)
        self._metrics_lock = threading.Lock()
        self.reset_metrics()

    # -------------------------
    # Main entry point
    # -------------------------

    def analyze_mood(self, db: Session, user: User, input_data: dict, options: Optional[dict] = None) -> dict:
        started = time.perf_counter()
        options = options or {}
        include_insights = options.get("include_insights", True)
        include_suggestions = options.get("include_suggestions", True)
        save_to_history = options.get("save_to_history", True)

        self.validate_input(input_data)
        input_type = input_data["type"]
        content = input_data.get("content") or ""

        user_context = self.get_user_context(db, user)
        cache_used = bool(content) and self._text_cache_key(content) in self.analysis_cache

        if input_type == "text":
            analysis = self.analyze_text_mood(content, user_context)
        elif input_type == "voice":
            analysis = self.analyze_voice_mood(input_data.get("audio_data"), content, user_context)
        elif input_type == "image":
            analysis = self.analyze_image_mood(input_data.get("image_data"))
        else:
            analysis = self.analyze_combined_mood(input_data, user_context)

        spiritual_context = self.analyze_spiritual_context(content, user_context)
        insights = self.generate_insights(analysis, spiritual_context, user_context) if include_insights else []
        suggestions = self.generate_suggestions(analysis, spiritual_context) if include_suggestions else []
        guidance = self.get_personalized_guidance(analysis, spiritual_context, user_context)

        processing_time = round((time.perf_counter() - started) * 1000, 2)
        self._record_analysis(processing_time, cache_used)

        confidence = round(analysis["confidence"], 4)
        result = {
            "primary_emotion": analysis["emotion"],
            "confidence": confidence,
            "intensity": calculate_intensity(confidence),
            "emotions": {k: round(v, 4) for k, v in analysis.get("scores", {}).items()},
            "analysis_type": input_type,
            "spiritual_context": spiritual_context,
            "insights": insights,
            "suggestions": suggestions,
            "user_context": {
                "spiritual_background": user_context["spiritual_background"],
                "emotional_patterns": user_context["emotional_patterns"],
                "analysis_history": user_context["analysis_history"],
            },
            "personalized_guidance": guidance,
            "processing_time": processing_time,
            "timestamp": datetime.utcnow().isoformat(),
            "cache_used": cache_used,
            "entry_id": None,
        }

        if save_to_history:
            entry = self.save_mood_entry(db, user.id, result, input_data)
            result["entry_id"] = entry.id

        logger.info(f"🧠 Mood analyzed for user {user.id}: {result['primary_emotion']} ({confidence})")
        return result

    # -------------------------
    # Validation
    # -------------------------

    def validate_input(self, input_data: dict) -> None:
        if not input_data or not input_data.get("type"):
            raise MoodAnalysisError("Input type is required", "MISSING_REQUIRED_DATA")

        input_type = input_data["type"]
        if input_type not in ANALYSIS_TYPES:
            raise MoodAnalysisError("Invalid input type. Must be text, voice, image, or combined", "INVALID_INPUT")

        content = input_data.get("content") or ""
        if input_type == "text" and not content.strip():
            raise MoodAnalysisError("Text content is required for text analysis", "MISSING_TEXT_CONTENT")
        if input_type == "voice" and not (input_data.get("audio_data") or content):
            raise MoodAnalysisError("Audio data or transcript is required for voice analysis", "MISSING_VOICE_DATA")
        if input_type == "image" and not input_data.get("image_data"):
            raise MoodAnalysisError("Image data is required for image analysis", "MISSING_IMAGE_DATA")
        if len(content) > MAX_CONTENT_LENGTH:
            raise MoodAnalysisError(
                f"Text content too long. Maximum {MAX_CONTENT_LENGTH} characters allowed.", "CONTENT_TOO_LONG"
            )

    # -------------------------
    # Per-type analysis
    # -------------------------

    def analyze_text_mood(self, text: str, user_context: dict) -> dict:
        cache_key = self._text_cache_key(text)
        cached = self.analysis_cache.get(cache_key)
        if cached is not None:
            return cached

        combined = combine_analyses([
            (self.keyword_analysis(text), 0.4),
            (classify_emotion(text), 0.3),
            (self.contextual_analysis(text, user_context), 0.3),
        ])
        self.analysis_cache.set(cache_key, combined)
        return combined

    def analyze_voice_mood(self, audio_data: Optional[str], transcript: str, user_context: dict) -> dict:
        # Audio features are not analyzed yet; the transcript carries the signal
        if transcript:
            return {**self.analyze_text_mood(transcript, user_context),
                    "analysis_method": "transcript", "has_audio_data": bool(audio_data)}
        return _neutral()

    def analyze_image_mood(self, image_data: Optional[str]) -> dict:
        return {**_neutral(), "analysis_method": "placeholder", "has_image_data": bool(image_data)}

    def analyze_combined_mood(self, input_data: dict, user_context: dict) -> dict:
        content = input_data.get("content")
        analyses = []
        if content:
            analyses.append((self.analyze_text_mood(content, user_context), 0.5))
        if input_data.get("audio_data"):
            analyses.append((self.analyze_voice_mood(input_data["audio_data"], content, user_context), 0.3))
        if input_data.get("image_data"):
            analyses.append((self.analyze_image_mood(input_data["image_data"]), 0.2))
        return combine_analyses(analyses)

    @staticmethod
    def keyword_analysis(text: str) -> dict:
        basic = analyze_text_emotion(text)
        emotion = KEYWORD_TO_MOOD.get(basic["emotion"], basic["emotion"])
        return {"emotion": emotion, "confidence": basic["confidence"], "scores": {emotion: basic["confidence"]}}

    @staticmethod
    def contextual_analysis(text: str, user_context: dict) -> dict:
        lowered = text.lower()
        hour = current_hour()
        emotion, confidence = "neutral", 0.5

        if hour < 6 or hour > 22:
            if "can't sleep" in lowered or "worried" in lowered:
                emotion, confidence = "anxious", 0.7
        elif hour < 12:
            if "new day" in lowered or "morning" in lowered:
                emotion, confidence = "hopeful", 0.6

        dominant = user_context.get("emotional_patterns", {}).get("dominant_emotions") or []
        if dominant and dominant[0] == "sad" and emotion == "neutral":
            emotion, confidence = "sad", 0.6

        return {"emotion": emotion, "confidence": confidence, "scores": {emotion: confidence}, "method": "contextual"}

    # -------------------------
    # Spiritual context, insights, suggestions, guidance
    # -------------------------

    def analyze_spiritual_context(self, text: str, user_context: dict) -> dict:
        lowered = (text or "").lower()
        score = 0.0
        detected = {"spiritual": [], "religious": [], "practices": []}
        best_tradition, best_score = None, 0

        for tradition, data in SPIRITUAL_TRADITIONS.items():
            tradition_score = 0
            for keyword in data["keywords"]:
                if _mentions(lowered, keyword):
                    tradition_score += 1
                    score += 0.1
                    if keyword not in detected["religious"]:
                        detected["religious"].append(keyword)
            for practice in data["practices"]:
                if _mentions(lowered, practice):
                    tradition_score += 1
                    score += 0.15
                    if practice not in detected["practices"]:
                        detected["practices"].append(practice)
            if tradition_score > best_score:
                best_tradition, best_score = tradition, tradition_score

        for term in GENERAL_SPIRITUAL_TERMS:
            if _mentions(lowered, term):
                score += 0.05
                detected["spiritual"].append(term)

        background = user_context.get("spiritual_background")
        if background:
            score += 0.1

        return {
            "is_spiritual": score > 0.2,
            "score": round(min(score, 1.0), 2),
            "detected_terms": detected,
            "suggested_tradition": best_tradition or background,
        }

    @staticmethod
    def generate_insights(analysis: dict, spiritual_context: dict, user_context: dict) -> list:
        insights = []
        confidence = analysis["confidence"]

        if confidence > 0.8:
            insights.append({
                "type": "confidence",
                "message": f"Your {analysis['emotion']} emotion comes through very clearly in your expression.",
                "icon": "🎯",
            })
        elif confidence < 0.6:
            insights.append({
                "type": "uncertainty",
                "message": "Your emotions seem mixed right now, which is completely normal.",
                "icon": "🤔",
            })

        if spiritual_context.get("is_spiritual"):
            insights.append({
                "type": "spiritual",
                "message": "I notice spiritual themes in your thoughts. Your faith journey is important.",
                "icon": "✨",
            })

        trend = user_context.get("emotional_patterns", {}).get("recent_trend")
        if trend == "improving":
            insights.append({
                "type": "trend",
                "message": "Your emotional well-being has been trending positively recently.",
                "icon": "📈",
            })
        elif trend == "declining":
            insights.append({
                "type": "trend",
                "message": "I notice you've been going through some challenges lately. You're not alone.",
                "icon": "🤗",
            })

        if current_hour() < 6 and analysis["emotion"] == "anxious":
            insights.append({
                "type": "temporal",
                "message": "Late-night anxiety is common. Consider some calming practices before sleep.",
                "icon": "🌙",
            })

        return insights

    @staticmethod
    def generate_suggestions(analysis: dict, spiritual_context: Optional[dict] = None, limit: int = 4) -> list:
        emotion = analysis["emotion"]
        intensity = calculate_intensity(analysis["confidence"])
        tradition = (spiritual_context or {}).get("suggested_tradition") or "Universal"

        suggestions = [dict(s) for s in EMOTION_SUGGESTIONS.get(emotion, [])]
        if tradition == "Islam":
            suggestions.append(dict(TASBIH_SUGGESTION))
        if intensity == "high" and emotion in NEGATIVE_EMOTIONS:
            suggestions.insert(0, dict(IMMEDIATE_SUPPORT_SUGGESTION))

        return suggestions[:limit]

    def suggestions_for(self, emotion: str, intensity: str, spiritual_context: Optional[dict] = None) -> list:
        analysis = {"emotion": emotion, "confidence": INTENSITY_CONFIDENCE.get(intensity, 0.7)}
        return self.generate_suggestions(analysis, spiritual_context)

    @staticmethod
    def get_personalized_guidance(analysis: dict, spiritual_context: dict, user_context: dict) -> dict:
        emotion = analysis["emotion"]
        tradition = (
            spiritual_context.get("suggested_tradition")
            or user_context.get("spiritual_background")
            or "Universal"
        )
        tradition_data = SPIRITUAL_TRADITIONS.get(tradition, SPIRITUAL_TRADITIONS["Universal"])
        category = EMOTION_CATEGORIES.get(emotion, EMOTION_CATEGORIES["neutral"])

        return {
            "general": category["guidance"],
            "specific": tradition_data["guidance"].get(emotion, DEFAULT_GUIDANCE),
            "practices": list(category["practices"]),
            "tradition": tradition,
        }

    # -------------------------
    # User context
    # -------------------------

    def get_user_context(self, db: Session, user: User) -> dict:
        cached = self.user_context_cache.get(user.id)
        if cached is not None:
            return cached

        since = datetime.utcnow() - timedelta(days=30)
        recent = (
            db.query(MoodEntry)
            .filter(MoodEntry.user_id == user.id, MoodEntry.is_active.is_(True), MoodEntry.created_at >= since)
            .order_by(MoodEntry.created_at.desc(), MoodEntry.id.desc())
            .limit(20)
            .all()
        )
        labels = [entry.primary_emotion for entry in recent]

        counts = {}
        for label in labels:
            counts[label] = counts.get(label, 0) + 1
        dominant = [label for label, _ in sorted(counts.items(), key=lambda item: item[1], reverse=True)[:3]]

        trend = "stable"
        if len(labels) >= TREND_WINDOW:
            trend = trend_between(labels[:TREND_WINDOW], labels[TREND_WINDOW:TREND_WINDOW * 2])

        context = {
            "spiritual_background": user.spiritual_background,
            "emotional_patterns": {
                "dominant_emotions": dominant,
                "recent_trend": trend,
                "total_analyses": len(labels),
            },
            "analysis_history": len(labels),
        }
        self.user_context_cache.set(user.id, context)
        return context

    # -------------------------
    # Persistence
    # -------------------------

    def save_mood_entry(self, db: Session, user_id: int, result: dict, input_data: dict) -> MoodEntry:
        content = input_data.get("content") or ""
        entry = MoodEntry(
            user_id=user_id,
            primary_emotion=result["primary_emotion"],
            confidence=result["confidence"],
            intensity=result["intensity"],
            emotions=result["emotions"],
            analysis_type=result["analysis_type"],
            input_data={
                "type": input_data["type"],
                "has_text": bool(content),
                "has_audio": bool(input_data.get("audio_data")),
                "has_image": bool(input_data.get("image_data")),
                "text_length": len(content),
                "language": input_data.get("language") or "en",
            },
            spiritual_context=result["spiritual_context"],
            insights=result["insights"],
            suggestions=result["suggestions"],
            user_context=result["user_context"],
            personalized_guidance=result["personalized_guidance"],
            analysis_metadata={
                "processing_time": result["processing_time"],
                "cache_used": result["cache_used"],
                "model_version": MODEL_VERSION,
                "api_version": API_VERSION,
            },
        )
        db.add(entry)
        db.commit()
        db.refresh(entry)

        # Patterns changed, recompute on next analysis
        self.user_context_cache.delete(user_id)
        return entry

    def get_entry(self, db: Session, user_id: int, entry_id: int) -> Optional[MoodEntry]:
        return (
            db.query(MoodEntry)
            .filter(MoodEntry.id == entry_id, MoodEntry.user_id == user_id, MoodEntry.is_active.is_(True))
            .first()
        )

    def submit_feedback(self, db: Session, user_id: int, entry_id: int,
                        accuracy_rating: int, helpfulness_rating: int, comments: Optional[str] = None) -> Optional[dict]:
        entry = self.get_entry(db, user_id, entry_id)
        if not entry:
            return None

        entry.user_feedback = {
            "accuracy_rating": accuracy_rating,
            "helpfulness_rating": helpfulness_rating,
            "comments": comments or "",
            "submitted_at": datetime.utcnow().isoformat(),
        }
        db.commit()

        with self._metrics_lock:
            self.metrics["feedback_count"] += 1
            self.metrics["feedback_total"] += accuracy_rating
        return entry.user_feedback

    def soft_delete_entry(self, db: Session, user_id: int, entry_id: int) -> bool:
        entry = self.get_entry(db, user_id, entry_id)
        if not entry:
            return False
        entry.is_active = False
        db.commit()
        self.user_context_cache.delete(user_id)
        return True

    # -------------------------
    # History & analytics
    # -------------------------

    def _active_entries(self, db: Session, user_id: int, timeframe: str):
        query = db.query(MoodEntry).filter(MoodEntry.user_id == user_id, MoodEntry.is_active.is_(True))
        query = query.filter(MoodEntry.created_at >= timeframe_start(timeframe))
        return query

    def get_mood_history(self, db: Session, user_id: int, limit: int = 20, offset: int = 0,
                         timeframe: str = "30d", emotions: Optional[list] = None,
                         include_insights: bool = False, sort_by: str = "created_at",
                         sort_order: str = "desc") -> dict:
        query = self._active_entries(db, user_id, timeframe)
        if emotions:
            query = query.filter(MoodEntry.primary_emotion.in_(emotions))

        total = query.count()

        column = SORT_FIELDS.get(sort_by, MoodEntry.created_at)
        if sort_order == "asc":
            query = query.order_by(column.asc(), MoodEntry.id.asc())
        else:
            query = query.order_by(column.desc(), MoodEntry.id.desc())

        entries = query.offset(offset).limit(limit).all()
        return {
            "entries": [entry.to_dict(include_insights=include_insights) for entry in entries],
            "pagination": {
                "total": total,
                "limit": limit,
                "offset": offset,
                "has_more": offset + limit < total,
            },
            "timeframe": timeframe,
            "filters": {"emotions": emotions, "include_insights": include_insights},
        }

    def get_mood_analytics(self, db: Session, user_id: int, timeframe: str = "30d") -> dict:
        entries = (
            self._active_entries(db, user_id, timeframe)
            .order_by(MoodEntry.created_at.desc(), MoodEntry.id.desc())
            .all()
        )

        if not entries:
            return {
                "total_entries": 0,
                "timeframe": timeframe,
                "emotion_distribution": {},
                "dominant_emotion": None,
                "average_confidence": 0,
                "mood_stability": 0,
                "intensity_distribution": {},
                "recent_trend": "stable",
                "daily_mood_map": {},
                "insights": [],
            }

        distribution = {}
        intensity_distribution = {"low": 0, "medium": 0, "high": 0}
        daily_map = {}
        for entry in entries:
            distribution[entry.primary_emotion] = distribution.get(entry.primary_emotion, 0) + 1
            intensity_distribution[entry.intensity] = intensity_distribution.get(entry.intensity, 0) + 1
            day = entry.created_at.date().isoformat()
            daily_map.setdefault(day, []).append(entry.primary_emotion)

        dominant = dominant_label(distribution)
        average_confidence = sum(entry.confidence for entry in entries) / len(entries)
        stability = max(0.0, 1 - len(distribution) / len(MOOD_EMOTIONS))

        labels = [entry.primary_emotion for entry in entries]
        trend = "stable"
        if len(labels) >= TREND_WINDOW * 2:
            trend = trend_between(labels[:TREND_WINDOW], labels[TREND_WINDOW:TREND_WINDOW * 2])

        percentage = round(distribution[dominant] / len(entries) * 100)
        insights = [{
            "type": "dominant_emotion",
            "title": "Most Common Emotion",
            "message": f"{dominant} appears in {percentage}% of your entries",
            "emotion": dominant,
            "percentage": percentage,
        }]
        if stability > 0.7:
            insights.append({
                "type": "stability",
                "title": "Emotional Stability",
                "message": "Your emotions have been quite consistent lately",
            })
        if trend == "improving":
            insights.append({
                "type": "trend",
                "title": "Positive Trend",
                "message": "Your emotional well-being has been improving recently",
            })

        return {
            "total_entries": len(entries),
            "timeframe": timeframe,
            "emotion_distribution": distribution,
            "dominant_emotion": dominant,
            "average_confidence": round(average_confidence, 2),
            "mood_stability": round(stability, 2),
            "intensity_distribution": intensity_distribution,
            "recent_trend": trend,
            "daily_mood_map": daily_map,
            "insights": insights,
        }

    # -------------------------
    # Export
    # -------------------------

    def export_entries(self, db: Session, user_id: int, timeframe: str = "30d", limit: int = 1000) -> list:
        entries = (
            self._active_entries(db, user_id, timeframe)
            .order_by(MoodEntry.created_at.desc(), MoodEntry.id.desc())
            .limit(limit)
            .all()
        )
        return [entry.to_dict(include_insights=True) for entry in entries]

    @staticmethod
    def entries_to_csv(entries: list) -> str:
        if not entries:
            return "No data available"

        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow([
            "Date", "Primary Emotion", "Confidence", "Intensity", "Analysis Type",
            "Spiritual Context", "Insights Count", "Suggestions Count",
        ])
        for entry in entries:
            writer.writerow([
                entry["created_at"],
                entry["primary_emotion"],
                entry["confidence"],
                entry["intensity"],
                entry["analysis_type"],
                "Yes" if entry["spiritual_context"].get("is_spiritual") else "No",
                len(entry.get("insights") or []),
                len(entry.get("suggestions") or []),
            ])
        return buffer.getvalue().rstrip("\n")

    # -------------------------
    # Metrics & maintenance
    # -------------------------

    def _text_cache_key(self, text: str) -> str:
        return f"text-{text[:100]}"

    def _record_analysis(self, processing_time: float, cache_used: bool) -> None:
        with self._metrics_lock:
            self.metrics["total_analyses"] += 1
            if cache_used:
                self.metrics["cache_hits"] += 1
            count = self.metrics["total_analyses"]
            previous = self.metrics["average_processing_time"]
            self.metrics["average_processing_time"] = round(previous + (processing_time - previous) / count, 2)

    def reset_metrics(self) -> None:
        with self._metrics_lock:
            self.metrics = {
                "total_analyses": 0,
                "average_processing_time": 0.0,
                "cache_hits": 0,
                "feedback_count": 0,
                "feedback_total": 0,
            }

    def trim_caches(self) -> dict:
        """Periodic sweep: analysis cache down to 150 entries, user contexts down to 80."""
        return {
            "analysis_cache": self.analysis_cache.trim(150),
            "user_context_cache": self.user_context_cache.trim(80),
        }

    def clear_caches(self) -> None:
        self.analysis_cache.clear()
        self.user_context_cache.clear()

    def get_health_metrics(self) -> dict:
        with self._metrics_lock:
            metrics = dict(self.metrics)
        total = metrics.pop("feedback_total")
        count = metrics["feedback_count"]
        metrics["average_accuracy"] = round(total / count, 2) if count else None
        return {
            "status": "healthy",
            "metrics": metrics,
            "cache_stats": {
                "analysis_cache_size": len(self.analysis_cache),
                "user_context_cache_size": len(self.user_context_cache),
            },
            "timestamp": datetime.utcnow().isoformat(),
        }


mood_detection_service = MoodDetectionService()
