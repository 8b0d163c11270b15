# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import re
import logging

logger = logging.getLogger(__name__)

# -------------------------
# Keyword tables (the later table wins a tie)
# -------------------------

EMOTION_KEYWORDS = {
    "happy": ["joy", "happiness", "excited", "wonderful", "amazing", "great", "fantastic", "blessed", "grateful", "thankful"],
    "sad": ["sad", "depressed", "down", "upset", "hurt", "pain", "sorrow", "grief", "lonely", "empty"],
    "anxious": ["worried", "anxious", "nervous", "stressed", "overwhelmed", "panic", "fear", "scared", "uncertain"],
    "angry": ["angry", "mad", "furious", "frustrated", "irritated", "annoyed", "rage", "hate"],
    "peaceful": ["calm", "peaceful", "serene", "tranquil", "relaxed", "content", "balanced", "centered"],
    "spiritual": ["pray", "prayer", "god", "allah", "divine", "blessed", "faith", "spiritual", "meditation", "worship"],
}

_PATTERNS = {
    emotion: [re.compile(rf"\b{re.escape(word)}\b") for word in words]
    for emotion, words in EMOTION_KEYWORDS.items()
}

NEUTRAL_RESULT = {"emotion": "neutral", "confidence": 0.5}


def dominant_label(scores: dict):
    """Highest-scoring key; on a tie the one inserted last wins."""
    dominant = None
    for label, score in scores.items():
        if dominant is None or score >= scores[dominant]:
            dominant = label
    return dominant


def score_keywords(text: str) -> dict:
    """Whole-word keyword hits per emotion."""
    lowered = text.lower()
    return {
        emotion: sum(len(p.findall(lowered)) for p in patterns)
        for emotion, patterns in _PATTERNS.items()
    }


def analyze_text_emotion(text: str) -> dict:
    """
    Classifies text into one of the keyword emotions.
    - The emotion with the most hits wins; the later table wins a tie.
    - Confidence grows 0.1 per hit from 0.6 and is capped at 0.95.
    - No hits at all means neutral with 0.5 confidence.
    """
    scores = score_keywords(text or "")

    dominant = dominant_label(scores)
    max_score = scores[dominant]
    if max_score == 0:
        return {**NEUTRAL_RESULT, "scores": scores}

    confidence = round(min(0.6 + max_score * 0.1, 0.95), 2)
    return {"emotion": dominant, "confidence": confidence, "scores": scores}


def detected_emotions(text: str) -> list:
    """All emotions with at least one hit, strongest first. Used to tag journal entries."""
    scores = score_keywords(text or "")
    hits = [(emotion, score) for emotion, score in scores.items() if score > 0]
    hits.sort(key=lambda item: item[1], reverse=True)
    return [emotion for emotion, _ in hits]


# Image and audio models are not wired in yet; these return fixed placeholder labels.

def analyze_image_emotion(image_data: str) -> dict:
    logger.info("🖼️ Image emotion analysis requested (%d chars)", len(image_data or ""))
    return {"emotion": "neutral", "confidence": 0.80}


def analyze_audio_emotion(audio_data: str) -> dict:
    logger.info("🎙️ Audio emotion analysis requested (%d chars)", len(audio_data or ""))
    return {"emotion": "calm", "confidence": 0.85}
