# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import os
import logging
import threading
import requests
import nltk
from nltk.sentiment.vader import SentimentIntensityAnalyzer

logger = logging.getLogger(__name__)

# ✅ Hugging Face Inference API Setup (optional upgrade over the lexicon)
if os.getenv("ENV") != "production":
    from dotenv import load_dotenv
    load_dotenv()

EMOTION_MODEL_URL = os.getenv(
    "EMOTION_MODEL_URL",
    "https://api-inference.huggingface.co/models/j-hartmann/emotion-english-distilroberta-base"
)

# Model labels -> mood labels
MODEL_LABEL_MAP = {
    "joy": "joyful",
    "sadness": "sad",
    "fear": "anxious",
    "anger": "angry",
    "love": "grateful",
    "surprise": "hopeful",
    "neutral": "neutral",
}

NEUTRAL_SENTIMENT = {"emotion": "neutral", "confidence": 0.5, "scores": {"neutral": 0.5}}

_vader = None
_vader_lock = threading.Lock()


def _headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}


def polarity_to_mood(polarity: float) -> tuple:
    """Maps a -1..1 polarity to (mood, confidence)."""
    if polarity > 0.3:
        return "joyful", min(0.6 + polarity * 0.3, 0.95)
    if polarity < -0.3:
        return "sad", min(0.6 + abs(polarity) * 0.3, 0.95)
    if polarity > 0.1:
        return "peaceful", 0.6
    if polarity < -0.1:
        return "anxious", 0.6
    return "neutral", 0.5


def sentiment_analyzer() -> SentimentIntensityAnalyzer:
    """Shared VADER analyzer. Fetches vader_lexicon once if it is not installed; raises LookupError when it cannot."""
    global _vader
    with _vader_lock:
        if _vader is None:
            try:
                nltk.data.find("sentiment/vader_lexicon.zip")
            except LookupError:
                nltk.download("vader_lexicon", quiet=True)
            _vader = SentimentIntensityAnalyzer()
    return _vader


def lexicon_sentiment(text: str) -> dict:
    """VADER compound polarity mapped onto a mood."""
    try:
        polarity = sentiment_analyzer().polarity_scores(text)["compound"]
    except LookupError as e:
        logger.error(f"❌ VADER lexicon unavailable: {e}")
        return dict(NEUTRAL_SENTIMENT)

    emotion, confidence = polarity_to_mood(polarity)
    return {
        "emotion": emotion,
        "confidence": round(confidence, 4),
        "scores": {emotion: round(confidence, 4)},
        "sentiment_score": polarity,
        "method": "lexicon",
    }


def model_emotion(text: str, token: str):
    """Emotion model via the inference API. None when the call fails or the reply is unusable."""
    try:
        response = requests.post(EMOTION_MODEL_URL, headers=_headers(token), json={"inputs": text}, timeout=15)
        response.raise_for_status()
        result = response.json()
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.warning(f"❌ Emotion model call failed: {e}")
        return None

    if not (isinstance(result, list) and result and isinstance(result[0], list)):
        logger.warning(f"⚠️ Unexpected emotion model response format: {result}")
        return None

    scores = {}
    for prediction in result[0]:
        label = MODEL_LABEL_MAP.get(str(prediction.get("label", "")).lower())
        if label:
            scores[label] = scores.get(label, 0.0) + float(prediction.get("score", 0))

    if not scores:
        return None

    emotion = max(scores, key=scores.get)
    return {"emotion": emotion, "confidence": round(scores[emotion], 4), "scores": scores, "method": "model"}


def classify_emotion(text: str) -> dict:
    """
    Sentiment stage of mood analysis.
    Uses the emotion model when HUGGINGFACE_TOKEN is set, otherwise (or when the
    model call fails) the local lexicon polarity.
    """
    if not text:
        return dict(NEUTRAL_SENTIMENT)

    token = os.getenv("HUGGINGFACE_TOKEN")
    if token:
        result = model_emotion(text, token)
        if result:
            return result
        logger.info("↩️ Falling back to lexicon sentiment")

    return lexicon_sentiment(text)
