# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import pytest
import requests

from mirror_of_heart.services import emotion_model_service
from mirror_of_heart.services.emotion_model_service import classify_emotion, polarity_to_mood


class FakeVader:
    def __init__(self, compound):
        self.compound = compound

    def polarity_scores(self, text):
        return {"neg": 0.0, "neu": 1.0, "pos": 0.0, "compound": self.compound}


@pytest.fixture
def vader():
    try:
        return emotion_model_service.sentiment_analyzer()
    except LookupError:
        pytest.skip("vader_lexicon is not installed")


@pytest.mark.parametrize("polarity, expected", [
    (0.9, ("joyful", 0.87)),
    (-0.5, ("sad", 0.75)),
    (-1.0, ("sad", 0.9)),
    (0.2, ("peaceful", 0.6)),
    (-0.2, ("anxious", 0.6)),
    (0.05, ("neutral", 0.5)),
])
def test_polarity_thresholds(polarity, expected):
    emotion, confidence = polarity_to_mood(polarity)
    assert emotion == expected[0]
    assert confidence == pytest.approx(expected[1])


def test_lexicon_is_the_default_stage(monkeypatch):
    monkeypatch.setattr(emotion_model_service, "sentiment_analyzer", lambda: FakeVader(-0.5))
    result = classify_emotion("I feel sad")
    assert result["emotion"] == "sad"
    assert result["confidence"] == pytest.approx(0.75)
    assert result["method"] == "lexicon"


def test_empty_text_is_neutral():
    assert classify_emotion("")["emotion"] == "neutral"


def test_model_failure_falls_back_to_lexicon(monkeypatch):
    def broken_post(*args, **kwargs):
        raise requests.exceptions.ConnectionError("offline")

    monkeypatch.setenv("HUGGINGFACE_TOKEN", "hf_test")
    monkeypatch.setattr(emotion_model_service.requests, "post", broken_post)
    monkeypatch.setattr(emotion_model_service, "sentiment_analyzer", lambda: FakeVader(0.2))

    result = classify_emotion("a quiet afternoon")
    assert result["emotion"] == "peaceful"
    assert result["method"] == "lexicon"


def test_model_labels_map_to_moods(monkeypatch):
    class Reply:
        def raise_for_status(self):
            pass

        def json(self):
            return [[{"label": "sadness", "score": 0.8}, {"label": "joy", "score": 0.1}]]

    monkeypatch.setenv("HUGGINGFACE_TOKEN", "hf_test")
    monkeypatch.setattr(emotion_model_service.requests, "post", lambda *a, **kw: Reply())

    result = classify_emotion("everything went wrong")
    assert result["emotion"] == "sad"
    assert result["method"] == "model"


def test_vader_reads_plain_sadness(vader):
    result = classify_emotion("I feel sad")
    assert result["emotion"] == "sad"
    assert result["confidence"] > 0.6
