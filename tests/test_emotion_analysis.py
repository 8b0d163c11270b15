# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from mirror_of_heart.utils.emotion_analysis import analyze_text_emotion, detected_emotions


def test_no_keywords_is_neutral():
    result = analyze_text_emotion("The train leaves at noon")
    assert result["emotion"] == "neutral"
    assert result["confidence"] == 0.5


def test_confidence_grows_with_hits_and_is_capped():
    assert analyze_text_emotion("I am sad")["confidence"] == 0.7
    assert analyze_text_emotion("sad lonely hurt")["confidence"] == 0.9
    assert analyze_text_emotion("sad lonely hurt empty grief sorrow")["confidence"] == 0.95


def test_whole_words_only():
    # "sadly" and "madness" must not count as sad/mad
    assert analyze_text_emotion("madness, sadly")["emotion"] == "neutral"


def test_tie_goes_to_later_emotion():
    assert analyze_text_emotion("sad but calm")["emotion"] == "peaceful"
    # "blessed" sits in both the happy and spiritual tables
    assert analyze_text_emotion("I feel blessed")["emotion"] == "spiritual"


def test_detected_emotions_strongest_first():
    assert detected_emotions("worried, anxious and a little sad") == ["anxious", "sad"]
    assert detected_emotions("") == []


def test_analyze_endpoint_text(client, auth):
    response = client.post("/emotion/analyze", headers=auth, json={"text": "I am so happy and excited"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["result"]["emotion"] == "happy"


def test_analyze_endpoint_placeholders(client, auth):
    image = client.post("/emotion/analyze", headers=auth, json={"image": "data:image/png;base64,AAAA"}).json()
    audio = client.post("/emotion/analyze", headers=auth, json={"audio": "UklGRg=="}).json()
    assert image["result"] == {"emotion": "neutral", "confidence": 0.8}
    assert audio["result"] == {"emotion": "calm", "confidence": 0.85}


def test_analyze_endpoint_without_input(client, auth):
    response = client.post("/emotion/analyze", headers=auth, json={})
    assert response.status_code == 400
    assert response.json()["detail"] == "No input provided"
