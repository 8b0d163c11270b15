# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from datetime import datetime, timedelta

from mirror_of_heart.models.api_log import ApiLog
from mirror_of_heart.models.mood import MoodEntry
from mirror_of_heart.services.chatbot_service import chatbot_service
from mirror_of_heart.services.mood_detection_service import mood_detection_service
from mirror_of_heart.utils.schedulers.cache_maintenance import reset_chatbot_metrics, trim_service_caches
from mirror_of_heart.utils.schedulers.cleanup.api_log_cleaner import clean_old_api_logs
from mirror_of_heart.utils.schedulers.cleanup.mood_entry_cleaner import clean_deleted_mood_entries
from mirror_of_heart.utils.schedulers.run_all_cleanups import run_all_cleanups


def _mood(user_id, active, age_days):
    stamp = datetime.utcnow() - timedelta(days=age_days)
    return MoodEntry(user_id=user_id, primary_emotion="sad", confidence=0.7, intensity="medium",
                     analysis_type="text", is_active=active, created_at=stamp, updated_at=stamp)


def test_api_log_retention(db, monkeypatch):
    monkeypatch.setenv("API_LOG_RETENTION_DAYS", "10")
    db.add_all([
        ApiLog(endpoint="/old", method="POST", timestamp=datetime.utcnow() - timedelta(days=11)),
        ApiLog(endpoint="/new", method="POST", timestamp=datetime.utcnow() - timedelta(days=2)),
    ])
    db.commit()

    assert clean_old_api_logs() == 1
    db.expire_all()
    assert [log.endpoint for log in db.query(ApiLog).all()] == ["/new"]


def test_only_old_soft_deleted_moods_are_purged(db, make_user):
    user_id, _ = make_user("sara")
    db.add_all([
        _mood(user_id, active=False, age_days=40),
        _mood(user_id, active=False, age_days=5),
        _mood(user_id, active=True, age_days=40),
    ])
    db.commit()

    assert clean_deleted_mood_entries() == 1
    db.expire_all()
    assert db.query(MoodEntry).count() == 2


def test_run_all_cleanups_runs_each_job(db):
    db.add(ApiLog(endpoint="/old", method="POST", timestamp=datetime.utcnow() - timedelta(days=365)))
    db.commit()

    run_all_cleanups()
    db.expire_all()
    assert db.query(ApiLog).count() == 0


def test_cache_trim_job():
    for i in range(180):
        chatbot_service.response_cache.set(i, "reply")
        mood_detection_service.analysis_cache.set(i, {})
    chatbot_service.emotion_patterns[1] = [{"emotion": "sad"}] * 45

    trim_service_caches()

    assert len(chatbot_service.response_cache) == 150
    assert len(mood_detection_service.analysis_cache) == 150
    assert len(chatbot_service.emotion_patterns[1]) == 30


def test_metrics_reset_job():
    chatbot_service.metrics["total_requests"] = 12
    reset_chatbot_metrics()
    assert chatbot_service.get_health_metrics()["metrics"]["total_requests"] == 0
