# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import os
import tempfile

from cryptography.fernet import Fernet

# ✅ Required environment must exist before the app modules are imported
_TMP_DIR = tempfile.mkdtemp(prefix="mirror-of-heart-tests-")
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["FERNET_SECRET"] = Fernet.generate_key().decode()
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["GLOBAL_RATE_LIMIT"] = "1000/minute"

import pytest
from fastapi.testclient import TestClient

from mirror_of_heart.main import app
from mirror_of_heart.models import database
from mirror_of_heart.models.user import User
from mirror_of_heart.services import gemini_service
from mirror_of_heart.services import mood_detection_service as mood_module
from mirror_of_heart.services import chatbot_service as chatbot_module
from mirror_of_heart.services.chatbot_service import chatbot_service
from mirror_of_heart.services.mood_detection_service import mood_detection_service
from mirror_of_heart.services.tasbih_counter import tasbih_counter
from mirror_of_heart.utils.rate_limit_utils import limiter


class GeminiStub:
    """Records generateContent payloads and replies with a canned candidate."""

    def __init__(self):
        self.calls = []
        self.reply = {"candidates": [{"content": {"parts": [{"text": "I hear you, and you are not alone in this."}]}}]}
        self.error = None

    def __call__(self, payload, api_key=None):
        self.calls.append({"payload": payload, "api_key": api_key})
        if self.error:
            raise self.error
        return self.reply


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    database.Base.metadata.drop_all(bind=database.engine)
    database.Base.metadata.create_all(bind=database.engine)

    limiter.reset()
    mood_detection_service.clear_caches()
    mood_detection_service.reset_metrics()
    chatbot_service.clear_caches()
    chatbot_service.reset_metrics()
    tasbih_counter.clear()

    for name in ("GEMINI_API_KEY", "HUGGINGFACE_TOKEN", "CHATBOT_RATE_LIMIT", "MOOD_RATE_LIMIT",
                 "MOOD_PRIORITY_RATE_LIMIT"):
        monkeypatch.delenv(name, raising=False)

    # 🚫 No network in tests
    monkeypatch.setattr(mood_module, "classify_emotion", lambda text: {
        "emotion": "neutral", "confidence": 0.5, "scores": {"neutral": 0.5},
    })
    monkeypatch.setattr(mood_module, "current_hour", lambda: 14)
    yield


@pytest.fixture
def gemini(monkeypatch):
    stub = GeminiStub()
    monkeypatch.setattr(gemini_service, "generate_content", stub)
    return stub


@pytest.fixture
def no_random_flourish(monkeypatch):
    monkeypatch.setattr(chatbot_module.random, "random", lambda: 1.0)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


def register(client, username="amina", email=None, password="secret123", **extra):
    email = email or f"{username}@example.com"
    response = client.post("/auth/register", json={
        "username": username, "email": email, "password": password, **extra,
    })
    assert response.status_code == 201, response.text
    return response.json()["user_id"]


def login(client, email, password="secret123"):
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_user(client):
    """Registers a user and returns (user_id, auth headers)."""

    def _make(username="amina", **extra):
        user_id = register(client, username, **extra)
        return user_id, bearer(login(client, f"{username}@example.com"))

    return _make


@pytest.fixture
def auth(make_user):
    return make_user()[1]


@pytest.fixture
def admin_auth(make_user, db):
    user_id, headers = make_user("admin")
    user = db.query(User).filter(User.id == user_id).first()
    user.is_admin = True
    db.commit()
    return headers
