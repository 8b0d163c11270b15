# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from mirror_of_heart.models.user import User
from mirror_of_heart.utils.jwt_utils import create_access_token


def test_register_and_login(client, db):
    response = client.post("/auth/register", json={
        "username": "yusuf", "email": "yusuf@example.com", "password": "secret123", "gemini_api_key": "user-key",
    })
    assert response.status_code == 201
    user_id = response.json()["user_id"]

    user = db.query(User).filter(User.id == user_id).first()
    assert user.password_hash != "secret123"

    response = client.post("/auth/login", json={"email": "yusuf@example.com", "password": "secret123"})
    assert response.status_code == 200
    body = response.json()
    assert body["token"]
    assert body["gemini_api_key"] == "user-key"


def test_register_duplicate_email_is_rejected(client, make_user):
    make_user("yusuf")
    response = client.post("/auth/register", json={
        "username": "other", "email": "yusuf@example.com", "password": "secret123",
    })
    assert response.status_code == 400


def test_register_missing_field_is_validation_error(client):
    response = client.post("/auth/register", json={"username": "yusuf", "password": "secret123"})
    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Validation failed"
    assert body["errors"]


def test_login_unknown_email(client):
    response = client.post("/auth/login", json={"email": "ghost@example.com", "password": "secret123"})
    assert response.status_code == 404


def test_login_wrong_password(client, make_user):
    make_user("yusuf")
    response = client.post("/auth/login", json={"email": "yusuf@example.com", "password": "wrong-pass"})
    assert response.status_code == 401


def test_login_suspended_user(client, make_user, db):
    user_id, _ = make_user("yusuf")
    user = db.query(User).filter(User.id == user_id).first()
    user.suspended = True
    db.commit()

    response = client.post("/auth/login", json={"email": "yusuf@example.com", "password": "secret123"})
    assert response.status_code == 403


def test_protected_route_requires_token(client):
    assert client.get("/users/me").status_code == 401


def test_garbage_token_is_rejected(client):
    response = client.get("/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_token_for_deleted_user(client):
    token = create_access_token(9999)
    response = client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 404
