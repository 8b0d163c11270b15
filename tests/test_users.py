# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


def test_get_profile_hides_password_and_key(client, make_user):
    _, headers = make_user("amina", gemini_api_key="my-key")
    profile = client.get("/users/me", headers=headers).json()

    assert profile["username"] == "amina"
    assert profile["has_gemini_api_key"] is True
    assert "password_hash" not in profile
    assert "gemini_api_key" not in profile


def test_update_profile(client, auth):
    response = client.put("/users/me", headers=auth, json={"spiritual_background": "Islam", "username": "amina2"})
    assert response.status_code == 200
    profile = response.json()
    assert profile["spiritual_background"] == "Islam"
    assert profile["username"] == "amina2"


def test_update_profile_rejects_taken_email(client, make_user):
    make_user("first")
    _, headers = make_user("second")
    response = client.put("/users/me", headers=headers, json={"email": "first@example.com"})
    assert response.status_code == 400
