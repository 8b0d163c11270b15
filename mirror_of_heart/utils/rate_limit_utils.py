# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import os
from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from mirror_of_heart.utils.jwt_utils import decode_token


def user_or_ip_key(request: Request) -> str:
    """Authenticated requests are limited per user, anonymous ones per client address."""
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        payload = decode_token(auth_header.split(" ", 1)[1])
        if payload and payload.get("sub"):
            return f"user:{payload['sub']}"
    return get_remote_address(request)


def global_rate_limit() -> str:
    return os.getenv("GLOBAL_RATE_LIMIT", "100/15minutes")


def chatbot_rate_limit() -> str:
    return os.getenv("CHATBOT_RATE_LIMIT", "30/minute")


def mood_rate_limit() -> str:
    return os.getenv("MOOD_RATE_LIMIT", "20/minute")


def mood_priority_rate_limit() -> str:
    return os.getenv("MOOD_PRIORITY_RATE_LIMIT", "40/minute")


# 🚦 Priority analyses opt into a separate, larger bucket via the X-Priority header
def is_priority_request(request: Request) -> bool:
    return request.headers.get("X-Priority", "").lower() == "high"


def is_standard_request(request: Request) -> bool:
    return not is_priority_request(request)


limiter = Limiter(key_func=user_or_ip_key, application_limits=[global_rate_limit])
