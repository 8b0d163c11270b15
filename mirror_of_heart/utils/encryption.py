# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import os
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken
from sqlalchemy.types import Text, TypeDecorator

if os.getenv("ENV") != "production":
    from dotenv import load_dotenv
    load_dotenv()


def _load_fernet() -> Fernet:
    secret = os.getenv("FERNET_SECRET")
    if not secret:
        raise EnvironmentError("FERNET_SECRET is missing. Please set it in your environment or .env file.")
    try:
        return Fernet(secret)
    except (ValueError, TypeError) as e:
        raise ValueError("FERNET_SECRET is invalid. Generate one with Fernet.generate_key().") from e


fernet = _load_fernet()


def encrypt_text(plain: str) -> str:
    return fernet.encrypt(plain.encode("utf-8")).decode("ascii")


def decrypt_text(token: str) -> str:
    try:
        return fernet.decrypt(token.encode("ascii")).decode("utf-8")
    except InvalidToken as e:
        raise ValueError("Stored value could not be decrypted with the configured FERNET_SECRET") from e


class EncryptedText(TypeDecorator):
    """Text column encrypted at rest: journal bodies, chat content, personal API keys."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Optional[str], dialect):
        return encrypt_text(value) if value is not None else None

    def process_result_value(self, value: Optional[str], dialect):
        return decrypt_text(value) if value is not None else None
