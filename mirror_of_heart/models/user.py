# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, String, DateTime, Boolean
from sqlalchemy.orm import relationship
from datetime import datetime
from mirror_of_heart.models.database import Base
from mirror_of_heart.utils.encryption import EncryptedText  # 🔐 Personal Gemini key


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)

    # ✅ Moderation
    is_admin = Column(Boolean, default=False)
    suspended = Column(Boolean, default=False)

    # ✅ Personalization
    gemini_api_key = Column(EncryptedText, nullable=True)  # overrides GEMINI_API_KEY for this user
    spiritual_background = Column(String, nullable=True)   # e.g. "Islam", "Christianity"

    created_at = Column(DateTime, default=datetime.utcnow)

    # ✅ Relationships
    journal_entries = relationship("JournalEntry", back_populates="user", cascade="all, delete-orphan")
    mood_entries = relationship("MoodEntry", back_populates="user", cascade="all, delete-orphan")
    conversations = relationship("Conversation", back_populates="user", cascade="all, delete-orphan")

    def to_profile(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "is_admin": bool(self.is_admin),
            "suspended": bool(self.suspended),
            "spiritual_background": self.spiritual_background,
            "has_gemini_api_key": bool(self.gemini_api_key),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<User id={self.id} username={self.username} admin={self.is_admin}>"
