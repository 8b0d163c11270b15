# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Boolean, JSON, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from mirror_of_heart.models.database import Base
from mirror_of_heart.utils.encryption import EncryptedText  # ✅ Import encryption

DEFAULT_TITLE = "New Conversation"


def default_context() -> dict:
    return {
        "spiritual_preferences": {"religion": None, "practices": [], "goals": []},
        "emotional_state": {"current_mood": None, "mood_history": []},
        "conversation_tone": "supportive",
    }


class Conversation(Base):
    __tablename__ = "conversations"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    session_id = Column(String, unique=True, nullable=False, index=True)
    title = Column(String, default=DEFAULT_TITLE)

    context = Column(JSON, default=default_context)
    stats = Column(JSON, nullable=True)

    is_active = Column(Boolean, default=True)
    last_activity = Column(DateTime, default=datetime.utcnow)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="conversations")
    messages = relationship(
        "ChatMessage",
        back_populates="conversation",
        cascade="all, delete-orphan",
        order_by="ChatMessage.id",
    )

    __table_args__ = (
        Index("ix_conversation_user_activity", "user_id", "last_activity"),
    )

    def to_summary(self) -> dict:
        last = self.messages[-1] if self.messages else None
        return {
            "id": self.id,
            "session_id": self.session_id,
            "title": self.title,
            "message_count": len(self.messages),
            "last_message": last.content[:100] if last else None,
            "conversation_tone": (self.context or {}).get("conversation_tone"),
            "last_activity": self.last_activity.isoformat() if self.last_activity else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def to_dict(self) -> dict:
        data = self.to_summary()
        data.update({
            "context": self.context or default_context(),
            "stats": self.stats,
            "is_active": self.is_active,
            "messages": [m.to_dict() for m in self.messages],
        })
        return data


class ChatMessage(Base):
    __tablename__ = "chat_messages"

    id = Column(Integer, primary_key=True, index=True)
    conversation_id = Column(Integer, ForeignKey("conversations.id"), nullable=False, index=True)
    role = Column(String, nullable=False)  # 'user', 'assistant' or 'system'

    content = Column(EncryptedText, nullable=False)  # ✅ Encrypted message

    timestamp = Column(DateTime, default=datetime.utcnow, index=True)
    meta = Column(JSON, default=dict)  # emotion, confidence, input_type, ...

    conversation = relationship("Conversation", back_populates="messages")

    def to_dict(self) -> dict:
        return {
            "role": self.role,
            "content": self.content,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "metadata": self.meta or {},
        }
