# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, String, Text, DateTime, Float, ForeignKey, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from mirror_of_heart.models.database import Base
from mirror_of_heart.utils.encryption import EncryptedText  # 🔐 Encryption utils


class JournalEntry(Base):
    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String, nullable=True)
    text = Column(EncryptedText, nullable=False)  # 🔐 Encrypted
    image = Column(Text, nullable=True)  # base64 or URL
    audio = Column(Text, nullable=True)  # base64 or URL
    location = Column(String, nullable=True)

    tags = Column(JSON, default=list)
    emotions = Column(JSON, default=list)  # labels detected by the keyword tagger
    emotion_confidence = Column(Float, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="journal_entries")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "text": self.text,
            "image": self.image,
            "audio": self.audio,
            "location": self.location,
            "tags": self.tags or [],
            "emotions": self.emotions or [],
            "emotion_confidence": self.emotion_confidence,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
