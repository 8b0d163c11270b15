# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey, JSON, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from mirror_of_heart.models.database import Base

MOOD_EMOTIONS = ["peaceful", "grateful", "anxious", "sad", "joyful", "spiritual", "angry", "hopeful", "neutral"]
POSITIVE_EMOTIONS = ["peaceful", "grateful", "joyful", "spiritual", "hopeful"]
NEGATIVE_EMOTIONS = ["anxious", "sad", "angry"]
INTENSITY_LEVELS = ["low", "medium", "high"]
ANALYSIS_TYPES = ["text", "voice", "image", "combined"]


class MoodEntry(Base):
    __tablename__ = "mood_entries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Primary analysis result
    primary_emotion = Column(String, nullable=False, index=True)
    confidence = Column(Float, nullable=False)
    intensity = Column(String, nullable=False)
    emotions = Column(JSON, default=dict)  # label -> weighted score
    analysis_type = Column(String, nullable=False)

    # Shape of the input only, never the content itself
    input_data = Column(JSON, default=dict)

    spiritual_context = Column(JSON, default=dict)
    insights = Column(JSON, default=list)
    suggestions = Column(JSON, default=list)
    user_context = Column(JSON, default=dict)
    personalized_guidance = Column(JSON, default=dict)
    user_feedback = Column(JSON, nullable=True)
    analysis_metadata = Column(JSON, default=dict)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Soft delete flag
    is_active = Column(Boolean, default=True, index=True)

    user = relationship("User", back_populates="mood_entries")

    __table_args__ = (
        Index("ix_mood_user_created", "user_id", "created_at"),
        Index("ix_mood_user_emotion", "user_id", "primary_emotion"),
    )

    @property
    def emotion_category(self) -> str:
        if self.primary_emotion in POSITIVE_EMOTIONS:
            return "positive"
        if self.primary_emotion in NEGATIVE_EMOTIONS:
            return "negative"
        return "neutral"

    def to_dict(self, include_insights: bool = True) -> dict:
        data = {
            "id": self.id,
            "user_id": self.user_id,
            "primary_emotion": self.primary_emotion,
            "emotion_category": self.emotion_category,
            "confidence": self.confidence,
            "intensity": self.intensity,
            "emotions": self.emotions or {},
            "analysis_type": self.analysis_type,
            "input_data": self.input_data or {},
            "spiritual_context": self.spiritual_context or {},
            "user_context": self.user_context or {},
            "personalized_guidance": self.personalized_guidance or {},
            "user_feedback": self.user_feedback,
            "metadata": self.analysis_metadata or {},
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_insights:
            data["insights"] = self.insights or []
            data["suggestions"] = self.suggestions or []
        return data
