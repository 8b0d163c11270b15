# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from pydantic import BaseModel, Field
from typing import Optional, Dict, Any


class MoodInput(BaseModel):
    type: str  # text | voice | image | combined
    content: Optional[str] = None
    audio_data: Optional[str] = None
    image_data: Optional[str] = None
    context: Optional[Dict[str, Any]] = None
    language: Optional[str] = None


class MoodOptions(BaseModel):
    include_insights: bool = True
    include_suggestions: bool = True
    save_to_history: bool = True
    priority: str = "normal"  # normal | high


class MoodAnalyzeRequest(BaseModel):
    input: MoodInput
    options: MoodOptions = Field(default_factory=MoodOptions)


class MoodFeedbackRequest(BaseModel):
    accuracy_rating: int = Field(..., ge=1, le=5)
    helpfulness_rating: int = Field(..., ge=1, le=5)
    comments: Optional[str] = Field(None, max_length=1000)
