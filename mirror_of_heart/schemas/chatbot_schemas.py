# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from pydantic import BaseModel
from typing import Optional, Dict, Any


class ChatMessageRequest(BaseModel):
    message: str
    session_id: Optional[str] = None
    input_type: str = "text"                 # text | voice | image
    conversation_tone: str = "supportive"    # supportive | spiritual | reflective | celebratory
    context: Optional[Dict[str, Any]] = None
    priority: str = "normal"
    include_emotion: bool = True


class ConversationTitleRequest(BaseModel):
    title: str


class GeminiRequest(BaseModel):
    prompt: Optional[str] = None
