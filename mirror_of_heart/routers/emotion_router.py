# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends, HTTPException
from mirror_of_heart.models.user import User
from mirror_of_heart.schemas.emotion_schemas import EmotionAnalyzeRequest
from mirror_of_heart.utils.auth_utils import get_current_user
from mirror_of_heart.utils.emotion_analysis import (
    analyze_text_emotion,
    analyze_image_emotion,
    analyze_audio_emotion,
)

router = APIRouter(prefix="/emotion", tags=["Emotion"])


@router.post("/analyze")
def analyze_emotion(payload: EmotionAnalyzeRequest, user: User = Depends(get_current_user)):
    """
    Keyword emotion analysis. The first input present wins: text, then image, then audio.
    """
    if payload.text:
        result = analyze_text_emotion(payload.text)
    elif payload.image:
        result = analyze_image_emotion(payload.image)
    elif payload.audio:
        result = analyze_audio_emotion(payload.audio)
    else:
        raise HTTPException(status_code=400, detail="No input provided")

    return {"success": True, "result": result}
