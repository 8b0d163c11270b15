# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends, HTTPException
from mirror_of_heart.models.user import User
from mirror_of_heart.schemas.chatbot_schemas import GeminiRequest
from mirror_of_heart.services import gemini_service
from mirror_of_heart.utils.auth_utils import get_current_user

router = APIRouter(prefix="/api", tags=["Gemini"])


@router.post("/gemini")
def gemini_proxy(payload: GeminiRequest, user: User = Depends(get_current_user)):
    """Forwards a raw prompt to generateContent and returns the untouched API reply."""
    if not payload.prompt or not payload.prompt.strip():
        raise HTTPException(status_code=400, detail="Prompt is required")

    try:
        result = gemini_service.generate_content(
            gemini_service.build_payload(payload.prompt),
            user.gemini_api_key,
        )
    except gemini_service.GeminiServiceError as e:
        raise HTTPException(
            status_code=500,
            detail={"error": "Gemini API request failed", "details": e.details or str(e)},
        )

    return {"result": result}
