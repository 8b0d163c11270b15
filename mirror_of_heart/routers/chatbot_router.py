# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from mirror_of_heart.models.database import get_db
from mirror_of_heart.models.user import User
from mirror_of_heart.schemas.chatbot_schemas import ChatMessageRequest, ConversationTitleRequest
from mirror_of_heart.services.chatbot_service import chatbot_service, ChatbotError, INPUT_TYPES
from mirror_of_heart.utils.auth_utils import get_current_user
from mirror_of_heart.utils.prompt_templates import CONVERSATION_TONES
from mirror_of_heart.utils.rate_limit_utils import limiter, chatbot_rate_limit
from mirror_of_heart.utils.timeframes import TIMEFRAMES

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chatbot", tags=["Chatbot"])


@router.get("/health")
def chatbot_health():
    return {"success": True, "data": chatbot_service.get_health_metrics()}


@router.post("/message")
@limiter.limit(chatbot_rate_limit)
def send_message(
    request: Request,
    payload: ChatMessageRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    # Unknown tones and input types degrade to the defaults
    tone = payload.conversation_tone if payload.conversation_tone in CONVERSATION_TONES else "supportive"
    input_type = payload.input_type if payload.input_type in INPUT_TYPES else "text"

    try:
        result = chatbot_service.process_message(
            db,
            user,
            payload.message,
            session_id=payload.session_id,
            input_type=input_type,
            tone=tone,
            context=payload.context,
            priority=payload.priority,
            include_emotion=payload.include_emotion,
        )
    except ChatbotError as e:
        logger.warning(f"⚠️ Chatbot rejected message from user {user.id}: {e.error_code}")
        raise HTTPException(status_code=400, detail={"error": str(e), "error_code": e.error_code})

    return {"success": True, "data": result}


@router.get("/conversations")
def list_conversations(
    limit: int = Query(20, ge=1, le=50),
    offset: int = Query(0, ge=0),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return {"success": True, "data": chatbot_service.get_conversation_history(db, user.id, limit, offset)}


@router.get("/conversations/{session_id}")
def get_conversation(session_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    conversation = chatbot_service.get_conversation_by_id(db, user.id, session_id)
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return {"success": True, "data": conversation}


@router.put("/conversations/{session_id}/title")
def update_title(
    session_id: str,
    payload: ConversationTitleRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    try:
        updated = chatbot_service.update_conversation_title(db, user.id, session_id, payload.title)
    except ChatbotError as e:
        raise HTTPException(status_code=400, detail={"error": str(e), "error_code": e.error_code})

    if not updated:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return {"success": True, "message": "Conversation title updated successfully"}


@router.delete("/conversations/{session_id}")
def delete_conversation(session_id: str, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if not chatbot_service.delete_conversation(db, user.id, session_id):
        raise HTTPException(status_code=404, detail="Conversation not found")
    return {"success": True, "message": "Conversation deleted successfully"}


@router.get("/analytics")
def chatbot_analytics(
    timeframe: str = "7d",
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    period = timeframe if timeframe in TIMEFRAMES else "7d"
    return {"success": True, "data": chatbot_service.get_analytics(db, user.id, period)}
