# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import json
import time
import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mirror_of_heart.models.database import get_db
from mirror_of_heart.models.mood import MOOD_EMOTIONS, INTENSITY_LEVELS, ANALYSIS_TYPES
from mirror_of_heart.models.user import User
from mirror_of_heart.schemas.mood_schemas import MoodAnalyzeRequest, MoodFeedbackRequest
from mirror_of_heart.services.mood_detection_service import mood_detection_service, MoodAnalysisError
from mirror_of_heart.utils.auth_utils import get_current_user
from mirror_of_heart.utils.rate_limit_utils import (
    limiter,
    mood_rate_limit,
    mood_priority_rate_limit,
    is_priority_request,
    is_standard_request,
)
from mirror_of_heart.utils.spiritual_guidance import EMOTION_CATEGORIES

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mood", tags=["Mood"])

TIMEFRAME_PATTERN = "^(1d|7d|30d|90d)$"


def _parse_emotions(emotions: Optional[str]) -> Optional[list]:
    if not emotions:
        return None
    labels = [e.strip() for e in emotions.split(",") if e.strip()]
    invalid = [e for e in labels if e not in MOOD_EMOTIONS]
    if invalid:
        raise HTTPException(status_code=400, detail=f"Invalid emotions filter: {', '.join(invalid)}")
    return labels


@router.post("/analyze")
@limiter.limit(mood_rate_limit, exempt_when=is_priority_request)
@limiter.limit(mood_priority_rate_limit, exempt_when=is_standard_request)
def analyze_mood(
    request: Request,
    response: Response,
    payload: MoodAnalyzeRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    started = time.perf_counter()
    options = payload.options.model_dump()
    if is_priority_request(request):
        options["priority"] = "high"

    logger.info(
        f"🧠 Mood analysis requested by user {user.id}: type={payload.input.type} "
        f"content_length={len(payload.input.content or '')}"
    )

    try:
        analysis = mood_detection_service.analyze_mood(db, user, payload.input.model_dump(), options)
    except MoodAnalysisError as e:
        raise HTTPException(status_code=400, detail={"error": str(e), "error_code": e.error_code})

    response_time = round((time.perf_counter() - started) * 1000)
    response.headers["X-Response-Time"] = f"{response_time}ms"
    response.headers["X-Cache-Status"] = "HIT" if analysis["cache_used"] else "MISS"
    response.headers["X-Confidence-Score"] = str(analysis["confidence"])
    response.headers["X-Primary-Emotion"] = analysis["primary_emotion"]

    return {
        "success": True,
        "data": {
            **analysis,
            "response_time": response_time,
            "server_timestamp": datetime.utcnow().isoformat(),
            "api_version": "2.0",
        },
    }


@router.get("/history")
def mood_history(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    timeframe: str = Query("30d", pattern=TIMEFRAME_PATTERN),
    emotions: Optional[str] = Query(None, description="Comma-separated mood labels"),
    include_insights: bool = False,
    sort_by: str = Query("created_at", pattern="^(created_at|confidence|primary_emotion)$"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    history = mood_detection_service.get_mood_history(
        db,
        user.id,
        limit=limit,
        offset=offset,
        timeframe=timeframe,
        emotions=_parse_emotions(emotions),
        include_insights=include_insights,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return {"success": True, "data": history}


@router.get("/analytics")
def mood_analytics(
    timeframe: str = Query("30d", pattern=TIMEFRAME_PATTERN),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    analytics = mood_detection_service.get_mood_analytics(db, user.id, timeframe)
    return {"success": True, "data": {**analytics, "generated_at": datetime.utcnow().isoformat()}}


@router.get("/entries/{entry_id}")
def get_mood_entry(entry_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    entry = mood_detection_service.get_entry(db, user.id, entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Mood entry not found")
    return {"success": True, "data": entry.to_dict()}


@router.post("/entries/{entry_id}/feedback")
def submit_feedback(
    entry_id: int,
    payload: MoodFeedbackRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    feedback = mood_detection_service.submit_feedback(
        db, user.id, entry_id, payload.accuracy_rating, payload.helpfulness_rating, payload.comments
    )
    if feedback is None:
        raise HTTPException(status_code=404, detail="Mood entry not found")
    return {
        "success": True,
        "message": "Feedback submitted successfully",
        "data": {"entry_id": entry_id, "feedback": feedback},
    }


@router.delete("/entries/{entry_id}")
def delete_mood_entry(entry_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    if not mood_detection_service.soft_delete_entry(db, user.id, entry_id):
        raise HTTPException(status_code=404, detail="Mood entry not found")
    return {
        "success": True,
        "message": "Mood entry deleted successfully",
        "data": {"entry_id": entry_id, "deleted_at": datetime.utcnow().isoformat()},
    }


@router.get("/suggestions")
def mood_suggestions(
    emotion: str = "neutral",
    intensity: str = "medium",
    context: Optional[str] = Query(None, description="JSON-encoded spiritual context"),
    user: User = Depends(get_current_user)
):
    if emotion not in MOOD_EMOTIONS:
        raise HTTPException(status_code=400, detail="Invalid emotion")
    if intensity not in INTENSITY_LEVELS:
        raise HTTPException(status_code=400, detail="Invalid intensity")

    spiritual_context = {}
    if context:
        try:
            spiritual_context = json.loads(context)
        except ValueError:
            raise HTTPException(status_code=400, detail="Context must be valid JSON")
        if not isinstance(spiritual_context, dict):
            raise HTTPException(status_code=400, detail="Context must be a JSON object")

    return {
        "success": True,
        "data": {
            "emotion": emotion,
            "intensity": intensity,
            "suggestions": mood_detection_service.suggestions_for(emotion, intensity, spiritual_context),
            "generated_at": datetime.utcnow().isoformat(),
        },
    }


@router.get("/export")
def export_mood_data(
    format: str = Query("json", pattern="^(json|csv)$"),
    timeframe: str = Query("30d", pattern="^(1d|7d|30d|90d|all)$"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    entries = mood_detection_service.export_entries(db, user.id, timeframe)
    stamp = datetime.utcnow().date().isoformat()

    if format == "csv":
        return Response(
            content=mood_detection_service.entries_to_csv(entries),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="mood-data-{user.id}-{stamp}.csv"'},
        )

    return JSONResponse(
        content={
            "exported_at": datetime.utcnow().isoformat(),
            "user_id": user.id,
            "timeframe": timeframe,
            "total_entries": len(entries),
            "data": entries,
        },
        headers={"Content-Disposition": f'attachment; filename="mood-data-{user.id}-{stamp}.json"'},
    )


@router.get("/emotions")
def list_emotions():
    return {
        "success": True,
        "data": {
            "emotions": [
                {
                    "name": name,
                    "color": data["color"],
                    "polarity": data["polarity"],
                    "spiritual_context": data["spiritual_context"],
                    "practices": data["practices"],
                }
                for name, data in EMOTION_CATEGORIES.items()
            ],
            "intensity_levels": INTENSITY_LEVELS,
            "analysis_types": ANALYSIS_TYPES,
        },
    }


@router.get("/health")
def mood_health(db: Session = Depends(get_db)):
    health = mood_detection_service.get_health_metrics()
    try:
        db.execute(text("SELECT 1"))
        health["database"] = {"status": "connected"}
    except SQLAlchemyError as e:
        logger.error(f"❌ Mood health check: database unreachable: {e}")
        health["database"] = {"status": "disconnected"}
        return JSONResponse(status_code=503, content={"success": False, "data": health})

    return {"success": True, "data": health}
