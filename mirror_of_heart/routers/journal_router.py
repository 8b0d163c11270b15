# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from mirror_of_heart.models.database import get_db
from mirror_of_heart.models.journal import JournalEntry
from mirror_of_heart.models.user import User
from mirror_of_heart.schemas.journal_schemas import JournalCreateRequest, JournalUpdateRequest
from mirror_of_heart.utils.auth_utils import get_current_user
from mirror_of_heart.utils.emotion_analysis import analyze_text_emotion, detected_emotions

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/journal", tags=["Journal"])


def _tag_emotions(entry: JournalEntry, text: str) -> None:
    entry.emotions = detected_emotions(text)
    entry.emotion_confidence = analyze_text_emotion(text)["confidence"]


def _clean_tags(tags: Optional[list]) -> list:
    seen = []
    for tag in tags or []:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def _owned_entry(db: Session, user: User, entry_id: int) -> JournalEntry:
    entry = db.query(JournalEntry).filter(JournalEntry.id == entry_id, JournalEntry.user_id == user.id).first()
    if not entry:
        raise HTTPException(status_code=404, detail="Journal entry not found")
    return entry


@router.post("", status_code=201)
def create_entry(
    payload: JournalCreateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if not payload.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")

    entry = JournalEntry(
        user_id=user.id,
        title=payload.title,
        text=payload.text,
        image=payload.image,
        audio=payload.audio,
        location=payload.location,
        tags=_clean_tags(payload.tags),
    )
    _tag_emotions(entry, payload.text)

    db.add(entry)
    db.commit()
    db.refresh(entry)

    logger.info(f"📝 Journal entry {entry.id} saved for user {user.id} (emotions: {entry.emotions})")
    return {"success": True, "entry": entry.to_dict()}


@router.get("")
def list_entries(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    tag: Optional[str] = None,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    entries = (
        db.query(JournalEntry)
        .filter(JournalEntry.user_id == user.id)
        .order_by(JournalEntry.created_at.desc(), JournalEntry.id.desc())
        .all()
    )
    # Tags live in a JSON column, filter in Python to stay portable across databases
    if tag:
        entries = [e for e in entries if tag in (e.tags or [])]

    start = (page - 1) * limit
    return {
        "entries": [e.to_dict() for e in entries[start:start + limit]],
        "total": len(entries),
        "page": page,
        "limit": limit,
    }


@router.get("/tags")
def list_tags(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    tags = set()
    for (entry_tags,) in db.query(JournalEntry.tags).filter(JournalEntry.user_id == user.id):
        tags.update(entry_tags or [])
    return {"tags": sorted(tags)}


@router.put("/{entry_id}")
def update_entry(
    entry_id: int,
    payload: JournalUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    entry = _owned_entry(db, user, entry_id)
    updates = payload.model_dump(exclude_unset=True)

    if "text" in updates:
        text = updates.pop("text")
        if not text or not text.strip():
            raise HTTPException(status_code=400, detail="Text is required")
        entry.text = text
        _tag_emotions(entry, text)

    if "tags" in updates:
        entry.tags = _clean_tags(updates.pop("tags"))

    for field, value in updates.items():
        setattr(entry, field, value)

    entry.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(entry)
    return {"success": True, "entry": entry.to_dict()}


@router.delete("/{entry_id}")
def delete_entry(entry_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    entry = _owned_entry(db, user, entry_id)
    db.delete(entry)
    db.commit()
    return {"success": True, "message": "Entry deleted"}
