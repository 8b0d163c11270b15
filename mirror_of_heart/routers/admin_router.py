# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from mirror_of_heart.models.database import get_db
from mirror_of_heart.models.user import User
from mirror_of_heart.models.journal import JournalEntry
from mirror_of_heart.models.api_log import ApiLog
from mirror_of_heart.services.chatbot_service import chatbot_service
from mirror_of_heart.services.mood_detection_service import mood_detection_service
from mirror_of_heart.services.tasbih_counter import tasbih_counter
from mirror_of_heart.utils.auth_utils import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


def _get_user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/users")
def list_users(db: Session = Depends(get_db)):
    return [user.to_profile() for user in db.query(User).order_by(User.id).all()]


@router.get("/journals")
def list_journals(db: Session = Depends(get_db)):
    entries = db.query(JournalEntry).order_by(JournalEntry.created_at.desc()).all()
    return [entry.to_dict() for entry in entries]


@router.get("/logs")
def list_logs(db: Session = Depends(get_db)):
    logs = db.query(ApiLog).order_by(ApiLog.timestamp.desc(), ApiLog.id.desc()).limit(100).all()
    return [log.to_dict() for log in logs]


# ✅ Moderation flags
def _set_flag(db: Session, user_id: int, **flags) -> User:
    user = _get_user_or_404(db, user_id)
    for field, value in flags.items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    logger.info(f"🛡️ Admin updated user {user_id}: {flags}")
    return user


@router.post("/promote/{user_id}")
def promote_user(user_id: int, db: Session = Depends(get_db)):
    user = _set_flag(db, user_id, is_admin=True)
    return {"message": f"User {user.username} promoted to admin", "user": user.to_profile()}


@router.post("/demote/{user_id}")
def demote_user(user_id: int, db: Session = Depends(get_db)):
    user = _set_flag(db, user_id, is_admin=False)
    return {"message": f"User {user.username} demoted", "user": user.to_profile()}


@router.post("/suspend/{user_id}")
def suspend_user(user_id: int, db: Session = Depends(get_db)):
    user = _set_flag(db, user_id, suspended=True)
    return {"message": f"User {user.username} suspended", "user": user.to_profile()}


@router.post("/unsuspend/{user_id}")
def unsuspend_user(user_id: int, db: Session = Depends(get_db)):
    user = _set_flag(db, user_id, suspended=False)
    return {"message": f"User {user.username} unsuspended", "user": user.to_profile()}


@router.delete("/user/{user_id}")
def delete_user(user_id: int, db: Session = Depends(get_db)):
    user = _get_user_or_404(db, user_id)
    session_ids = [c.session_id for c in user.conversations]
    db.delete(user)  # journals, mood entries and conversations cascade
    db.commit()

    # 🧹 Drop process-local state tied to the user
    tasbih_counter.reset(user_id)
    mood_detection_service.user_context_cache.delete(user_id)
    chatbot_service.forget_user(user_id, session_ids)

    logger.info(f"🗑️ Admin deleted user {user_id}")
    return {"message": "User deleted successfully"}


@router.delete("/journal/{journal_id}")
def delete_journal(journal_id: int, db: Session = Depends(get_db)):
    entry = db.query(JournalEntry).filter(JournalEntry.id == journal_id).first()
    if not entry:
        raise HTTPException(status_code=404, detail="Journal entry not found")
    db.delete(entry)
    db.commit()
    logger.info(f"🗑️ Admin deleted journal entry {journal_id}")
    return {"message": "Journal entry deleted successfully"}
