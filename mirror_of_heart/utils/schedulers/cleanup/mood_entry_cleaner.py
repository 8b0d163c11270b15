# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from datetime import datetime, timedelta
from sqlalchemy.orm import Session
from mirror_of_heart.models.database import SessionLocal
from mirror_of_heart.models.mood import MoodEntry

logger = logging.getLogger("cleanup")

SOFT_DELETE_RETENTION_DAYS = 30


def clean_deleted_mood_entries() -> int:
    """
    Hard-deletes mood entries that were soft-deleted more than 30 days ago.
    Active entries are never touched.
    """
    db: Session = SessionLocal()
    try:
        cutoff = datetime.utcnow() - timedelta(days=SOFT_DELETE_RETENTION_DAYS)
        count = (
            db.query(MoodEntry)
            .filter(MoodEntry.is_active.is_(False), MoodEntry.updated_at < cutoff)
            .delete(synchronize_session=False)
        )
        db.commit()
        logger.info(f"🗑️ Purged {count} soft-deleted MoodEntries older than {SOFT_DELETE_RETENTION_DAYS} days.")
        return count
    except Exception as e:
        db.rollback()
        logger.error(f"🛑 MoodEntry cleanup failed: {e}", exc_info=True)
        return 0
    finally:
        db.close()
