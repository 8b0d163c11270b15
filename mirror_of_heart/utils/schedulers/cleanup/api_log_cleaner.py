# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import os
import logging
from datetime import datetime, timedelta
from sqlalchemy.orm import Session
from mirror_of_heart.models.database import SessionLocal
from mirror_of_heart.models.api_log import ApiLog

logger = logging.getLogger("cleanup")


def retention_days() -> int:
    return int(os.getenv("API_LOG_RETENTION_DAYS", "30"))


def clean_old_api_logs() -> int:
    db: Session = SessionLocal()
    try:
        days = retention_days()
        cutoff = datetime.utcnow() - timedelta(days=days)
        count = (
            db.query(ApiLog)
            .filter(ApiLog.timestamp < cutoff)
            .delete(synchronize_session=False)
        )
        db.commit()
        logger.info(f"✅ ApiLog cleanup completed. Deleted {count} rows older than {days} days.")
        return count
    except Exception as e:
        db.rollback()
        logger.error(f"🛑 ApiLog cleanup failed: {e}", exc_info=True)
        return 0
    finally:
        db.close()
