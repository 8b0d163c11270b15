# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
import time

from mirror_of_heart.utils.schedulers.cleanup.api_log_cleaner import clean_old_api_logs
from mirror_of_heart.utils.schedulers.cleanup.mood_entry_cleaner import clean_deleted_mood_entries


logger = logging.getLogger("cleanup")


def run_all_cleanups():
    logger.info("🧹 Starting all cleanup tasks...")

    cleanup_tasks = [
        ("ApiLogs", clean_old_api_logs),
        ("DeletedMoodEntries", clean_deleted_mood_entries),
    ]

    for name, func in cleanup_tasks:
        start = time.time()
        try:
            logger.info(f"🔹 Running cleanup: {name}")
            func()
            duration = round(time.time() - start, 2)
            logger.info(f"✅ Completed {name} cleanup in {duration} sec.")
        except Exception as e:
            logger.error(f"🛑 {name} cleanup failed: {e}", exc_info=True)

    logger.info("🎉 All cleanup jobs completed.")
