# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from mirror_of_heart.services.chatbot_service import chatbot_service
from mirror_of_heart.services.mood_detection_service import mood_detection_service

logger = logging.getLogger("cleanup")


def trim_service_caches():
    """Runs every 30 minutes: keeps the in-memory caches under their high-water marks."""
    try:
        mood_trimmed = mood_detection_service.trim_caches()
        chat_trimmed = chatbot_service.trim_caches()
        logger.info(f"🧽 Cache trim done. mood={mood_trimmed} chatbot={chat_trimmed}")
    except Exception as e:
        logger.error(f"🛑 Cache trim failed: {e}", exc_info=True)


def reset_chatbot_metrics():
    try:
        chatbot_service.reset_metrics()
        logger.info("🔄 Chatbot metrics reset.")
    except Exception as e:
        logger.error(f"🛑 Chatbot metrics reset failed: {e}", exc_info=True)
