# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import os
import logging
import requests
from time import sleep
from typing import Optional

# ---------------------------
# ✅ Logger Setup
# ---------------------------

logger = logging.getLogger(__name__)

# ---------------------------
# ✅ Environment Variables
# ---------------------------

if os.getenv("ENV") != "production":
    from dotenv import load_dotenv
    load_dotenv()

GEMINI_API_URL = os.getenv(
    "GEMINI_API_URL",
    "https://generativelanguage.googleapis.com/v1beta/models/gemini-pro:generateContent"
)

HEADERS = {"Content-Type": "application/json"}
MAX_RETRIES = 2
RETRY_DELAY_SECONDS = 1
REQUEST_TIMEOUT = 30


class GeminiServiceError(Exception):
    """Raised when the generateContent call cannot produce a usable JSON reply."""

    def __init__(self, message: str, details=None):
        super().__init__(message)
        self.details = details


def resolve_api_key(user_key: Optional[str] = None) -> Optional[str]:
    """A user's own key wins over the server-wide GEMINI_API_KEY."""
    return user_key or os.getenv("GEMINI_API_KEY")


def build_payload(prompt: str, generation_config: Optional[dict] = None, safety_settings: Optional[list] = None) -> dict:
    payload = {"contents": [{"parts": [{"text": prompt}]}]}
    if generation_config:
        payload["generationConfig"] = generation_config
    if safety_settings:
        payload["safetySettings"] = safety_settings
    return payload


# ---------------------------
# ✅ generateContent call
# ---------------------------

def generate_content(payload: dict, api_key: Optional[str] = None) -> dict:
    """
    Posts a generateContent payload and returns the raw JSON body.
    Retries once on transport errors. Raises GeminiServiceError when no key is
    configured or every attempt fails.
    """
    key = resolve_api_key(api_key)
    if not key:
        logger.error("❌ Missing Gemini API key.")
        raise GeminiServiceError("Gemini API key not configured")

    try_count = 0
    last_error = None

    while try_count < MAX_RETRIES:
        try:
            logger.info("🔁 Sending prompt to Gemini: %s", GEMINI_API_URL)
            response = requests.post(
                GEMINI_API_URL,
                params={"key": key},
                headers=HEADERS,
                json=payload,
                timeout=REQUEST_TIMEOUT
            )
            response.raise_for_status()
            return response.json()

        except requests.exceptions.HTTPError as e:
            # 4xx will not get better on retry
            body = e.response.text if e.response is not None else str(e)
            logger.warning("⚠️ Gemini returned an error status: %s", body[:300])
            raise GeminiServiceError("Gemini API request failed", details=body) from e

        except (requests.exceptions.RequestException, ValueError) as e:
            try_count += 1
            last_error = e
            logger.warning("⚠️ Gemini request failed (attempt %d/%d). Retrying...", try_count, MAX_RETRIES)
            if try_count < MAX_RETRIES:
                sleep(RETRY_DELAY_SECONDS)

    logger.error("❌ Gemini request failed after retries: %s", last_error)
    raise GeminiServiceError("Gemini API request failed", details=str(last_error))


def extract_text(result: dict) -> Optional[str]:
    """First candidate's text, or None when the reply was blocked or empty."""
    try:
        parts = result["candidates"][0]["content"]["parts"]
        text = "".join(part.get("text", "") for part in parts).strip()
    except (KeyError, IndexError, TypeError):
        logger.warning("⚠️ Unexpected Gemini response format: %s", str(result)[:300])
        return None
    return text or None
