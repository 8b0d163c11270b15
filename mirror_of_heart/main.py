# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import os
import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from apscheduler.schedulers.background import BackgroundScheduler
from pytz import timezone

from mirror_of_heart.models import database
from mirror_of_heart.models import *  # registers all models

from mirror_of_heart.routers import health_router, auth_router, user_router, journal_router
from mirror_of_heart.routers import emotion_router, tasbih_router
from mirror_of_heart.routers import mood_router, chatbot_router, gemini_router
from mirror_of_heart.routers import admin_router

from mirror_of_heart.utils.schedulers.run_all_cleanups import run_all_cleanups
from mirror_of_heart.utils.schedulers.cache_maintenance import trim_service_caches, reset_chatbot_metrics

from mirror_of_heart.utils.rate_limit_utils import limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# Create DB tables in one go
database.Base.metadata.create_all(bind=database.engine)

# Scheduler setup
scheduler = BackgroundScheduler(job_defaults={"misfire_grace_time": 60})


@asynccontextmanager
async def lifespan(app: FastAPI):
    tz = timezone(os.getenv("SCHEDULER_TIMEZONE", "UTC"))

    # 🧽 Trim in-memory caches every 30 minutes
    scheduler.add_job(trim_service_caches, "interval", minutes=30, id="trim_caches", replace_existing=True)

    # 🔄 Reset chatbot metrics every hour
    scheduler.add_job(reset_chatbot_metrics, "interval", hours=1, id="reset_metrics", replace_existing=True)

    # 🕛 Clean every day at 2 AM
    scheduler.add_job(run_all_cleanups, "cron", hour=2, minute=0, timezone=tz, id="daily_cleanup", replace_existing=True)

    scheduler.start()
    logger.info("⏰ Scheduler started")
    yield
    scheduler.shutdown()


# Create FastAPI app with lifespan
app = FastAPI(
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    title="Mirror of Heart API",
    description="Wellness journal, mood tracking and spiritual companion backend",
    version="2.0"
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# Include routers
app.include_router(health_router.router)
app.include_router(auth_router.router)
app.include_router(user_router.router)
app.include_router(journal_router.router)
app.include_router(emotion_router.router)
app.include_router(tasbih_router.router)
app.include_router(mood_router.router)
app.include_router(chatbot_router.router)
app.include_router(gemini_router.router)
app.include_router(admin_router.router)


# ---------------------- ADDING EXCEPTION HANDLER ----------------------
# Must stay sync: SlowAPIMiddleware calls it directly for application-wide limits
@app.exception_handler(RateLimitExceeded)
def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"🚦 Rate limit hit on {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please slow down.", "retry_after": 60}
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation failed", "errors": jsonable_encoder(exc.errors())}
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"🔥 Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})
