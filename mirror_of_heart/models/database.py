# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.

import os
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

# ✅ Only load .env in local/dev
if os.environ.get("ENV") != "production":
    from dotenv import load_dotenv
    load_dotenv()

# ✅ Load required env variable
SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]

# ✅ SQLite (dev/tests) is single-file and shares one connection across threads
if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
    )
else:
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        pool_size=10,          # Keep 10 connections open
        max_overflow=20,       # Allow 20 extra if under load
        pool_recycle=1800,     # Recycle every 30 mins
        pool_pre_ping=True     # Validate before using connection
    )

# ✅ Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ Base model
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
