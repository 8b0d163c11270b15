# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session
from mirror_of_heart.models.database import get_db
from mirror_of_heart.models.user import User
from mirror_of_heart.schemas.user_schemas import RegisterRequest, LoginRequest
from mirror_of_heart.utils.auth_utils import hash_password, verify_password
from mirror_of_heart.utils.jwt_utils import create_access_token  # ✅ JWT

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", status_code=201)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    existing = db.query(User).filter(
        or_(User.username == payload.username, User.email == payload.email)
    ).first()
    if existing:
        raise HTTPException(status_code=400, detail="Username or email already registered")

    user = User(
        username=payload.username,
        email=payload.email,
        password_hash=hash_password(payload.password),
        gemini_api_key=payload.gemini_api_key or None,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"🆕 Registered user {user.id}")
    return {"message": "User registered successfully", "user_id": user.id}


@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == payload.email).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if user.suspended:
        raise HTTPException(status_code=403, detail="User is suspended")
    if not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return {"token": create_access_token(user.id), "gemini_api_key": user.gemini_api_key}
