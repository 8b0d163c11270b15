# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from mirror_of_heart.models.database import get_db
from mirror_of_heart.models.user import User
from mirror_of_heart.schemas.user_schemas import ProfileUpdateRequest
from mirror_of_heart.utils.auth_utils import get_current_user

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me")
def get_profile(user: User = Depends(get_current_user)):
    return user.to_profile()


@router.put("/me")
def update_profile(
    payload: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    # Password changes go through a dedicated flow, never here
    updates = payload.model_dump(exclude_unset=True)

    for field in ("username", "email"):
        value = updates.get(field)
        if value and value != getattr(user, field):
            taken = db.query(User).filter(getattr(User, field) == value, User.id != user.id).first()
            if taken:
                raise HTTPException(status_code=400, detail=f"{field.capitalize()} already in use")

    for field, value in updates.items():
        if field in ("username", "email") and not value:
            continue
        setattr(user, field, value)

    db.commit()
    db.refresh(user)
    return user.to_profile()
