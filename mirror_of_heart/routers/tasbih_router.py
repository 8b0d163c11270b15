# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter, Depends
from mirror_of_heart.models.user import User
from mirror_of_heart.services.tasbih_counter import tasbih_counter
from mirror_of_heart.utils.auth_utils import get_current_user

router = APIRouter(prefix="/tasbih", tags=["Tasbih"])


@router.post("/count")
def increment_count(user: User = Depends(get_current_user)):
    return {"user_id": user.id, "count": tasbih_counter.increment(user.id)}


@router.get("/count")
def get_count(user: User = Depends(get_current_user)):
    return {"user_id": user.id, "count": tasbih_counter.get(user.id)}


@router.post("/reset")
def reset_count(user: User = Depends(get_current_user)):
    return {"user_id": user.id, "count": tasbih_counter.reset(user.id)}
