# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import APIRouter

router = APIRouter(tags=["Infra"])


@router.get("/")
def read_root():
    return {"message": "Welcome to Mirror of Heart - wellness journal backend is live"}


@router.get("/health")
def health_check():
    return {"status": "ok"}
