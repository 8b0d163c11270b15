# Copyright (c) 2025 Mirror of Heart contributors
# This file is part of the Mirror of Heart - Wellness Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from pydantic import BaseModel
from typing import Optional, List


class JournalCreateRequest(BaseModel):
    text: str
    title: Optional[str] = None
    image: Optional[str] = None  # base64 or URL
    audio: Optional[str] = None  # base64 or URL
    tags: Optional[List[str]] = None
    location: Optional[str] = None


class JournalUpdateRequest(BaseModel):
    text: Optional[str] = None
    title: Optional[str] = None
    image: Optional[str] = None
    audio: Optional[str] = None
    tags: Optional[List[str]] = None
    location: Optional[str] = None
