from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class AssignPriestRequest(BaseModel):
    priest_id: str = Field(..., min_length=1)
    send_confirmation_request: bool = False


class PriestConfirmationRequest(BaseModel):
    accept: bool


class ReleaseRequest(BaseModel):
    released_to: str = Field(..., min_length=2, max_length=150)
    released_date: Optional[date] = None
