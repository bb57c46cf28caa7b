from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class RatingChangeRequest(BaseModel):
    current_rating: int = Field(..., ge=0)
    opponent_rating: int = Field(..., ge=0)
    result: Literal["win", "draw", "loss"]
    k_factor: int = Field(default=32, ge=1, le=64)


class RatingChangeResponse(BaseModel):
    expected_score: float
    change: int
