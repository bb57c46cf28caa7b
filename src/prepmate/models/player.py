"""Canonical player models shared across extraction and API layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


class Trend(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class RatingPoint(BaseModel):
    """One rating observation per calendar year."""

    year: int
    rating: int

    model_config = ConfigDict(frozen=True)


class PlayerRecord(BaseModel):
    """Normalized opponent profile returned to callers."""

    id: str = Field(..., min_length=1)
    name: str
    current_rating: int = Field(..., ge=0)
    peak_rating: int = Field(..., ge=0)
    peak_date: str
    rating_history: List[RatingPoint]
    trend: Trend

    # Serialized by alias as currentRating, peakRating, peakDate and ratingHistory.
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


@dataclass(frozen=True)
class ExtractedProfile:
    """Raw signals pulled out of one document, before normalization."""

    name: Optional[str]
    current_rating: Optional[int]
    raw_series: List[RatingPoint] = field(default_factory=list)
    peak_rating: Optional[int] = None
    peak_year: Optional[int] = None
