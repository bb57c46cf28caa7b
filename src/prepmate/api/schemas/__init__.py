"""Pydantic models for API I/O."""

from .opponent import OpponentRequest, OpponentResponse
from .rating import RatingChangeRequest, RatingChangeResponse

__all__ = [
    "OpponentRequest",
    "OpponentResponse",
    "RatingChangeRequest",
    "RatingChangeResponse",
]
