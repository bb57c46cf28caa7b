"""Canonical rating models."""

from .player import ExtractedProfile, PlayerRecord, RatingPoint, Trend

__all__ = ["ExtractedProfile", "PlayerRecord", "RatingPoint", "Trend"]
