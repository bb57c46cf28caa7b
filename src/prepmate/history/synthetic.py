"""Randomized demo profiles for identifiers with no extractable document."""

from __future__ import annotations

import random
from typing import List

from prepmate.config import DEFAULT_SETTINGS, ExtractionSettings
from prepmate.extract.patterns import resolve_year
from prepmate.models import PlayerRecord, RatingPoint

from .trend import classify_trend


def _clamp(value: float, bounds: tuple[int, int]) -> int:
    low, high = bounds
    return int(round(max(low, min(high, value))))


def random_walk_history(
    rng: random.Random,
    *,
    years: int,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
    current_year: int | None = None,
) -> List[RatingPoint]:
    end_year = resolve_year(current_year)
    rating = float(rng.randint(*settings.synthetic_start_range))
    history: List[RatingPoint] = []
    for year in range(end_year - (years - 1), end_year + 1):
        rating += rng.uniform(-settings.synthetic_step, settings.synthetic_step)
        rating = max(settings.synthetic_bounds[0], min(settings.synthetic_bounds[1], rating))
        history.append(RatingPoint(year=year, rating=int(round(rating))))
    return history


def synthetic_record(
    identifier: str,
    rng: random.Random,
    *,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
    current_year: int | None = None,
) -> PlayerRecord:
    history = random_walk_history(
        rng, years=settings.history_years, settings=settings, current_year=current_year
    )
    current = _clamp(rng.randint(*settings.synthetic_current_range), settings.synthetic_bounds)
    drawn_peak = _clamp(rng.randint(*settings.synthetic_peak_range), settings.synthetic_bounds)
    best = max(history, key=lambda point: point.rating)
    peak = max(drawn_peak, best.rating, current)
    return PlayerRecord(
        id=identifier,
        name=f"Player {identifier[:6]}",
        current_rating=current,
        peak_rating=peak,
        peak_date=str(best.year),
        rating_history=history,
        trend=classify_trend(history, settings=settings),
    )
