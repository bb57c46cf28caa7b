"""Fit a sparse rating series onto a fixed trailing window of years."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from prepmate.config import DEFAULT_SETTINGS, ExtractionSettings
from prepmate.extract.patterns import resolve_year
from prepmate.models import RatingPoint


logger = logging.getLogger(__name__)


def normalize_history(
    history: Iterable[RatingPoint],
    *,
    years: int | None = None,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
    current_year: int | None = None,
) -> List[RatingPoint]:
    """Return exactly ``years`` consecutive points ending at the current year.

    Known points inside the window are kept as-is. Missing years repeat the
    value placed just before them; a leading gap uses the latest known point of
    the whole input and an empty history falls back to ``settings.baseline_rating``.
    """

    count = max(1, years if years is not None else settings.history_years)
    end_year = resolve_year(current_year)
    start_year = end_year - (count - 1)

    by_year: Dict[int, int] = {}
    for point in sorted(history, key=lambda point: point.year):
        if point.year <= end_year:
            by_year[point.year] = point.rating
    ordered = sorted(by_year.items())

    in_window = [(year, rating) for year, rating in ordered if start_year <= year <= end_year]
    if len(in_window) == count:
        return [RatingPoint(year=year, rating=rating) for year, rating in in_window]

    window: List[RatingPoint] = []
    for year in range(start_year, end_year + 1):
        if year in by_year:
            window.append(RatingPoint(year=year, rating=by_year[year]))
            continue
        if window:
            rating = window[-1].rating
        elif ordered:
            rating = ordered[-1][1]
        else:
            rating = settings.baseline_rating
        window.append(RatingPoint(year=year, rating=rating))
    logger.debug("Padded history: %s known of %s years", len(in_window), count)
    return window
