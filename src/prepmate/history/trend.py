"""Rating trend classification."""

from __future__ import annotations

from statistics import mean
from typing import Sequence

from prepmate.config import DEFAULT_SETTINGS, ExtractionSettings
from prepmate.models import RatingPoint, Trend


def classify_trend(history: Sequence[RatingPoint], *, settings: ExtractionSettings = DEFAULT_SETTINGS) -> Trend:
    """Compare the mean of the latest points with the points just before them."""

    if len(history) < 2:
        return Trend.STABLE
    window = settings.trend_window
    recent = history[-window:]
    avg_recent = mean(point.rating for point in recent)
    if len(history) > window:
        previous = history[-2 * window: -window]
        avg_previous = mean(point.rating for point in previous)
    else:
        avg_previous = recent[0].rating

    if avg_recent > avg_previous + settings.trend_threshold:
        return Trend.IMPROVING
    if avg_recent < avg_previous - settings.trend_threshold:
        return Trend.DECLINING
    return Trend.STABLE
