"""Peak rating detection from normalized history and document mentions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from prepmate.config import DEFAULT_SETTINGS, ExtractionSettings
from prepmate.extract.patterns import (
    PEAK_MENTION_PATTERNS,
    PEAK_WORD_PATTERN,
    iter_numbers,
    iter_years,
    resolve_year,
)
from prepmate.models import RatingPoint


logger = logging.getLogger(__name__)

UNKNOWN_PEAK_DATE = "Unknown"


@dataclass(frozen=True)
class PeakResult:
    peak_rating: Optional[int]
    peak_year: Optional[int]

    @property
    def peak_date(self) -> str:
        return str(self.peak_year) if self.peak_year is not None else UNKNOWN_PEAK_DATE


def mentioned_peak(
    text: str,
    *,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
    current_year: int | None = None,
) -> Optional[int]:
    """Rating quoted next to a "peak", "highest" or "top" label, if plausible.

    Labelled mentions ("Highest rating: 2450") are taken as written. A bare
    "peak", "highest" or "top" word ignores numbers that read as a year.
    """

    for pattern in PEAK_MENTION_PATTERNS:
        for match in pattern.finditer(text):
            value = int(match.group(1))
            if settings.is_plausible(value):
                return value
    year_limit = resolve_year(current_year)
    for match in PEAK_WORD_PATTERN.finditer(text):
        value = int(match.group(1))
        if settings.is_plausible(value) and not 2000 <= value <= year_limit:
            return value
    return None


def anomalous_peak(
    text: str,
    floor: int,
    *,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
    current_year: int | None = None,
) -> Optional[RatingPoint]:
    """First dated rating that beats ``floor`` by more than the anomaly margin."""

    year_limit = resolve_year(current_year)
    for token in iter_numbers(text):
        if not settings.is_plausible(token.value):
            continue
        if token.value <= floor + settings.peak_anomaly_margin:
            continue
        # Chart axes list consecutive years; a year is never read as a rating here.
        if 2000 <= token.value <= year_limit:
            continue
        window_start = max(0, token.start - settings.peak_anomaly_window)
        years = [
            year
            for year in iter_years(text, current_year=year_limit, start=window_start, end=token.start)
            if year.end <= token.start
        ]
        if not years:
            continue
        return RatingPoint(year=years[-1].value, rating=token.value)
    return None


def detect_peak(
    history: Sequence[RatingPoint],
    text: str = "",
    *,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
    current_year: int | None = None,
) -> PeakResult:
    if not history:
        return PeakResult(peak_rating=None, peak_year=None)
    baseline = history[0]
    for point in history:
        if point.rating > baseline.rating:
            baseline = point
    peak_rating, peak_year = baseline.rating, baseline.year

    if text:
        mention = mentioned_peak(text, settings=settings, current_year=current_year)
        if mention is not None and mention > peak_rating:
            logger.debug("Explicit peak mention %s overrides %s", mention, peak_rating)
            peak_rating = mention

        anomaly = anomalous_peak(text, peak_rating, settings=settings, current_year=current_year)
        if anomaly is not None:
            logger.debug("Dated peak %s in %s found outside the history window", anomaly.rating, anomaly.year)
            peak_rating, peak_year = anomaly.rating, anomaly.year

    return PeakResult(peak_rating=peak_rating, peak_year=peak_year)
