"""Rating-history extraction from chart scripts, table rows and loose text."""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Sequence

from prepmate.config import DEFAULT_SETTINGS, ExtractionSettings
from prepmate.models import RatingPoint

from .patterns import (
    PREFERRED_SERIES_PATTERN,
    SeriesCandidate,
    chart_series,
    chart_years,
    iter_numbers,
    iter_rows,
    iter_years,
    resolve_year,
)


logger = logging.getLogger(__name__)

YearMap = Dict[int, int]


def _choose_series(candidates: Sequence[SeriesCandidate]) -> Optional[SeriesCandidate]:
    for candidate in candidates:
        if PREFERRED_SERIES_PATTERN.search(candidate.name):
            return candidate
    if not candidates:
        return None
    # Longer time controls run higher, so the highest mean is most likely the standard list.
    return max(candidates, key=lambda candidate: candidate.mean)


def extract_chart_series(
    text: str,
    *,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
    current_year: int | None = None,
) -> YearMap:
    """Pair the chart's year axis with its preferred data series."""

    year_limit = resolve_year(current_year)
    years = chart_years(text)
    chosen = _choose_series(chart_series(text))
    if not years or chosen is None:
        return {}
    if len(years) != len(chosen.values):
        logger.debug(
            "Discarding chart series %r: %s years vs %s values", chosen.name, len(years), len(chosen.values)
        )
        return {}
    pairs: YearMap = {}
    for year, rating in zip(years, chosen.values):
        if not 2000 <= year <= year_limit or not settings.is_plausible(rating):
            continue
        pairs[year] = rating
    return pairs


def extract_table_series(
    text: str,
    *,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
    current_year: int | None = None,
) -> YearMap:
    """Highest plausible rating per year across single-year table rows."""

    year_limit = resolve_year(current_year)
    best: YearMap = {}
    for row in iter_rows(text):
        years = list(iter_years(row, current_year=year_limit))
        if len(years) != 1:
            continue
        year_token = years[0]
        rating = next(
            (
                token.value
                for token in iter_numbers(row)
                if token.start != year_token.start and settings.is_plausible(token.value)
            ),
            None,
        )
        if rating is None:
            continue
        if rating > best.get(year_token.value, 0):
            best[year_token.value] = rating
    return best


def extract_loose_series(
    text: str,
    *,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
    current_year: int | None = None,
) -> YearMap:
    """Pair each year token with the first plausible number shortly after it."""

    year_limit = resolve_year(current_year)
    pairs: YearMap = {}
    for year_token in iter_years(text, current_year=year_limit):
        window_end = min(len(text), year_token.end + settings.loose_scan_window)
        for token in iter_numbers(text, year_token.end, window_end):
            if settings.is_plausible(token.value):
                pairs[year_token.value] = token.value
                break
    return pairs


def merge_series_layers(layers: Sequence[Mapping[int, int]]) -> List[RatingPoint]:
    """Fold year maps from lowest to highest precedence into one sorted series."""

    merged: YearMap = {}
    for layer in layers:
        merged.update(layer)
    return [RatingPoint(year=year, rating=rating) for year, rating in sorted(merged.items())]


def extract_series(
    text: str,
    *,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
    current_year: int | None = None,
) -> List[RatingPoint]:
    if not text:
        return []
    chart = extract_chart_series(text, settings=settings, current_year=current_year)
    table = extract_table_series(text, settings=settings, current_year=current_year)
    if chart or table:
        logger.debug("Series layers: chart=%s table=%s", len(chart), len(table))
        return merge_series_layers([chart, table])
    loose = extract_loose_series(text, settings=settings, current_year=current_year)
    logger.debug("Series from loose scan: %s points", len(loose))
    return merge_series_layers([loose])
