"""Current standard rating extraction as an ordered cascade of strategies."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence, Tuple

from prepmate.config import DEFAULT_SETTINGS, ExtractionSettings
from prepmate.models import RatingPoint

from .patterns import (
    LABELED_RATING_PATTERNS,
    MARKUP_STANDARD_PATTERN,
    STANDARD_TOKEN_PATTERN,
    STANDARD_WORD_PATTERN,
    iter_numbers,
)


logger = logging.getLogger(__name__)

RatingStrategy = Callable[[str, ExtractionSettings], Optional[int]]


def _markup_before_label(text: str, settings: ExtractionSettings) -> Optional[int]:
    for match in MARKUP_STANDARD_PATTERN.finditer(text):
        value = int(match.group(1))
        if settings.is_plausible(value):
            return value
    return None


def _near_standard_word(text: str, settings: ExtractionSettings) -> Optional[int]:
    match = STANDARD_WORD_PATTERN.search(text)
    if not match:
        return None
    half = settings.standard_context_window // 2
    start = max(0, match.start() - half)
    end = min(len(text), match.end() + half)
    for token in iter_numbers(text, start, end):
        if settings.is_plausible(token.value):
            return token.value
    return None


def _followed_by_standard_token(text: str, settings: ExtractionSettings) -> Optional[int]:
    for token in iter_numbers(text):
        if not settings.is_plausible(token.value):
            continue
        trailing = text[token.end: token.end + settings.standard_trailing_window]
        if STANDARD_TOKEN_PATTERN.search(trailing):
            return token.value
    return None


def _labeled_patterns(text: str, settings: ExtractionSettings) -> Optional[int]:
    for pattern in LABELED_RATING_PATTERNS:
        for match in pattern.finditer(text):
            value = int(match.group(1))
            if settings.is_plausible(value):
                return value
    return None


def _last_plausible_number(text: str, settings: ExtractionSettings) -> Optional[int]:
    last = None
    for token in iter_numbers(text):
        if settings.is_plausible(token.value):
            last = token.value
    return last


CURRENT_RATING_STRATEGIES: Tuple[Tuple[str, RatingStrategy], ...] = (
    ("markup_label", _markup_before_label),
    ("standard_window", _near_standard_word),
    ("trailing_standard", _followed_by_standard_token),
    ("labeled", _labeled_patterns),
    ("last_number", _last_plausible_number),
)


def extract_current_rating(
    text: str,
    *,
    series: Sequence[RatingPoint] = (),
    settings: ExtractionSettings = DEFAULT_SETTINGS,
    strategies: Sequence[Tuple[str, RatingStrategy]] = CURRENT_RATING_STRATEGIES,
) -> Optional[int]:
    """Return the first plausible rating produced by ``strategies``.

    When every strategy comes up empty, the most recent point of ``series`` is
    used instead. ``None`` means neither source had anything.
    """

    for label, strategy in strategies:
        value = strategy(text or "", settings)
        if settings.is_plausible(value):
            logger.debug("Current rating %s via %s", value, label)
            return value
    if series:
        latest = max(series, key=lambda point: point.year)
        logger.debug("Current rating %s taken from %s history point", latest.rating, latest.year)
        return latest.rating
    return None
