"""Assemble player records from fetched profile documents."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from prepmate.cache import RatingCache
from prepmate.config import DEFAULT_SETTINGS, ExtractionSettings
from prepmate.extract import extract_current_rating, extract_name, extract_series
from prepmate.fetch import DocumentFetcher, DocumentUnavailable
from prepmate.history import classify_trend, detect_peak, normalize_history, synthetic_record
from prepmate.models import ExtractedProfile, PlayerRecord


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileLookup:
    record: PlayerRecord
    document_prefix: Optional[str] = None

    def debug_payload(self, debug: bool) -> Optional[str]:
        return self.document_prefix if debug else None


def extract_profile(
    text: str,
    *,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
    current_year: int | None = None,
) -> ExtractedProfile:
    name = extract_name(text)
    series = extract_series(text, settings=settings, current_year=current_year)
    current = extract_current_rating(text, series=series, settings=settings)
    history = normalize_history(series, settings=settings, current_year=current_year)
    peak = detect_peak(history, text, settings=settings, current_year=current_year)
    return ExtractedProfile(
        name=name,
        current_rating=current,
        raw_series=series,
        peak_rating=peak.peak_rating,
        peak_year=peak.peak_year,
    )


def assemble_record(
    identifier: str,
    profile: ExtractedProfile,
    *,
    settings: ExtractionSettings = DEFAULT_SETTINGS,
    current_year: int | None = None,
) -> Optional[PlayerRecord]:
    """Build the public record, or ``None`` when no name could be resolved."""

    if not profile.name:
        return None
    history = normalize_history(profile.raw_series, settings=settings, current_year=current_year)
    current = profile.current_rating if profile.current_rating is not None else history[-1].rating
    peak_rating = profile.peak_rating
    if peak_rating is None:
        peak_rating = max(point.rating for point in history)
    return PlayerRecord(
        id=identifier,
        name=profile.name,
        current_rating=current,
        peak_rating=peak_rating,
        peak_date=str(profile.peak_year) if profile.peak_year is not None else "Unknown",
        rating_history=history,
        trend=classify_trend(history, settings=settings),
    )


class ProfileService:
    """Fetch, extract and assemble opponent profiles, memoized per identifier."""

    def __init__(
        self,
        fetcher: DocumentFetcher,
        *,
        settings: ExtractionSettings = DEFAULT_SETTINGS,
        cache: RatingCache[ProfileLookup] | None = None,
        rng: random.Random | None = None,
        current_year: int | None = None,
    ):
        self.fetcher = fetcher
        self.settings = settings
        self.cache = cache
        self.rng = rng or random.Random()
        self.current_year = current_year

    def lookup(self, identifier: str) -> ProfileLookup:
        if self.cache is None:
            return self.build(identifier)
        return self.cache.get_or_build(identifier, lambda: self.build(identifier))

    def build(self, identifier: str) -> ProfileLookup:
        try:
            text = self.fetcher.fetch(identifier)
        except DocumentUnavailable as exc:
            logger.info("No document for %s (%s); using synthetic profile", identifier, exc)
            return ProfileLookup(record=self._synthetic(identifier))
        except Exception as exc:
            logger.warning("Unexpected error fetching %s: %s", identifier, exc)
            return ProfileLookup(record=self._synthetic(identifier))

        prefix = text[: self.settings.debug_prefix_chars]
        profile = extract_profile(text, settings=self.settings, current_year=self.current_year)
        record = assemble_record(identifier, profile, settings=self.settings, current_year=self.current_year)
        if record is None:
            logger.info("No name resolved for %s; using synthetic profile", identifier)
            record = self._synthetic(identifier)
        return ProfileLookup(record=record, document_prefix=prefix)

    def _synthetic(self, identifier: str) -> PlayerRecord:
        return synthetic_record(identifier, self.rng, settings=self.settings, current_year=self.current_year)
