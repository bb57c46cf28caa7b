"""Tunable extraction constants, overridable through ``PREPMATE_*`` variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Tuple


logger = logging.getLogger(__name__)

MAX_HISTORY_YEARS = 20

_CACHE_TTL_ENV = "PREPMATE_CACHE_TTL"
_HISTORY_YEARS_ENV = "PREPMATE_HISTORY_YEARS"
_REQUEST_TIMEOUT_ENV = "PREPMATE_REQUEST_TIMEOUT"
_PEAK_MARGIN_ENV = "PREPMATE_PEAK_MARGIN"
_TREND_THRESHOLD_ENV = "PREPMATE_TREND_THRESHOLD"


@dataclass(frozen=True)
class ExtractionSettings:
    min_plausible: int = 800
    max_plausible: int = 3000
    history_years: int = 10
    baseline_rating: int = 1600
    trend_threshold: int = 50
    trend_window: int = 3
    peak_anomaly_margin: int = 20
    peak_anomaly_window: int = 30
    standard_trailing_window: int = 80
    standard_context_window: int = 200
    loose_scan_window: int = 40
    cache_ttl_seconds: float = 3600.0
    request_timeout: float = 5.0
    debug_prefix_chars: int = 2000
    synthetic_current_range: Tuple[int, int] = (1600, 2399)
    synthetic_peak_range: Tuple[int, int] = (1800, 2699)
    synthetic_start_range: Tuple[int, int] = (1400, 1799)
    synthetic_step: int = 100
    synthetic_bounds: Tuple[int, int] = (1000, 3000)

    def is_plausible(self, value: int | None) -> bool:
        return value is not None and self.min_plausible <= value <= self.max_plausible

    def with_overrides(self, overrides: Mapping[str, object]) -> "ExtractionSettings":
        """Return a copy with known fields replaced; unknown keys are ignored.

        Values are coerced to the type of the field they replace. A value that
        cannot be coerced raises ``ValueError``.
        """

        known = {name for name in self.__dataclass_fields__}
        updates = {}
        for key, value in overrides.items():
            if key not in known:
                logger.warning("Ignoring unknown setting %s", key)
                continue
            updates[key] = _coerce(key, value, getattr(self, key))
        if "history_years" in updates:
            updates["history_years"] = _clamp_years(updates["history_years"])
        return replace(self, **updates)


def _coerce(key: str, value: object, current: object) -> object:
    try:
        if isinstance(current, tuple):
            return tuple(int(item) for item in value)
        if isinstance(current, float):
            return float(value)
        if isinstance(current, int):
            return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid value for {key}: {value!r}") from exc
    return value


def _clamp_years(value: int) -> int:
    return max(1, min(MAX_HISTORY_YEARS, value))


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None, max_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    if max_value is not None:
        value = min(max_value, value)
    return value


def load_settings(base: ExtractionSettings | None = None) -> ExtractionSettings:
    """Apply environment overrides on top of ``base`` (or the defaults)."""

    base = base or ExtractionSettings()
    return replace(
        base,
        cache_ttl_seconds=_env_float(_CACHE_TTL_ENV, base.cache_ttl_seconds, clamp_min=0.0),
        history_years=_env_int(
            _HISTORY_YEARS_ENV, base.history_years, min_value=1, max_value=MAX_HISTORY_YEARS
        ),
        request_timeout=_env_float(_REQUEST_TIMEOUT_ENV, base.request_timeout, clamp_min=0.1),
        peak_anomaly_margin=_env_int(_PEAK_MARGIN_ENV, base.peak_anomaly_margin, min_value=0),
        trend_threshold=_env_int(_TREND_THRESHOLD_ENV, base.trend_threshold, min_value=0),
    )


DEFAULT_SETTINGS = ExtractionSettings()
