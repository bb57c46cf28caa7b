"""Normalization, peak and trend analysis over rating histories."""

from .normalize import normalize_history
from .peak import PeakResult, detect_peak
from .synthetic import random_walk_history, synthetic_record
from .trend import classify_trend

__all__ = [
    "PeakResult",
    "classify_trend",
    "detect_peak",
    "normalize_history",
    "random_walk_history",
    "synthetic_record",
]
