"""Extractors that pull profile signals out of raw document text."""

from .current import CURRENT_RATING_STRATEGIES, extract_current_rating
from .names import NAME_STRATEGIES, clean_name, extract_name
from .series import (
    extract_chart_series,
    extract_loose_series,
    extract_series,
    extract_table_series,
    merge_series_layers,
)

__all__ = [
    "CURRENT_RATING_STRATEGIES",
    "NAME_STRATEGIES",
    "clean_name",
    "extract_chart_series",
    "extract_current_rating",
    "extract_loose_series",
    "extract_name",
    "extract_series",
    "extract_table_series",
    "merge_series_layers",
]
