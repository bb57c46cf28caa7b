"""Configuration helpers for extraction thresholds and rating authorities."""

from .authorities import (
    RatingAuthority,
    get_authority,
    is_valid_player_id,
    iter_authorities,
    resolve_authority,
)
from .settings import DEFAULT_SETTINGS, MAX_HISTORY_YEARS, ExtractionSettings, load_settings

__all__ = [
    "DEFAULT_SETTINGS",
    "MAX_HISTORY_YEARS",
    "ExtractionSettings",
    "RatingAuthority",
    "get_authority",
    "is_valid_player_id",
    "iter_authorities",
    "load_settings",
    "resolve_authority",
]
