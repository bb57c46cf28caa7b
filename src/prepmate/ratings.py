"""Rating category labels and Elo expectations."""

from __future__ import annotations

from typing import Literal, Tuple

GameResult = Literal["win", "draw", "loss"]

RATING_CATEGORIES: Tuple[Tuple[int, str], ...] = (
    (1000, "Beginner"),
    (1400, "Amateur"),
    (1800, "Intermediate"),
    (2200, "Advanced"),
    (2400, "Expert"),
    (2600, "Master"),
)

_RESULT_SCORES = {"win": 1.0, "draw": 0.5, "loss": 0.0}


def rating_category(rating: int) -> str:
    for upper, label in RATING_CATEGORIES:
        if rating < upper:
            return label
    return "Grandmaster"


def expected_score(rating: int, opponent_rating: int) -> float:
    return 1.0 / (1.0 + 10 ** ((opponent_rating - rating) / 400))


def rating_change(rating: int, opponent_rating: int, result: GameResult, k_factor: int = 32) -> int:
    """Elo points gained (or lost) from one game against ``opponent_rating``."""

    if result not in _RESULT_SCORES:
        raise ValueError(f"result must be one of {sorted(_RESULT_SCORES)}, got {result!r}")
    return round(k_factor * (_RESULT_SCORES[result] - expected_score(rating, opponent_rating)))
