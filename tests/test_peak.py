from prepmate.config import ExtractionSettings
from prepmate.history import detect_peak
from prepmate.history.peak import anomalous_peak, mentioned_peak
from prepmate.models import RatingPoint

from tests.conftest import CURRENT_YEAR


def _history():
    return [
        RatingPoint(year=2020, rating=1800),
        RatingPoint(year=2021, rating=1880),
        RatingPoint(year=2022, rating=1950),
        RatingPoint(year=2023, rating=1900),
    ]


def test_baseline_peak_is_first_maximum():
    history = _history() + [RatingPoint(year=2024, rating=1950)]
    peak = detect_peak(history, current_year=CURRENT_YEAR)
    assert (peak.peak_rating, peak.peak_year) == (1950, 2022)
    assert peak.peak_date == "2022"


def test_explicit_mention_without_year_keeps_baseline_year():
    peak = detect_peak(_history(), "<p>Highest rating: 2100</p>", current_year=CURRENT_YEAR)
    assert peak.peak_rating == 2100
    assert peak.peak_year == 2022


def test_lower_or_implausible_mentions_are_ignored():
    assert detect_peak(_history(), "Peak rating: 1700", current_year=CURRENT_YEAR).peak_rating == 1950
    assert detect_peak(_history(), "Top score 9999", current_year=CURRENT_YEAR).peak_rating == 1950
    assert mentioned_peak("Top 10 finishes, highest 2044") == 2044


def test_dated_anomaly_replaces_rating_and_year():
    text = "<table><tr><td>2008</td><td>2390</td></tr></table>"
    peak = detect_peak(_history(), text, current_year=CURRENT_YEAR)
    assert (peak.peak_rating, peak.peak_year) == (2390, 2008)


def test_anomaly_needs_margin_and_nearby_year():
    history = [RatingPoint(year=2024, rating=2200)]
    assert anomalous_peak("<td>2010</td><td>2215</td>", 2200, current_year=CURRENT_YEAR) is None
    assert anomalous_peak("no year in sight ............................... 2500", 2200) is None
    margin = ExtractionSettings(peak_anomaly_margin=10)
    peak = detect_peak(history, "<td>2010</td><td>2215</td>", settings=margin, current_year=CURRENT_YEAR)
    assert (peak.peak_rating, peak.peak_year) == (2215, 2010)


def test_year_axis_values_are_not_anomalies():
    text = "categories: ['2016','2017','2018','2019']"
    peak = detect_peak([RatingPoint(year=2019, rating=1500)], text, current_year=CURRENT_YEAR)
    assert (peak.peak_rating, peak.peak_year) == (1500, 2019)


def test_peak_never_below_history_maximum():
    history = _history()
    for text in ["", "Highest rating: 1200", "Peak 1951", "<td>2015</td><td>1960</td>"]:
        peak = detect_peak(history, text, current_year=CURRENT_YEAR)
        assert peak.peak_rating >= max(point.rating for point in history)


def test_empty_history_has_unknown_peak_date():
    peak = detect_peak([], "Highest rating: 2100")
    assert peak.peak_rating is None
    assert peak.peak_date == "Unknown"


def test_loose_peak_word_ignores_year_numbers():
    history = [RatingPoint(year=2025, rating=1700)]
    peak = detect_peak(history, "<a>Top players 2026</a>", current_year=CURRENT_YEAR)
    assert (peak.peak_rating, peak.peak_year) == (1700, 2025)
    assert mentioned_peak("Top players 2026 ... peak 2410", current_year=CURRENT_YEAR) == 2410
    assert mentioned_peak("Highest rating: 2024", current_year=CURRENT_YEAR) == 2024
