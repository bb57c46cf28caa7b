"""Stateless pattern matchers over raw profile text.

Documents are never parsed into a tree. Every helper here runs an independent
regular expression over the opaque text blob and returns plain values, so the
extractors built on top can be combined in any order.
"""

from __future__ import annotations

import html
import re
from datetime import date
from typing import Iterator, List, NamedTuple, Optional


TITLE_PATTERN = re.compile(r"<title[^>]*>([\s\S]*?)</title>", re.IGNORECASE)
HEADING_PATTERN = re.compile(r"<h([1-6])[^>]*>([\s\S]*?)</h\1>", re.IGNORECASE)
TAG_PATTERN = re.compile(r"<[^>]+>")
ROW_PATTERN = re.compile(r"<tr[^>]*>([\s\S]*?)</tr>", re.IGNORECASE)
NUMBER_PATTERN = re.compile(r"(?<!\d)(\d{3,4})(?!\d)")
YEAR_PATTERN = re.compile(r"(?<!\d)(20\d{2})(?!\d)")

CATEGORIES_PATTERN = re.compile(r"categories\s*:\s*\[([^\]]+)\]", re.IGNORECASE)
QUOTED_YEAR_PATTERN = re.compile(r"(['\"]?)(20\d{2})\1")
YEAR_ARRAY_PATTERN = re.compile(r"\[\s*([\"']?20\d{2}[\"']?(?:\s*,\s*[\"']?20\d{2}[\"']?)*)\s*\]")
SERIES_START_PATTERN = re.compile(r"series\s*:\s*\[", re.IGNORECASE)
SCRIPT_END_PATTERN = re.compile(r"</script>", re.IGNORECASE)
OBJECT_PATTERN = re.compile(r"\{([^{}]*)\}")
SERIES_NAME_PATTERN = re.compile(r"name\s*:\s*['\"]([^'\"]*)['\"]", re.IGNORECASE)
SERIES_DATA_PATTERN = re.compile(r"data\s*:\s*\[([^\]]*)\]", re.IGNORECASE)
PREFERRED_SERIES_PATTERN = re.compile(r"standard|classical", re.IGNORECASE)

STANDARD_LABEL = r"(?:STANDARD|STANDART)"
STANDARD_TOKEN_PATTERN = re.compile(STANDARD_LABEL, re.IGNORECASE)
STANDARD_WORD_PATTERN = re.compile(r"standard", re.IGNORECASE)
MARKUP_STANDARD_PATTERN = re.compile(
    r"<[^<>]{0,80}>\s*(\d{3,4})\s*</[^<>]{1,20}>\s*(?:<[^<>]{0,80}>\s*){0,3}" + STANDARD_LABEL,
    re.IGNORECASE,
)
LABELED_RATING_PATTERNS = (
    re.compile(r"Standard[^\d<]{0,40}(\d{3,4})(?!\d)", re.IGNORECASE),
    re.compile(r"(?<!\d)(\d{3,4})[^\d<]{0,40}Standard", re.IGNORECASE),
    re.compile(r"Standard\s+Rating\s*:\s*(\d{3,4})(?!\d)", re.IGNORECASE),
    re.compile(r"FIDE\s+rating\s*:\s*(\d{3,4})(?!\d)", re.IGNORECASE),
    re.compile(r"[\"']standardRating[\"']\s*:\s*[\"']?(\d{3,4})(?!\d)", re.IGNORECASE),
)
PEAK_MENTION_PATTERNS = (
    re.compile(r"Highest\s+rating\s*:\s*(\d{3,4})(?!\d)", re.IGNORECASE),
    re.compile(r"Peak\s+rating\s*:\s*(\d{3,4})(?!\d)", re.IGNORECASE),
)
PEAK_WORD_PATTERN = re.compile(r"\b(?:Peak|Highest|Top)\b[^\d<]{0,40}(\d{3,4})(?!\d)", re.IGNORECASE)


class NumberToken(NamedTuple):
    value: int
    start: int
    end: int


class SeriesCandidate(NamedTuple):
    name: str
    values: List[Optional[int]]

    @property
    def mean(self) -> float:
        present = [value for value in self.values if value is not None]
        return sum(present) / len(present) if present else 0.0


def resolve_year(current_year: int | None) -> int:
    return current_year if current_year is not None else date.today().year


def text_content(fragment: str) -> str:
    """Drop markup from ``fragment`` and decode entities."""

    return html.unescape(TAG_PATTERN.sub(" ", fragment))


def title_text(text: str) -> Optional[str]:
    match = TITLE_PATTERN.search(text)
    return text_content(match.group(1)) if match else None


def heading_text(text: str) -> Optional[str]:
    match = HEADING_PATTERN.search(text)
    return text_content(match.group(2)) if match else None


def iter_numbers(text: str, start: int = 0, end: int | None = None) -> Iterator[NumberToken]:
    """Yield every standalone 3-4 digit number, in document order."""

    end = len(text) if end is None else end
    for match in NUMBER_PATTERN.finditer(text, start, end):
        yield NumberToken(int(match.group(1)), match.start(1), match.end(1))


def iter_years(text: str, *, current_year: int, start: int = 0, end: int | None = None) -> Iterator[NumberToken]:
    """Yield 4-digit year tokens between 2000 and ``current_year``."""

    end = len(text) if end is None else end
    for match in YEAR_PATTERN.finditer(text, start, end):
        year = int(match.group(1))
        if 2000 <= year <= current_year:
            yield NumberToken(year, match.start(1), match.end(1))


def iter_rows(text: str) -> Iterator[str]:
    for match in ROW_PATTERN.finditer(text):
        yield match.group(1)


def chart_years(text: str) -> Optional[List[int]]:
    """Year axis of an embedded chart, from ``categories`` or a bare year array."""

    match = CATEGORIES_PATTERN.search(text)
    if match:
        years = [int(found.group(2)) for found in QUOTED_YEAR_PATTERN.finditer(match.group(1))]
        if years:
            return years
    match = YEAR_ARRAY_PATTERN.search(text)
    if match:
        return [int(found) for found in re.findall(r"20\d{2}", match.group(1))]
    return None


def _parse_series_values(raw: str) -> List[Optional[int]]:
    values: List[Optional[int]] = []
    for item in raw.split(","):
        token = item.strip().strip("'\"")
        if not token:
            continue
        try:
            values.append(int(round(float(token))))
        except (ValueError, OverflowError):
            # "NaN", "Infinity" and overflowing literals are not ratings.
            values.append(None)
    return values


def chart_series(text: str) -> List[SeriesCandidate]:
    """Named data series declared after ``series: [`` in the same script block."""

    start = SERIES_START_PATTERN.search(text)
    if not start:
        return []
    stop = SCRIPT_END_PATTERN.search(text, start.end())
    block = text[start.end(): stop.start() if stop else len(text)]
    candidates: List[SeriesCandidate] = []
    for obj in OBJECT_PATTERN.finditer(block):
        body = obj.group(1)
        data = SERIES_DATA_PATTERN.search(body)
        if not data:
            continue
        name = SERIES_NAME_PATTERN.search(body)
        candidates.append(SeriesCandidate(name.group(1) if name else "", _parse_series_values(data.group(1))))
    return candidates
