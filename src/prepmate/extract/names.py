"""Display-name extraction from profile page titles and headings."""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional, Sequence, Tuple

from .patterns import heading_text, title_text


logger = logging.getLogger(__name__)

BOILERPLATE_PATTERN = re.compile(
    r"\b(?:fide|uscf|us\s+chess|chess\.com|profile|ratings?|member\s+details|player\s+card)\b",
    re.IGNORECASE,
)
DASH_PATTERN = re.compile(r"[-\u2010-\u2015\u2212\uFE58\uFE63\uFF0D]")
WHITESPACE_PATTERN = re.compile(r"\s+")


def _from_title(text: str) -> Optional[str]:
    title = title_text(text)
    if title is None:
        return None
    return title.split("-", 1)[0]


def _from_heading(text: str) -> Optional[str]:
    return heading_text(text)


NAME_STRATEGIES: Tuple[Tuple[str, Callable[[str], Optional[str]]], ...] = (
    ("title", _from_title),
    ("heading", _from_heading),
)


def clean_name(raw: str) -> Optional[str]:
    """Normalize a scraped name into ``First ... Last`` form.

    Site boilerplate and anything after the first dash are dropped, and
    ``"Last, First"`` ordering is flipped. Returns ``None`` when nothing is left.
    """

    text = raw
    boilerplate = BOILERPLATE_PATTERN.search(text)
    if boilerplate:
        text = text[: boilerplate.start()]
    dash = DASH_PATTERN.search(text)
    if dash:
        text = text[: dash.start()]
    if "," in text:
        parts = [part.strip() for part in text.split(",")]
        parts = [part for part in parts if part]
        if parts:
            text = " ".join(parts[1:] + parts[:1])
    cleaned = WHITESPACE_PATTERN.sub(" ", text).strip()
    return cleaned or None


def extract_name(
    text: str,
    *,
    strategies: Sequence[Tuple[str, Callable[[str], Optional[str]]]] = NAME_STRATEGIES,
) -> Optional[str]:
    for label, strategy in strategies:
        candidate = strategy(text)
        if candidate is None:
            continue
        name = clean_name(candidate)
        if name:
            logger.debug("Resolved name %r via %s", name, label)
            return name
    return None
