"""Retrieve raw profile documents from the rating authorities."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from prepmate.config import resolve_authority


logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"User-Agent": "prepmate/0.1 (+opponent preparation)"}


class DocumentUnavailable(RuntimeError):
    """Raised when no document can be obtained for an identifier."""


class DocumentFetcher(Protocol):
    def fetch(self, identifier: str) -> str:
        ...


class HttpDocumentFetcher:
    """Fetch profile pages over HTTP, routing identifiers by their shape."""

    def __init__(self, *, timeout: float = 5.0, client: httpx.Client | None = None):
        self._client = client or httpx.Client(timeout=timeout, headers=DEFAULT_HEADERS, follow_redirects=True)

    def fetch(self, identifier: str) -> str:
        resolved = resolve_authority(identifier)
        if resolved is None:
            raise DocumentUnavailable(f"identifier {identifier!r} does not match any rating authority")
        authority, player_id = resolved
        url = authority.url_for(player_id)
        try:
            resp = self._client.get(url)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Fetching %s profile %s failed: %s", authority.code, player_id, exc)
            raise DocumentUnavailable(f"{authority.code} profile {player_id} unavailable") from exc
        if not resp.text.strip():
            raise DocumentUnavailable(f"{authority.code} profile {player_id} is empty")
        return resp.text

    def close(self) -> None:
        self._client.close()
