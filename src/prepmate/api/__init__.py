"""REST API for opponent rating profiles."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query
from fastapi.concurrency import run_in_threadpool

from prepmate.api.schemas import (
    OpponentRequest,
    OpponentResponse,
    RatingChangeRequest,
    RatingChangeResponse,
)
from prepmate.cache import RatingCache
from prepmate.config import ExtractionSettings, load_settings
from prepmate.fetch import HttpDocumentFetcher
from prepmate.profile import ProfileLookup, ProfileService
from prepmate.ratings import expected_score, rating_category, rating_change


logger = logging.getLogger("uvicorn.error")


def _build_service(settings: ExtractionSettings, cache: RatingCache[ProfileLookup]) -> ProfileService:
    return ProfileService(
        HttpDocumentFetcher(timeout=settings.request_timeout),
        settings=settings,
        cache=cache,
    )


def _to_response(lookup: ProfileLookup, *, debug: bool) -> OpponentResponse:
    return OpponentResponse(
        opponent=lookup.record,
        category=rating_category(lookup.record.current_rating),
        debug=lookup.debug_payload(debug),
    )


def create_app(
    *,
    service: ProfileService | None = None,
    cache: RatingCache[ProfileLookup] | None = None,
    settings: ExtractionSettings | None = None,
) -> FastAPI:
    settings = settings or (service.settings if service else load_settings())
    owns_fetcher = service is None
    if service is None:
        if cache is None:
            cache = RatingCache(settings.cache_ttl_seconds)
        service = _build_service(settings, cache)
    else:
        if cache is None:
            cache = service.cache if service.cache is not None else RatingCache(settings.cache_ttl_seconds)
        service.cache = cache

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_fetcher:
            service.fetcher.close()

    app = FastAPI(title="prepmate opponent analysis", lifespan=lifespan)
    app.state.rating_cache = cache
    app.state.profile_service = service

    async def lookup(identifier: str, debug: bool) -> OpponentResponse:
        identifier = identifier.strip()
        if not identifier:
            raise HTTPException(status_code=400, detail="Invalid ID provided")
        result = await run_in_threadpool(service.lookup, identifier)
        logger.info("Opponent %s resolved as %r", identifier, result.record.name)
        return _to_response(result, debug=debug)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/opponent", response_model=OpponentResponse)
    async def opponent(payload: OpponentRequest) -> OpponentResponse:
        return await lookup(payload.id, payload.debug)

    @app.get("/opponent/{identifier}", response_model=OpponentResponse)
    async def opponent_by_id(identifier: str, debug: bool = Query(False)) -> OpponentResponse:
        return await lookup(identifier, debug)

    @app.post("/rating-change", response_model=RatingChangeResponse)
    async def rating_change_endpoint(payload: RatingChangeRequest) -> RatingChangeResponse:
        return RatingChangeResponse(
            expected_score=expected_score(payload.current_rating, payload.opponent_rating),
            change=rating_change(
                payload.current_rating, payload.opponent_rating, payload.result, payload.k_factor
            ),
        )

    return app
