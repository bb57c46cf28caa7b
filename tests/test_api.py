import random

import pytest
from httpx import ASGITransport, AsyncClient

import prepmate.api as api_module
from prepmate.api import create_app
from prepmate.cache import RatingCache
from prepmate.config import ExtractionSettings
from prepmate.profile import ProfileService

from tests.conftest import CARLSEN_PROFILE, CURRENT_YEAR, StaticFetcher


@pytest.fixture
def fetcher() -> StaticFetcher:
    return StaticFetcher({"fide_1503014": CARLSEN_PROFILE})


@pytest.fixture
async def client(fetcher: StaticFetcher):
    service = ProfileService(
        fetcher,
        settings=ExtractionSettings(history_years=4),
        cache=RatingCache(ttl_seconds=60),
        rng=random.Random(11),
        current_year=CURRENT_YEAR,
    )
    app = create_app(service=service)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client


@pytest.mark.anyio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


@pytest.mark.anyio
async def test_opponent_lookup(client: AsyncClient):
    resp = await client.post("/opponent", json={"id": "fide_1503014"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["category"] == "Grandmaster"
    assert body["debug"] is None
    opponent = body["opponent"]
    assert opponent["name"] == "Magnus Carlsen"
    assert opponent["currentRating"] == 2837
    assert opponent["peakRating"] == 2882
    assert opponent["trend"] == "stable"
    assert [point["year"] for point in opponent["ratingHistory"]] == [2023, 2024, 2025, 2026]


@pytest.mark.anyio
async def test_opponent_debug_prefix(client: AsyncClient):
    resp = await client.get("/opponent/fide_1503014", params={"debug": "true"})
    assert resp.status_code == 200
    assert resp.json()["debug"] == CARLSEN_PROFILE[:2000]


@pytest.mark.anyio
async def test_unknown_opponent_is_synthetic_and_cached(client: AsyncClient, fetcher: StaticFetcher):
    first = await client.post("/opponent", json={"id": "7654321"})
    second = await client.post("/opponent", json={"id": "7654321"})
    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()
    opponent = first.json()["opponent"]
    assert opponent["name"] == "Player 765432"
    assert len(opponent["ratingHistory"]) == 4
    assert 1000 <= opponent["currentRating"] <= 3000
    assert opponent["trend"] in {"improving", "declining", "stable"}
    assert fetcher.calls.count("7654321") == 1


@pytest.mark.anyio
async def test_blank_identifier_rejected(client: AsyncClient):
    resp = await client.post("/opponent", json={"id": "   "})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid ID provided"

    resp = await client.post("/opponent", json={})
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_rating_change(client: AsyncClient):
    resp = await client.post(
        "/rating-change",
        json={"current_rating": 1800, "opponent_rating": 1800, "result": "win"},
    )
    assert resp.status_code == 200
    assert resp.json() == {"expected_score": 0.5, "change": 16}

    resp = await client.post(
        "/rating-change",
        json={"current_rating": 1800, "opponent_rating": 1800, "result": "forfeit"},
    )
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_injected_cache_is_shared_with_service(fetcher: StaticFetcher):
    cache = RatingCache(ttl_seconds=60)
    service = ProfileService(fetcher, settings=ExtractionSettings(history_years=4), current_year=CURRENT_YEAR)
    app = create_app(service=service, cache=cache)

    assert app.state.rating_cache is cache
    assert app.state.profile_service.cache is cache

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        resp = await async_client.get("/opponent/fide_1503014")
    assert resp.status_code == 200
    assert cache.get("fide_1503014").record.name == "Magnus Carlsen"


@pytest.mark.anyio
async def test_default_fetcher_closed_on_shutdown(monkeypatch):
    closed = []

    class ClosingFetcher(StaticFetcher):
        def close(self) -> None:
            closed.append(True)

    monkeypatch.setattr(api_module, "HttpDocumentFetcher", lambda timeout: ClosingFetcher())
    app = api_module.create_app(settings=ExtractionSettings())
    assert isinstance(app.state.rating_cache, RatingCache)

    async with app.router.lifespan_context(app):
        assert closed == []
    assert closed == [True]
