"""Tests for the search and asset endpoints with fake stores."""

import logging

import pytest
from fastapi.testclient import TestClient

from content_engine.api.search import get_asset_store, get_search_service
from content_engine.core.pinning import PinningResolver
from content_engine.core.search import AssetSearchService
from content_engine.main import app
from tests.fakes.fake_stores import FakeAssetStore, FakeEmbeddings, FakeVectorStore
from tests.fixtures_assets import ALL_ASSETS, CROWDSTRIKE, KEYNOTE, PINNING_RULES, make_result


@pytest.fixture
def client():
    asset_store = FakeAssetStore(assets=ALL_ASSETS, rules=PINNING_RULES)
    service = AssetSearchService(
        embeddings=FakeEmbeddings(),
        vector_store=FakeVectorStore([make_result(CROWDSTRIKE, 0.5), make_result(KEYNOTE, 0.45)]),
        pinning=PinningResolver(asset_store),
    )
    app.dependency_overrides[get_search_service] = lambda: service
    app.dependency_overrides[get_asset_store] = lambda: asset_store
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health_check(client):
    """Test that /health returns 200 with status ok."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_search_returns_pinned_and_searched(client):
    response = client.post("/v1/search", json={"query": "  CrowdStrike case study ", "limit": 4})

    assert response.status_code == 200
    data = response.json()
    assert [asset["id"] for asset in data["pinned"]] == [CROWDSTRIKE.id]
    assert [r["asset"]["id"] for r in data["searched"]] == [KEYNOTE.id]
    assert data["searched"][0]["similarity"] == pytest.approx(0.50)
    assert data["detected_capability"] is None


def test_search_logs_assets_in_render_order(client, caplog):
    with caplog.at_level(logging.INFO, logger="content_engine.api.search"):
        client.post("/v1/search", json={"query": "CrowdStrike case study", "limit": 4})

    record = next(r for r in caplog.records if r.getMessage().startswith("Search served"))
    assert record.extra_data["asset_ids"] == [CROWDSTRIKE.id, KEYNOTE.id]


def test_search_with_explicit_capability(client):
    response = client.post(
        "/v1/search", json={"query": "anything", "capability": "keynote-events"}
    )
    assert response.status_code == 200
    assert response.json()["detected_capability"] == "keynote-events"


def test_search_empty_result_is_ok(client):
    response = client.post("/v1/search", json={"query": "hello", "asset_types": ["diagram"]})
    assert response.status_code == 200
    assert response.json() == {"pinned": [], "searched": [], "detected_capability": None}


@pytest.mark.parametrize(
    "body",
    [
        {"query": ""},
        {"query": "   "},
        {"query": "ok", "capability": "basket-weaving"},
        {"query": "ok", "asset_types": ["podcast"]},
        {"query": "ok", "limit": 0},
    ],
)
def test_search_rejects_invalid_requests(client, body):
    assert client.post("/v1/search", json=body).status_code == 422


def test_get_asset(client):
    response = client.get(f"/v1/assets/{KEYNOTE.id}")
    assert response.status_code == 200
    assert response.json()["asset"]["title"] == KEYNOTE.title


def test_get_asset_not_found(client):
    response = client.get("/v1/assets/does-not-exist")
    assert response.status_code == 404
    assert response.json()["detail"] == "Asset not found"
