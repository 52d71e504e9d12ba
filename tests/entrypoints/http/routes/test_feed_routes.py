"""
Test suite for the /v1/feed routes.

Routes run against a real FeedController over an in-memory cat service,
injected with dependency_overrides. The client is used as a context
manager so every request shares one event loop.
"""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from cat_feed.adapters.in_memory_cat_service import InMemoryCatService
from cat_feed.adapters.in_memory_favorites_store import InMemoryFavoritesStore
from cat_feed.domain.cat import Breed, Cat, Category
from cat_feed.domain.errors import HttpError
from cat_feed.entrypoints.http.app import build_feed_controller
from cat_feed.entrypoints.http.dependencies import get_feed_controller
from cat_feed.entrypoints.http.exception_handlers import register_exception_handlers
from cat_feed.entrypoints.http.routes.feed import router
from cat_feed.presentation.feed_controller import FeedController

BENGAL = Breed(id="beng", name="Bengal", temperament="Alert")
HATS = Category(id=1, name="hats")


class FlakyCatService(InMemoryCatService):
    fail_with: Exception | None = None

    async def search_images(self, query):  # type: ignore[no-untyped-def]
        if self.fail_with is not None:
            raise self.fail_with
        return await super().search_images(query)


@pytest.fixture
def service() -> FlakyCatService:
    cats = [
        Cat(id=f"g{i:02d}", image_url=f"https://cdn/g{i:02d}.jpg", width=640, height=480, categories=(HATS,))
        for i in range(12)
    ] + [
        Cat(id=f"beng{i}", image_url=f"https://cdn/beng{i}.jpg", width=640, height=480, breeds=(BENGAL,))
        for i in range(6)
    ]
    return FlakyCatService(cats=cats, breeds=[BENGAL], categories=[HATS])


@pytest.fixture
def favorites() -> InMemoryFavoritesStore:
    return InMemoryFavoritesStore()


@pytest.fixture
def controller(service: FlakyCatService, favorites: InMemoryFavoritesStore) -> FeedController:
    return build_feed_controller(service, favorites, page_size=10, search_debounce=0)


@pytest.fixture
def app(controller: FeedController) -> FastAPI:
    """Create a test FastAPI app with the feed router and exception handlers."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    test_app.dependency_overrides[get_feed_controller] = lambda: controller
    return test_app


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


def post_event(client: TestClient, **body: object) -> dict:
    response = client.post("/v1/feed/events", json=body)
    assert response.status_code == 200, response.text
    return response.json()


# ==============================================================================
# GET /v1/feed
# ==============================================================================


def test_get_feed_returns_initial_snapshot(client: TestClient) -> None:
    response = client.get("/v1/feed")

    assert response.status_code == 200
    data = response.json()
    assert data["phase"] == "idle"
    assert data["items"] == []
    assert data["has_more_data"] is True
    assert data["filters"]["image_size"] == "med"
    assert data["filters"]["summary"] == "Size: Medium"
    assert data["favorite_ids"] == []


# ==============================================================================
# POST /v1/feed/events
# ==============================================================================


def test_load_random_cats_returns_loaded_state(client: TestClient) -> None:
    """The response reflects the state after the fetch settled."""
    data = post_event(client, type="load_random_cats")

    assert data["phase"] == "ready"
    assert len(data["items"]) == 10
    assert data["current_page"] == 1
    assert data["items"][0]["url"].startswith("https://cdn/")
    assert data["last_refresh_time"] is not None


def test_load_more_appends(client: TestClient) -> None:
    post_event(client, type="load_random_cats")

    data = post_event(client, type="load_more_cats")

    assert len(data["items"]) == 18
    assert data["has_more_data"] is False


def test_select_breed_resolves_loaded_breed(client: TestClient) -> None:
    post_event(client, type="load_breeds")

    data = post_event(client, type="select_breed", breed_id="beng")

    assert data["filters"]["selected_breed"]["id"] == "beng"
    assert data["filters"]["is_active"] is True
    assert [item["id"] for item in data["items"]] == [f"beng{i}" for i in range(6)]


def test_select_breed_null_clears_filter(client: TestClient) -> None:
    post_event(client, type="load_breeds")
    post_event(client, type="select_breed", breed_id="beng")

    data = post_event(client, type="select_breed", breed_id=None)

    assert data["filters"]["selected_breed"] is None


def test_select_unknown_breed_returns_404(client: TestClient) -> None:
    response = client.post("/v1/feed/events", json={"type": "select_breed", "breed_id": "nope"})

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_select_category(client: TestClient) -> None:
    post_event(client, type="load_categories")

    data = post_event(client, type="select_category", category_id=1)

    assert data["filters"]["selected_category"] == {"id": 1, "name": "hats"}
    assert len(data["items"]) == 10


def test_search_breeds(client: TestClient) -> None:
    data = post_event(client, type="search_breeds", query="ben")

    assert data["search_query"] == "ben"
    assert data["is_searching"] is False
    assert [b["id"] for b in data["breeds"]] == ["beng"]


def test_change_image_size(client: TestClient) -> None:
    data = post_event(client, type="change_image_size", size="full")

    assert data["filters"]["image_size"] == "full"
    # Every fixture image is below the large-size minimum
    assert data["items"] == []


def test_toggle_favorite_writes_store(client: TestClient, favorites: InMemoryFavoritesStore) -> None:
    post_event(client, type="toggle_favorite", cat_id="g01")

    assert favorites.current() == frozenset({"g01"})


def test_upstream_failure_is_reported_in_state(client: TestClient, service: FlakyCatService) -> None:
    """Feed fetch failures are part of the state, not HTTP errors."""
    service.fail_with = HttpError(503, "Service Unavailable")

    data = post_event(client, type="refresh")

    assert data["phase"] == "failed"
    assert data["error_message"] == "Server error. Please try again later."

    data = post_event(client, type="clear_error")
    assert data["error_message"] is None


def test_unknown_event_type_returns_422(client: TestClient) -> None:
    response = client.post("/v1/feed/events", json={"type": "fly_to_moon"})

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_invalid_event_field_returns_422(client: TestClient) -> None:
    response = client.post("/v1/feed/events", json={"type": "change_image_size", "size": "huge"})

    assert response.status_code == 422


def test_feed_reflects_last_event(client: TestClient) -> None:
    post_event(client, type="load_random_cats")

    data = client.get("/v1/feed").json()

    assert data["phase"] == "ready"
    assert data["total_cats_loaded"] == 10
