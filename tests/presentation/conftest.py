from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import AsyncIterator

import pytest

from cat_feed.adapters.in_memory_cat_service import InMemoryCatService
from cat_feed.adapters.in_memory_favorites_store import InMemoryFavoritesStore
from cat_feed.domain.cat import Breed, Cat, Category, ImageSearchQuery
from cat_feed.presentation.feed_controller import FeedController
from cat_feed.use_cases.get_breeds import GetBreeds
from cat_feed.use_cases.get_categories import GetCategories
from cat_feed.use_cases.get_random_cats import GetRandomCats
from cat_feed.use_cases.search_breeds import SearchBreeds

FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

ABYSSINIAN = Breed(id="abys", name="Abyssinian", origin="Egypt")
BENGAL = Breed(id="beng", name="Bengal", description="Spotted and sleek", temperament="Alert")
SIAMESE = Breed(id="siam", name="Siamese")
HATS = Category(id=1, name="hats")
BOXES = Category(id=5, name="boxes")


class GatedCatService(InMemoryCatService):
    """
    InMemoryCatService whose calls can be held open or made to fail.

    - ``gate`` blocks search_images while cleared
    - ``breeds_gate`` blocks list_breeds while cleared
    - ``slow_queries`` block search_breeds until ``release`` is set
    - ``*_error`` make the matching call raise
    """

    def __init__(self, *args: object, **kwargs: object) -> None:
        super().__init__(*args, **kwargs)  # type: ignore[arg-type]
        self.gate = asyncio.Event()
        self.gate.set()
        self.slow_queries: set[str] = set()
        self.release = asyncio.Event()
        self.search_error: Exception | None = None
        self.breeds_error: Exception | None = None
        self.categories_error: Exception | None = None
        self.breeds_gate = asyncio.Event()
        self.breeds_gate.set()

    async def search_images(self, query: ImageSearchQuery) -> list[Cat]:
        await self.gate.wait()
        if self.search_error is not None:
            raise self.search_error
        return await super().search_images(query)

    async def list_breeds(self, attach_breed=None, page=None, limit=None) -> list[Breed]:  # type: ignore[no-untyped-def]
        await self.breeds_gate.wait()
        if self.breeds_error is not None:
            raise self.breeds_error
        return await super().list_breeds(attach_breed=attach_breed, page=page, limit=limit)

    async def list_categories(self, limit=None, page=None) -> list[Category]:  # type: ignore[no-untyped-def]
        if self.categories_error is not None:
            raise self.categories_error
        return await super().list_categories(limit=limit, page=page)

    async def search_breeds(self, query: str) -> list[Breed]:
        if query in self.slow_queries:
            await self.release.wait()
        return await super().search_breeds(query)


def _cats() -> list[Cat]:
    generic = [
        Cat(
            id=f"g{i:02d}",
            image_url=f"https://cdn.example.test/g{i:02d}.jpg",
            width=1200,
            height=900,
            categories=(HATS,) if i < 12 else (),
        )
        for i in range(25)
    ]
    bengals = [
        Cat(id=f"beng{i}", image_url=f"https://cdn.example.test/beng{i}.jpg", width=800, height=600, breeds=(BENGAL,))
        for i in range(5)
    ]
    siamese = [
        Cat(id=f"siam{i}", image_url=f"https://cdn.example.test/siam{i}.jpg", width=640, height=480, breeds=(SIAMESE,))
        for i in range(4)
    ]
    return bengals + generic + siamese


@pytest.fixture()
def service() -> GatedCatService:
    """34 cats: 5 Bengal, 4 Siamese, 25 without breed (12 of them in "hats")."""
    return GatedCatService(
        cats=_cats(),
        breeds=[SIAMESE, BENGAL, ABYSSINIAN],
        categories=[HATS, BOXES],
    )


@pytest.fixture()
def favorites() -> InMemoryFavoritesStore:
    return InMemoryFavoritesStore()


@pytest.fixture()
async def controller(
    service: GatedCatService, favorites: InMemoryFavoritesStore
) -> AsyncIterator[FeedController]:
    controller = FeedController(
        get_random_cats=GetRandomCats(service),
        get_breeds=GetBreeds(service),
        search_breeds=SearchBreeds(service),
        get_categories=GetCategories(service),
        favorites_store=favorites,
        page_size=10,
        search_debounce=0.01,
        clock=lambda: FIXED_NOW,
    )
    yield controller
    await controller.close()
