"""Contract tests for InMemoryCatService."""

from __future__ import annotations

import pytest

from cat_feed.adapters.in_memory_cat_service import InMemoryCatService
from cat_feed.domain.cat import Breed, Cat, Category, ImageOrder, ImageSearchQuery
from cat_feed.domain.errors import HttpError

BENGAL = Breed(id="beng", name="Bengal")
SIAMESE = Breed(id="siam", name="Siamese")
HATS = Category(id=1, name="hats")


@pytest.fixture()
def service() -> InMemoryCatService:
    cats = [
        Cat(id=f"c{i:02d}", image_url=f"https://cdn/c{i}.jpg", width=100, height=100,
            breeds=(BENGAL,) if i % 2 == 0 else (SIAMESE,),
            categories=(HATS,) if i < 4 else ())
        for i in range(10)
    ]
    return InMemoryCatService(cats=cats, breeds=[BENGAL, SIAMESE], categories=[HATS])


async def test_search_pages_after_filtering(service: InMemoryCatService) -> None:
    """page N of a filtered query is the N-th slice of the filtered list."""
    first = await service.search_images(ImageSearchQuery(limit=2, page=0, breed_ids="beng", order=ImageOrder.ASC))
    second = await service.search_images(ImageSearchQuery(limit=2, page=1, breed_ids="beng", order=ImageOrder.ASC))

    assert [c.id for c in first] == ["c00", "c02"]
    assert [c.id for c in second] == ["c04", "c06"]


async def test_search_combines_breed_and_category(service: InMemoryCatService) -> None:
    result = await service.search_images(ImageSearchQuery(limit=10, breed_ids="siam", category_ids="1"))

    assert [c.id for c in result] == ["c01", "c03"]


async def test_search_desc_order(service: InMemoryCatService) -> None:
    result = await service.search_images(ImageSearchQuery(limit=3, order=ImageOrder.DESC))

    assert [c.id for c in result] == ["c09", "c08", "c07"]


async def test_unset_limit_returns_one_image(service: InMemoryCatService) -> None:
    result = await service.search_images(ImageSearchQuery(limit=None, order=ImageOrder.ASC))

    assert [c.id for c in result] == ["c00"]


async def test_random_order_is_seeded() -> None:
    cats = [Cat(id=str(i), image_url="u", width=1, height=1) for i in range(20)]
    first = await InMemoryCatService(cats=cats, seed=7).search_images(ImageSearchQuery(limit=20, order=ImageOrder.RANDOM))
    second = await InMemoryCatService(cats=cats, seed=7).search_images(ImageSearchQuery(limit=20, order=ImageOrder.RANDOM))

    assert [c.id for c in first] == [c.id for c in second]
    assert sorted(c.id for c in first) == sorted(c.id for c in cats)


async def test_unknown_image_raises_404(service: InMemoryCatService) -> None:
    with pytest.raises(HttpError) as exc_info:
        await service.get_image("nope")

    assert exc_info.value.code == 404


async def test_search_breeds_is_case_insensitive(service: InMemoryCatService) -> None:
    assert await service.search_breeds("BEN") == [BENGAL]


async def test_calls_are_recorded(service: InMemoryCatService) -> None:
    await service.list_breeds(limit=1)
    await service.list_categories()

    assert [call.method for call in service.calls] == ["list_breeds", "list_categories"]
    assert service.calls_to("list_breeds")[0].kwargs == {"attach_breed": None, "page": None, "limit": 1}
