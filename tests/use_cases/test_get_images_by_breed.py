"""Test suite for GetImagesByBreed use case."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from cat_feed.adapters.cat_api_mapper import CatApiMapper
from cat_feed.domain.cat import Breed, Cat, Category, ImageSearchQuery
from cat_feed.domain.errors import ValidationError
from cat_feed.ports.cat_service import CatService
from cat_feed.use_cases.get_images_by_breed import GetImagesByBreed, GetImagesByBreedRequest


@pytest.fixture()
def mock_service() -> Mock:
    service = Mock(spec=CatService)
    service.search_images.return_value = []
    return service


# ==============================================================================
# Validation
# ==============================================================================


@pytest.mark.parametrize("breed_id", ["", "   "])
async def test_blank_breed_id_raises_without_call(mock_service: Mock, breed_id: str) -> None:
    """A blank breed id is rejected before any network call."""
    with pytest.raises(ValidationError) as exc_info:
        await GetImagesByBreed(mock_service).execute(GetImagesByBreedRequest(breed_id=breed_id))

    assert exc_info.value.errors is not None
    assert exc_info.value.errors[0]["code"] == "BLANK_BREED_ID"
    mock_service.search_images.assert_not_called()


# ==============================================================================
# Query building
# ==============================================================================


async def test_builds_breed_query(mock_service: Mock) -> None:
    """breed id is trimmed and paging is clamped."""
    await GetImagesByBreed(mock_service).execute(
        GetImagesByBreedRequest(breed_id=" beng ", limit=250, page=-2, include_breeds=True)
    )

    query: ImageSearchQuery = mock_service.search_images.await_args.args[0]
    assert query.breed_ids == "beng"
    assert query.limit == 100
    assert query.page == 0
    assert query.include_breeds is True


async def test_unset_limit_uses_remote_default(mock_service: Mock) -> None:
    """No limit from the caller means no limit on the wire."""
    await GetImagesByBreed(mock_service).execute(GetImagesByBreedRequest(breed_id="beng"))

    query = mock_service.search_images.await_args.args[0]
    assert query.limit is None
    assert "limit" not in CatApiMapper.to_search_params(query)


# ==============================================================================
# Post-processing
# ==============================================================================


async def test_include_breeds_drops_cats_without_breeds(mock_service: Mock) -> None:
    breed = Breed(id="beng", name="Bengal")
    mock_service.search_images.return_value = [
        Cat(id="a", image_url="https://cdn/a.jpg", width=1, height=1, breeds=(breed,)),
        Cat(id="b", image_url="https://cdn/b.jpg", width=1, height=1),
        Cat(id="c", image_url="", width=1, height=1, breeds=(breed,)),
    ]

    result = await GetImagesByBreed(mock_service).execute(
        GetImagesByBreedRequest(breed_id="beng", include_breeds=True)
    )

    assert [cat.id for cat in result] == ["a"]


async def test_min_dimensions_filter(mock_service: Mock) -> None:
    mock_service.search_images.return_value = [
        Cat(id="small", image_url="https://cdn/s.jpg", width=300, height=200),
        Cat(id="big", image_url="https://cdn/b.jpg", width=1600, height=1200),
    ]

    result = await GetImagesByBreed(mock_service).execute(
        GetImagesByBreedRequest(breed_id="beng", min_width=800, min_height=600)
    )

    assert [cat.id for cat in result] == ["big"]


async def test_prioritize_quality_orders_by_score_then_area(mock_service: Mock) -> None:
    """Richer metadata first; equal scores fall back to larger images first."""
    described = Breed(id="beng", name="Bengal", description="Spotted", temperament="Alert")
    bare = Breed(id="beng", name="Bengal")
    mock_service.search_images.return_value = [
        Cat(id="nothing", image_url="https://cdn/1.jpg", width=2000, height=2000),
        Cat(id="bare-small", image_url="https://cdn/2.jpg", width=100, height=100, breeds=(bare,)),
        Cat(id="bare-large", image_url="https://cdn/3.jpg", width=900, height=900, breeds=(bare,)),
        Cat(
            id="rich",
            image_url="https://cdn/4.jpg",
            width=50,
            height=50,
            breeds=(described,),
            categories=(Category(id=1, name="hats"),),
        ),
    ]

    result = await GetImagesByBreed(mock_service).execute(
        GetImagesByBreedRequest(breed_id="beng", prioritize_quality=True)
    )

    assert [cat.id for cat in result] == ["rich", "bare-large", "bare-small", "nothing"]


async def test_without_prioritize_quality_keeps_remote_order(mock_service: Mock) -> None:
    mock_service.search_images.return_value = [
        Cat(id="b", image_url="https://cdn/b.jpg", width=1, height=1),
        Cat(id="a", image_url="https://cdn/a.jpg", width=9, height=9),
    ]

    result = await GetImagesByBreed(mock_service).execute(GetImagesByBreedRequest(breed_id="beng"))

    assert [cat.id for cat in result] == ["b", "a"]
