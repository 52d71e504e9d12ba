from __future__ import annotations

from cat_feed.adapters.cat_api_dtos import BreedDTO, CategoryDTO, CatImageDTO, WeightDTO
from cat_feed.domain.cat import Breed, Cat, Category, ImageSearchQuery, Weight


class CatApiMapper:
    """Maps between Cat API wire models and domain models."""

    @staticmethod
    def to_weight(dto: WeightDTO) -> Weight:
        return Weight(imperial=dto.imperial, metric=dto.metric)

    @staticmethod
    def to_category(dto: CategoryDTO) -> Category:
        return Category(id=dto.id, name=dto.name)

    @staticmethod
    def to_breed(dto: BreedDTO) -> Breed:
        """
        Converts a breed wire model to the domain Breed.

        Field names already match (snake_case on both sides), so every
        attribute except the nested weight is copied as-is.
        """
        fields = dto.model_dump(exclude={"weight"})
        weight = CatApiMapper.to_weight(dto.weight) if dto.weight else None
        return Breed(**fields, weight=weight)

    @staticmethod
    def to_cat(dto: CatImageDTO) -> Cat:
        """
        Converts an image wire model to the domain Cat.

        The remote ``url`` becomes ``image_url``; nested lists become tuples.
        """
        return Cat(
            id=dto.id,
            image_url=dto.url,
            width=dto.width,
            height=dto.height,
            breeds=tuple(CatApiMapper.to_breed(breed) for breed in dto.breeds),
            categories=tuple(CatApiMapper.to_category(category) for category in dto.categories),
            sub_id=dto.sub_id,
            created_at=dto.created_at,
            original_filename=dto.original_filename,
            breed_ids=dto.breed_ids,
            pending=dto.pending,
            approved=dto.approved,
        )

    @staticmethod
    def to_search_params(query: ImageSearchQuery) -> dict[str, str | int | bool]:
        """
        Converts a search query to ``images/search`` query params.

        ``None`` values are dropped so the remote default applies.
        """
        params: dict[str, str | int | bool | None] = {
            "limit": query.limit,
            "size": query.size.api_value if query.size else None,
            "mime_types": ",".join(query.mime_types) if query.mime_types else None,
            "order": query.order.value if query.order else None,
            "page": query.page,
            "category_ids": query.category_ids,
            "breed_ids": query.breed_ids,
            "include_breeds": query.include_breeds,
            "include_categories": query.include_categories,
        }
        return {key: value for key, value in params.items() if value is not None}
