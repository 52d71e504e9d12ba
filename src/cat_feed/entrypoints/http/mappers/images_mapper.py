from __future__ import annotations

from cat_feed.domain.cat import Breed, Cat, Category, ImageSize
from cat_feed.entrypoints.http.dtos.images import (
    BreedImagesQueryDTO,
    BreedResponseDTO,
    CatImageListResponseDTO,
    CatImageResponseDTO,
    CategoryResponseDTO,
    WeightResponseDTO,
)
from cat_feed.use_cases.get_images_by_breed import GetImagesByBreedRequest


class CatImageMapper:
    """Maps between REST DTOs and domain models for cat images."""

    @staticmethod
    def to_breed_response(breed: Breed) -> BreedResponseDTO:
        return BreedResponseDTO(
            id=breed.id,
            name=breed.name,
            temperament=breed.temperament,
            origin=breed.origin,
            description=breed.description,
            life_span=breed.life_span,
            affection_level=breed.affection_level,
            energy_level=breed.energy_level,
            intelligence=breed.intelligence,
            wikipedia_url=breed.wikipedia_url,
            reference_image_id=breed.reference_image_id,
            weight=(
                WeightResponseDTO(imperial=breed.weight.imperial, metric=breed.weight.metric)
                if breed.weight
                else None
            ),
        )

    @staticmethod
    def to_category_response(category: Category) -> CategoryResponseDTO:
        return CategoryResponseDTO(id=category.id, name=category.name)

    @staticmethod
    def to_response(cat: Cat) -> CatImageResponseDTO:
        """
        Converts a domain Cat to its response DTO.

        Args:
            cat: Domain cat image

        Returns:
            CatImageResponseDTO: image_url is exposed as ``url``, like upstream
        """
        return CatImageResponseDTO(
            id=cat.id,
            url=cat.image_url,
            width=cat.width,
            height=cat.height,
            breeds=[CatImageMapper.to_breed_response(b) for b in cat.breeds],
            categories=[CatImageMapper.to_category_response(c) for c in cat.categories],
            sub_id=cat.sub_id,
            created_at=cat.created_at,
            original_filename=cat.original_filename,
        )

    @staticmethod
    def to_list_response(cats: list[Cat]) -> CatImageListResponseDTO:
        return CatImageListResponseDTO(
            images=[CatImageMapper.to_response(cat) for cat in cats],
            count=len(cats),
        )

    @staticmethod
    def to_breed_images_request(breed_id: str, dto: BreedImagesQueryDTO) -> GetImagesByBreedRequest:
        return GetImagesByBreedRequest(
            breed_id=breed_id,
            limit=dto.limit,
            page=dto.page,
            size=ImageSize.from_api_value(dto.size) if dto.size else None,
            order=dto.order,
            include_breeds=dto.include_breeds,
            min_width=dto.min_width,
            min_height=dto.min_height,
            prioritize_quality=dto.prioritize_quality,
        )
