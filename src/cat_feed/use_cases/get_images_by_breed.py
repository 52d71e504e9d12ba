"""Get images by breed use case."""

from __future__ import annotations

from dataclasses import dataclass, replace

from cat_feed.domain.cat import Cat, ImageOrder, ImageSearchQuery, ImageSize
from cat_feed.domain.errors import ValidationError
from cat_feed.ports.cat_service import CatService
from cat_feed.use_cases.query_rules import (
    clamp_limit,
    clamp_page,
    is_blank,
    meets_min_dimensions,
    quality_score,
)


@dataclass(frozen=True, slots=True)
class GetImagesByBreedRequest:
    breed_id: str
    limit: int | None = None
    page: int | None = None
    size: ImageSize | None = None
    mime_types: tuple[str, ...] | None = None
    order: ImageOrder | None = None
    include_breeds: bool | None = None
    include_categories: bool | None = None
    min_width: int | None = None
    min_height: int | None = None
    prioritize_quality: bool = False

    def sanitized(self) -> GetImagesByBreedRequest:
        return replace(self, limit=clamp_limit(self.limit), page=clamp_page(self.page))


class GetImagesByBreed:
    """
    Use case for fetching images of a single breed.

    Responsibilities:
    - Reject a blank breed id before any network call
    - Clamp limit/page
    - Drop images without a URL, below the minimum size, or (when breed
      info was requested) without breeds
    - Optionally rank by quality score, then by pixel area
    """

    def __init__(self, cat_service: CatService) -> None:
        self._cat_service = cat_service

    async def execute(self, request: GetImagesByBreedRequest) -> list[Cat]:
        """
        Execute the breed images fetch.

        Raises:
            ValidationError: If breed_id is blank
            CatApiError: If the remote call fails
        """
        if is_blank(request.breed_id):
            raise ValidationError(
                errors=[
                    {
                        "field": "breed_id",
                        "message": "Breed ID cannot be blank",
                        "code": "BLANK_BREED_ID",
                    }
                ]
            )

        request = request.sanitized()
        query = ImageSearchQuery(
            limit=request.limit,
            size=request.size,
            mime_types=request.mime_types,
            order=request.order,
            page=request.page,
            breed_ids=request.breed_id.strip(),
            include_breeds=request.include_breeds,
            include_categories=request.include_categories,
        )
        query.validate()

        cats = await self._cat_service.search_images(query)
        return self._post_process(cats, request)

    @staticmethod
    def _post_process(cats: list[Cat], request: GetImagesByBreedRequest) -> list[Cat]:
        kept = [cat for cat in cats if not is_blank(cat.image_url)]

        if request.min_width is not None or request.min_height is not None:
            kept = [
                cat
                for cat in kept
                if meets_min_dimensions(cat, request.min_width, request.min_height)
            ]

        if request.include_breeds is True:
            kept = [cat for cat in kept if cat.breeds]

        if request.prioritize_quality:
            kept = sorted(kept, key=lambda cat: (quality_score(cat), cat.width * cat.height), reverse=True)

        return kept
