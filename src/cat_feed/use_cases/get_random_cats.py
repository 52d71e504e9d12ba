from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from cat_feed.domain.cat import Cat, ImageOrder, ImageSearchQuery, ImageSize
from cat_feed.ports.cat_service import CatService
from cat_feed.use_cases.query_rules import (
    clamp_limit,
    clamp_page,
    has_breed_info,
    is_blank,
    meets_min_dimensions,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


@dataclass(frozen=True, slots=True)
class GetRandomCatsRequest:
    limit: int = DEFAULT_LIMIT
    size: ImageSize | None = None
    mime_types: tuple[str, ...] | None = None
    order: ImageOrder | None = None
    page: int | None = None
    category_ids: str | None = None
    breed_ids: str | None = None
    # Client-side post-filters, never sent upstream
    prefer_breeds_with_info: bool = False
    min_width: int | None = None
    min_height: int | None = None
    include_breeds: bool | None = None
    include_categories: bool | None = None

    def sanitized(self) -> GetRandomCatsRequest:
        return replace(
            self,
            limit=clamp_limit(self.limit) or DEFAULT_LIMIT,
            page=clamp_page(self.page),
        )

    def to_query(self) -> ImageSearchQuery:
        return ImageSearchQuery(
            limit=self.limit,
            size=self.size,
            mime_types=self.mime_types,
            order=self.order,
            page=self.page,
            category_ids=self.category_ids,
            breed_ids=self.breed_ids,
            include_breeds=self.include_breeds,
            include_categories=self.include_categories,
        )


class GetRandomCats:
    """
    Fetch one page of cat images and apply client-side post-filters.

    The remote API has no notion of "only cats with breed info" or a
    minimum size, so those are applied after the fetch. A page can
    therefore come back shorter than the requested limit even when more
    data exists upstream.
    """

    def __init__(self, cat_service: CatService) -> None:
        self._cat_service = cat_service

    async def execute(self, request: GetRandomCatsRequest) -> list[Cat]:
        """
        Execute the random cats fetch.

        Args:
            request: Raw, possibly out-of-range parameters

        Returns:
            Post-filtered cats, in remote order

        Raises:
            CatApiError: If the remote call fails
        """
        request = request.sanitized()
        query = request.to_query()
        query.validate()

        cats = await self._cat_service.search_images(query)
        filtered = self._post_filter(cats, request)

        logger.debug(
            "Random cats post-filtered",
            extra={"fetched": len(cats), "kept": len(filtered), "page": request.page},
        )
        return filtered

    @staticmethod
    def _post_filter(cats: list[Cat], request: GetRandomCatsRequest) -> list[Cat]:
        kept = [cat for cat in cats if not is_blank(cat.image_url)]

        if request.prefer_breeds_with_info:
            kept = [cat for cat in kept if has_breed_info(cat)]

        if request.min_width is not None or request.min_height is not None:
            kept = [
                cat
                for cat in kept
                if meets_min_dimensions(cat, request.min_width, request.min_height)
            ]

        return kept
