from __future__ import annotations

from cat_feed.domain.cat import ImageSize
from cat_feed.domain.errors import NotFoundError
from cat_feed.entrypoints.http.dtos.feed import (
    ChangeImageSizeEventDTO,
    ClearErrorEventDTO,
    FeedEventDTO,
    FeedFiltersDTO,
    FeedStateDTO,
    LoadBreedsEventDTO,
    LoadCategoriesEventDTO,
    LoadMoreCatsEventDTO,
    LoadRandomCatsEventDTO,
    RefreshEventDTO,
    SearchBreedsEventDTO,
    SelectBreedEventDTO,
    SelectCategoryEventDTO,
    ToggleFavoriteEventDTO,
    ToggleShowOnlyWithBreedsEventDTO,
)
from cat_feed.entrypoints.http.mappers.images_mapper import CatImageMapper
from cat_feed.presentation import events
from cat_feed.presentation.feed_controller import FeedController
from cat_feed.presentation.state import FeedFilters, FeedState


class FeedMapper:
    """Maps feed snapshots to DTOs and tagged event DTOs to controller events."""

    @staticmethod
    def to_filters_response(filters: FeedFilters) -> FeedFiltersDTO:
        return FeedFiltersDTO(
            selected_breed=(
                CatImageMapper.to_breed_response(filters.selected_breed)
                if filters.selected_breed
                else None
            ),
            selected_category=(
                CatImageMapper.to_category_response(filters.selected_category)
                if filters.selected_category
                else None
            ),
            show_only_with_breeds=filters.show_only_with_breeds,
            image_size=filters.image_size.api_value,
            is_active=filters.is_active,
            summary=filters.summary,
        )

    @staticmethod
    def to_response(state: FeedState) -> FeedStateDTO:
        return FeedStateDTO(
            items=[CatImageMapper.to_response(cat) for cat in state.items],
            phase=state.phase.value,
            is_loading=state.is_loading,
            is_loading_more=state.is_loading_more,
            current_page=state.current_page,
            has_more_data=state.has_more_data,
            filters=FeedMapper.to_filters_response(state.filters),
            breeds=[CatImageMapper.to_breed_response(b) for b in state.breeds],
            categories=[CatImageMapper.to_category_response(c) for c in state.categories],
            search_query=state.search_query,
            is_searching=state.is_searching,
            favorite_ids=sorted(state.favorite_ids),
            error_message=state.error_message,
            total_cats_loaded=state.total_cats_loaded,
            last_refresh_time=state.last_refresh_time,
        )

    @staticmethod
    def to_domain_event(dto: FeedEventDTO, controller: FeedController) -> events.FeedEvent:
        """
        Build the controller event for a tagged event DTO.

        Breed and category ids are resolved against the lists the
        controller has loaded.

        Raises:
            NotFoundError: If a breed or category id is not loaded
        """
        if isinstance(dto, SelectBreedEventDTO):
            if dto.breed_id is None:
                return events.SelectBreed(breed=None)
            breed = controller.find_breed(dto.breed_id)
            if breed is None:
                raise NotFoundError(resource="Breed", identifier=dto.breed_id)
            return events.SelectBreed(breed=breed)

        if isinstance(dto, SelectCategoryEventDTO):
            if dto.category_id is None:
                return events.SelectCategory(category=None)
            category = controller.find_category(dto.category_id)
            if category is None:
                raise NotFoundError(resource="Category", identifier=str(dto.category_id))
            return events.SelectCategory(category=category)

        if isinstance(dto, SearchBreedsEventDTO):
            return events.SearchBreeds(query=dto.query)
        if isinstance(dto, ToggleFavoriteEventDTO):
            return events.ToggleFavorite(cat_id=dto.cat_id)
        if isinstance(dto, ChangeImageSizeEventDTO):
            return events.ChangeImageSize(size=ImageSize.from_api_value(dto.size))
        if isinstance(dto, ToggleShowOnlyWithBreedsEventDTO):
            return events.ToggleShowOnlyWithBreeds(show=dto.show)

        simple: dict[type, events.FeedEvent] = {
            LoadRandomCatsEventDTO: events.LoadRandomCats(),
            LoadMoreCatsEventDTO: events.LoadMoreCats(),
            RefreshEventDTO: events.Refresh(),
            ClearErrorEventDTO: events.ClearError(),
            LoadBreedsEventDTO: events.LoadBreeds(),
            LoadCategoriesEventDTO: events.LoadCategories(),
        }
        return simple[type(dto)]
