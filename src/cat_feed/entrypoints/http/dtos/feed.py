from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from cat_feed.entrypoints.http.dtos.images import (
    BreedResponseDTO,
    CatImageResponseDTO,
    CategoryResponseDTO,
)


class FeedFiltersDTO(BaseModel):
    selected_breed: BreedResponseDTO | None
    selected_category: CategoryResponseDTO | None
    show_only_with_breeds: bool
    image_size: str
    is_active: bool
    summary: str


class FeedStateDTO(BaseModel):
    items: list[CatImageResponseDTO]
    phase: str
    is_loading: bool
    is_loading_more: bool
    current_page: int
    has_more_data: bool
    filters: FeedFiltersDTO
    breeds: list[BreedResponseDTO]
    categories: list[CategoryResponseDTO]
    search_query: str
    is_searching: bool
    favorite_ids: list[str]
    error_message: str | None
    total_cats_loaded: int
    last_refresh_time: datetime | None


# ==============================================================================
# Events (tagged by "type")
# ==============================================================================


class LoadRandomCatsEventDTO(BaseModel):
    type: Literal["load_random_cats"]


class LoadMoreCatsEventDTO(BaseModel):
    type: Literal["load_more_cats"]


class RefreshEventDTO(BaseModel):
    type: Literal["refresh"]


class SearchBreedsEventDTO(BaseModel):
    type: Literal["search_breeds"]
    query: str = Field(examples=["beng"])


class SelectBreedEventDTO(BaseModel):
    type: Literal["select_breed"]
    breed_id: str | None = Field(default=None, description="null clears the filter", examples=["beng"])


class SelectCategoryEventDTO(BaseModel):
    type: Literal["select_category"]
    category_id: int | None = Field(default=None, description="null clears the filter", examples=[5])


class ToggleFavoriteEventDTO(BaseModel):
    type: Literal["toggle_favorite"]
    cat_id: str = Field(min_length=1)


class ChangeImageSizeEventDTO(BaseModel):
    type: Literal["change_image_size"]
    size: str = Field(pattern=r"^(small|med|full)$", examples=["full"])


class ToggleShowOnlyWithBreedsEventDTO(BaseModel):
    type: Literal["toggle_show_only_with_breeds"]
    show: bool


class ClearErrorEventDTO(BaseModel):
    type: Literal["clear_error"]


class LoadBreedsEventDTO(BaseModel):
    type: Literal["load_breeds"]


class LoadCategoriesEventDTO(BaseModel):
    type: Literal["load_categories"]


FeedEventDTO = Annotated[
    Union[
        LoadRandomCatsEventDTO,
        LoadMoreCatsEventDTO,
        RefreshEventDTO,
        SearchBreedsEventDTO,
        SelectBreedEventDTO,
        SelectCategoryEventDTO,
        ToggleFavoriteEventDTO,
        ChangeImageSizeEventDTO,
        ToggleShowOnlyWithBreedsEventDTO,
        ClearErrorEventDTO,
        LoadBreedsEventDTO,
        LoadCategoriesEventDTO,
    ],
    Field(discriminator="type"),
]
