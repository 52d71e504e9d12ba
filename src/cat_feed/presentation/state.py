"""Immutable snapshots of the feed screen state."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from cat_feed.domain.cat import Breed, Cat, Category, ImageSize


class FeedPhase(str, Enum):
    """
    Where the feed is in its fetch lifecycle.

    One value instead of separate loading flags, so "loading the first page"
    and "loading another page" can never both be true.
    """

    IDLE = "idle"
    LOADING_INITIAL = "loading_initial"
    LOADING_MORE = "loading_more"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class FeedFilters:
    selected_breed: Breed | None = None
    selected_category: Category | None = None
    show_only_with_breeds: bool = False
    image_size: ImageSize = ImageSize.MEDIUM

    @property
    def is_active(self) -> bool:
        # Image size narrows results too, but does not count as a filter here
        return (
            self.selected_breed is not None
            or self.selected_category is not None
            or self.show_only_with_breeds
        )

    @property
    def summary(self) -> str:
        parts: list[str] = []
        if self.selected_breed is not None:
            parts.append(f"Breed: {self.selected_breed.name}")
        if self.selected_category is not None:
            parts.append(f"Category: {self.selected_category.name}")
        if self.show_only_with_breeds:
            parts.append("With descriptions")
        parts.append(f"Size: {self.image_size.display_name}")
        return " • ".join(parts)


@dataclass(frozen=True, slots=True)
class FeedState:
    items: tuple[Cat, ...] = ()
    phase: FeedPhase = FeedPhase.IDLE
    current_page: int = 0
    has_more_data: bool = True
    filters: FeedFilters = field(default_factory=FeedFilters)

    breeds: tuple[Breed, ...] = ()
    categories: tuple[Category, ...] = ()
    search_query: str = ""
    is_searching: bool = False

    favorite_ids: frozenset[str] = frozenset()
    error_message: str | None = None

    # Informational only, never used for control flow
    total_cats_loaded: int = 0
    last_refresh_time: datetime | None = None

    @property
    def is_loading(self) -> bool:
        return self.phase is FeedPhase.LOADING_INITIAL

    @property
    def filter_summary(self) -> str:
        return self.filters.summary

    @property
    def is_loading_more(self) -> bool:
        return self.phase is FeedPhase.LOADING_MORE

    def is_favorite(self, cat_id: str) -> bool:
        return cat_id in self.favorite_ids
