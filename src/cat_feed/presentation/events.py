"""Typed events the feed controller accepts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from cat_feed.domain.cat import Breed, Category, ImageSize


@dataclass(frozen=True, slots=True)
class LoadRandomCats:
    pass


@dataclass(frozen=True, slots=True)
class LoadMoreCats:
    pass


@dataclass(frozen=True, slots=True)
class Refresh:
    pass


@dataclass(frozen=True, slots=True)
class SearchBreeds:
    query: str


@dataclass(frozen=True, slots=True)
class SelectBreed:
    breed: Breed | None


@dataclass(frozen=True, slots=True)
class SelectCategory:
    category: Category | None


@dataclass(frozen=True, slots=True)
class ToggleFavorite:
    cat_id: str


@dataclass(frozen=True, slots=True)
class ChangeImageSize:
    size: ImageSize


@dataclass(frozen=True, slots=True)
class ToggleShowOnlyWithBreeds:
    show: bool


@dataclass(frozen=True, slots=True)
class ClearError:
    pass


@dataclass(frozen=True, slots=True)
class LoadBreeds:
    pass


@dataclass(frozen=True, slots=True)
class LoadCategories:
    pass


FeedEvent = Union[
    LoadRandomCats,
    LoadMoreCats,
    Refresh,
    SearchBreeds,
    SelectBreed,
    SelectCategory,
    ToggleFavorite,
    ChangeImageSize,
    ToggleShowOnlyWithBreeds,
    ClearError,
    LoadBreeds,
    LoadCategories,
]
