from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from cat_feed.domain.errors import ValidationError


# ==============================================================================
# Domain Exceptions
# ==============================================================================


class QueryValidationError(ValidationError):
    """Raised when remote search parameters are invalid."""

    pass


ALLOWED_MIME_TYPES = {"jpg", "png", "gif"}

# images/search returns a single image unless told otherwise
DEFAULT_SEARCH_LIMIT = 1


# ==============================================================================
# Value Records
# ==============================================================================


@dataclass(frozen=True, slots=True)
class Weight:
    imperial: str
    metric: str


@dataclass(frozen=True, slots=True)
class Category:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class Breed:
    id: str
    name: str
    temperament: str | None = None
    origin: str | None = None
    country_codes: str | None = None
    country_code: str | None = None
    description: str | None = None
    life_span: str | None = None
    indoor: int | None = None
    lap: int | None = None
    alt_names: str | None = None
    # Scales are 0-5 as reported by the remote API
    adaptability: int | None = None
    affection_level: int | None = None
    child_friendly: int | None = None
    dog_friendly: int | None = None
    energy_level: int | None = None
    grooming: int | None = None
    health_issues: int | None = None
    intelligence: int | None = None
    shedding_level: int | None = None
    social_needs: int | None = None
    stranger_friendly: int | None = None
    vocalisation: int | None = None
    # Flags are 0/1
    experimental: int | None = None
    hairless: int | None = None
    natural: int | None = None
    rare: int | None = None
    rex: int | None = None
    suppressed_tail: int | None = None
    short_legs: int | None = None
    wikipedia_url: str | None = None
    hypoallergenic: int | None = None
    reference_image_id: str | None = None
    weight: Weight | None = None


@dataclass(frozen=True, slots=True)
class Cat:
    id: str
    image_url: str
    width: int
    height: int
    breeds: tuple[Breed, ...] = ()
    categories: tuple[Category, ...] = ()
    # Upload metadata, only present for images uploaded with our API key
    sub_id: str | None = None
    created_at: str | None = None
    original_filename: str | None = None
    breed_ids: str | None = None
    pending: int | None = None
    approved: int | None = None


# ==============================================================================
# Remote Query
# ==============================================================================


class ImageSize(Enum):
    """Image size preference, carrying the remote ``size`` value."""

    SMALL = ("small", "Small")
    MEDIUM = ("med", "Medium")
    LARGE = ("full", "Large")

    def __init__(self, api_value: str, display_name: str) -> None:
        self.api_value = api_value
        self.display_name = display_name

    @classmethod
    def from_api_value(cls, api_value: str) -> ImageSize:
        for size in cls:
            if size.api_value == api_value:
                return size
        raise QueryValidationError(f"size must be one of {[s.api_value for s in cls]}")


class ImageOrder(str, Enum):
    RANDOM = "RANDOM"
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True, slots=True)
class ImageSearchQuery:
    """Raw ``images/search`` request. ``None`` means "use the remote default"."""

    limit: int | None = DEFAULT_SEARCH_LIMIT
    size: ImageSize | None = None
    mime_types: tuple[str, ...] | None = None
    order: ImageOrder | None = None
    page: int | None = None
    category_ids: str | None = None
    breed_ids: str | None = None
    include_breeds: bool | None = None
    include_categories: bool | None = None

    def validate(self) -> None:
        """
        Validate query parameters.

        Raises:
            QueryValidationError: If query parameters are invalid
        """
        if self.limit is not None and self.limit < 1:
            raise QueryValidationError("limit must be >= 1")
        if self.page is not None and self.page < 0:
            raise QueryValidationError("page must be >= 0")
        if self.mime_types is not None:
            unsupported = set(self.mime_types) - ALLOWED_MIME_TYPES
            if unsupported:
                raise QueryValidationError(
                    f"mime_types must be a subset of {sorted(ALLOWED_MIME_TYPES)}",
                    unsupported=sorted(unsupported),
                )
