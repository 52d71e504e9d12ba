from pydantic import BaseModel, Field

from cat_feed.domain.cat import ImageOrder


class WeightResponseDTO(BaseModel):
    imperial: str
    metric: str


class CategoryResponseDTO(BaseModel):
    id: int
    name: str


class BreedResponseDTO(BaseModel):
    id: str
    name: str
    temperament: str | None = None
    origin: str | None = None
    description: str | None = None
    life_span: str | None = None
    affection_level: int | None = None
    energy_level: int | None = None
    intelligence: int | None = None
    wikipedia_url: str | None = None
    reference_image_id: str | None = None
    weight: WeightResponseDTO | None = None


class CatImageResponseDTO(BaseModel):
    id: str
    url: str
    width: int
    height: int
    breeds: list[BreedResponseDTO]
    categories: list[CategoryResponseDTO]
    sub_id: str | None = None
    created_at: str | None = None
    original_filename: str | None = None


class CatImageListResponseDTO(BaseModel):
    images: list[CatImageResponseDTO]
    count: int


class BreedImagesQueryDTO(BaseModel):
    """Query parameters for listing images of one breed."""

    limit: int | None = Field(
        default=None,
        description="Images to request upstream (clamped to 1..100)",
        examples=[10],
    )
    page: int | None = Field(
        default=None,
        description="Zero-based page (negative values are treated as 0)",
        examples=[0],
    )
    size: str | None = Field(
        default=None,
        description="Upstream image size",
        examples=["med"],
        pattern=r"^(small|med|full)$",
    )
    order: ImageOrder | None = Field(
        default=None,
        description="Result order",
        examples=["ASC"],
    )
    include_breeds: bool | None = Field(
        default=None,
        description="Ask for breed info and drop images that have none",
    )
    min_width: int | None = Field(default=None, ge=0, examples=[800])
    min_height: int | None = Field(default=None, ge=0, examples=[600])
    prioritize_quality: bool = Field(
        default=False,
        description="Rank images by metadata richness, then by pixel area",
    )
