"""Wire models for The Cat API JSON payloads (snake_case, unknown fields ignored)."""

from pydantic import BaseModel, ConfigDict, Field


class WeightDTO(BaseModel):
    imperial: str
    metric: str


class CategoryDTO(BaseModel):
    id: int
    name: str


class BreedDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

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
    weight: WeightDTO | None = None


class CatImageDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    url: str
    width: int
    height: int
    breeds: list[BreedDTO] = Field(default_factory=list)
    categories: list[CategoryDTO] = Field(default_factory=list)
    sub_id: str | None = None
    created_at: str | None = None
    original_filename: str | None = None
    breed_ids: str | None = None
    pending: int | None = None
    approved: int | None = None
