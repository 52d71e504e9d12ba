from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from cat_feed.domain.cat import Breed
from cat_feed.ports.cat_service import CatService
from cat_feed.use_cases.query_rules import clamp_limit, clamp_page, contains_ignore_case


class BreedSortKey(str, Enum):
    NAME = "name"
    ORIGIN = "origin"
    AFFECTION_LEVEL = "affection_level"
    ENERGY_LEVEL = "energy_level"
    INTELLIGENCE = "intelligence"


@dataclass(frozen=True, slots=True)
class GetBreedsRequest:
    attach_breed: int | None = None
    page: int | None = None
    limit: int | None = None
    filter_by_origin: str | None = None
    filter_by_temperament: str | None = None
    sort_by: BreedSortKey | None = None

    def sanitized(self) -> GetBreedsRequest:
        return replace(self, limit=clamp_limit(self.limit), page=clamp_page(self.page))


class GetBreeds:
    """
    List breeds with optional client-side filtering and sorting.

    Origin and temperament filters are case-insensitive substring matches
    applied after the fetch. Sorting is stable on one key; ties break by
    name.
    """

    def __init__(self, cat_service: CatService) -> None:
        self._cat_service = cat_service

    async def execute(self, request: GetBreedsRequest) -> list[Breed]:
        request = request.sanitized()

        breeds = await self._cat_service.list_breeds(
            attach_breed=request.attach_breed,
            page=request.page,
            limit=request.limit,
        )

        if request.filter_by_origin is not None:
            breeds = [b for b in breeds if contains_ignore_case(b.origin, request.filter_by_origin)]

        if request.filter_by_temperament is not None:
            breeds = [
                b for b in breeds if contains_ignore_case(b.temperament, request.filter_by_temperament)
            ]

        return sort_breeds(breeds, request.sort_by)


def sort_breeds(breeds: list[Breed], sort_by: BreedSortKey | None) -> list[Breed]:
    if sort_by is None:
        return breeds

    if sort_by is BreedSortKey.NAME:
        return sorted(breeds, key=lambda b: b.name)
    if sort_by is BreedSortKey.ORIGIN:
        return sorted(breeds, key=lambda b: (b.origin or "", b.name))

    # Scale attributes sort highest first; missing values count as 0
    attribute = sort_by.value
    return sorted(breeds, key=lambda b: (-(getattr(b, attribute) or 0), b.name))
