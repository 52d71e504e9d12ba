from __future__ import annotations

from cat_feed.domain.cat import Breed
from cat_feed.ports.cat_service import CatService
from cat_feed.use_cases.query_rules import breed_relevance


class SearchBreeds:
    """
    Search breeds by name and rank them by relevance.

    Order: exact name match, then prefix match, then substring match, then
    everything else; alphabetical by name within each rank.
    """

    def __init__(self, cat_service: CatService) -> None:
        self._cat_service = cat_service

    async def execute(self, query: str) -> list[Breed]:
        query = query.strip()
        if not query:
            return []

        breeds = await self._cat_service.search_breeds(query)
        return rank_by_relevance(breeds, query)


def rank_by_relevance(breeds: list[Breed], query: str) -> list[Breed]:
    return sorted(breeds, key=lambda breed: (breed_relevance(breed, query), breed.name))
