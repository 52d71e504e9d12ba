from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from cat_feed.domain.cat import Category
from cat_feed.ports.cat_service import CatService
from cat_feed.use_cases.query_rules import clamp_limit, clamp_page, contains_ignore_case


class CategorySortKey(str, Enum):
    NAME = "name"
    ID = "id"


@dataclass(frozen=True, slots=True)
class GetCategoriesRequest:
    limit: int | None = None
    page: int | None = None
    filter_by_name: str | None = None
    sort_by: CategorySortKey | None = None

    def sanitized(self) -> GetCategoriesRequest:
        return replace(self, limit=clamp_limit(self.limit), page=clamp_page(self.page))


class GetCategories:
    """List image categories, optionally filtered by name and sorted."""

    def __init__(self, cat_service: CatService) -> None:
        self._cat_service = cat_service

    async def execute(self, request: GetCategoriesRequest) -> list[Category]:
        request = request.sanitized()

        categories = await self._cat_service.list_categories(limit=request.limit, page=request.page)

        if request.filter_by_name is not None:
            categories = [
                c for c in categories if contains_ignore_case(c.name, request.filter_by_name)
            ]

        if request.sort_by is CategorySortKey.NAME:
            categories = sorted(categories, key=lambda c: c.name)
        elif request.sort_by is CategorySortKey.ID:
            categories = sorted(categories, key=lambda c: c.id)

        return categories
