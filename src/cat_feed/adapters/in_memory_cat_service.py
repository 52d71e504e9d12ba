from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any

from cat_feed.domain.cat import DEFAULT_SEARCH_LIMIT, Breed, Cat, Category, ImageOrder, ImageSearchQuery
from cat_feed.domain.errors import HttpError
from cat_feed.ports.cat_service import CatService


@dataclass
class RecordedCall:
    method: str
    kwargs: dict[str, Any] = field(default_factory=dict)


class InMemoryCatService(CatService):
    """
    Canonical contract implementation for tests.

    - Stores cats, breeds and categories in insertion order
    - breed_ids / category_ids filter with OR semantics inside one list,
      AND semantics across lists (same as the remote API)
    - ASC/DESC order by id; RANDOM shuffles with a seeded generator
    - Paging applies AFTER filtering: page N is items[N*limit:(N+1)*limit]
    - An unset limit returns one image, like the remote default
    - Unknown image ids raise HttpError(404)
    - Every call is recorded in ``calls`` for assertions
    """

    def __init__(
        self,
        cats: list[Cat] | None = None,
        breeds: list[Breed] | None = None,
        categories: list[Category] | None = None,
        seed: int = 0,
    ) -> None:
        self._cats = list(cats or [])
        self._breeds = list(breeds or [])
        self._categories = list(categories or [])
        self._random = random.Random(seed)
        self._upload_counter = 0
        self.calls: list[RecordedCall] = []

    def calls_to(self, method: str) -> list[RecordedCall]:
        return [call for call in self.calls if call.method == method]

    async def search_images(self, query: ImageSearchQuery) -> list[Cat]:
        self.calls.append(RecordedCall("search_images", {"query": query}))

        matches = [cat for cat in self._cats if self._matches(cat, query)]
        matches = self._ordered(matches, query.order)

        limit = query.limit if query.limit is not None else DEFAULT_SEARCH_LIMIT
        start = (query.page or 0) * limit
        return matches[start : start + limit]

    async def get_image(self, image_id: str) -> Cat:
        self.calls.append(RecordedCall("get_image", {"image_id": image_id}))
        return self._find(image_id)

    async def upload_image(
        self,
        filename: str,
        content: bytes,
        content_type: str,
        sub_id: str | None = None,
        breed_ids: str | None = None,
    ) -> Cat:
        self.calls.append(
            RecordedCall(
                "upload_image",
                {"filename": filename, "content_type": content_type, "sub_id": sub_id},
            )
        )
        self._upload_counter += 1
        cat = Cat(
            id=f"upload-{self._upload_counter}",
            image_url=f"https://cdn.example.test/{filename}",
            width=0,
            height=0,
            sub_id=sub_id,
            original_filename=filename,
            breed_ids=breed_ids,
            pending=0,
            approved=1,
        )
        self._cats.append(cat)
        return cat

    async def delete_image(self, image_id: str) -> None:
        self.calls.append(RecordedCall("delete_image", {"image_id": image_id}))
        self._cats.remove(self._find(image_id))

    async def list_breeds(
        self,
        attach_breed: int | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[Breed]:
        self.calls.append(
            RecordedCall("list_breeds", {"attach_breed": attach_breed, "page": page, "limit": limit})
        )
        return self._paged(self._breeds, page, limit)

    async def search_breeds(self, query: str) -> list[Breed]:
        self.calls.append(RecordedCall("search_breeds", {"query": query}))
        needle = query.lower()
        return [breed for breed in self._breeds if needle in breed.name.lower()]

    async def list_categories(
        self,
        limit: int | None = None,
        page: int | None = None,
    ) -> list[Category]:
        self.calls.append(RecordedCall("list_categories", {"limit": limit, "page": page}))
        return self._paged(self._categories, page, limit)

    def _matches(self, cat: Cat, query: ImageSearchQuery) -> bool:
        if query.breed_ids:
            wanted = set(query.breed_ids.split(","))
            if not any(breed.id in wanted for breed in cat.breeds):
                return False
        if query.category_ids:
            wanted_ids = {int(value) for value in query.category_ids.split(",")}
            if not any(category.id in wanted_ids for category in cat.categories):
                return False
        return True

    def _ordered(self, cats: list[Cat], order: ImageOrder | None) -> list[Cat]:
        if order == ImageOrder.ASC:
            return sorted(cats, key=lambda cat: cat.id)
        if order == ImageOrder.DESC:
            return sorted(cats, key=lambda cat: cat.id, reverse=True)
        if order == ImageOrder.RANDOM:
            shuffled = list(cats)
            self._random.shuffle(shuffled)
            return shuffled
        return cats

    def _find(self, image_id: str) -> Cat:
        for cat in self._cats:
            if cat.id == image_id:
                return cat
        raise HttpError(404, "Not Found")

    @staticmethod
    def _paged(items: list[Any], page: int | None, limit: int | None) -> list[Any]:
        if limit is None:
            return list(items)
        start = (page or 0) * limit
        return items[start : start + limit]
