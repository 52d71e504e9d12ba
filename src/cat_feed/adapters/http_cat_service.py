"""HTTP implementation of CatService on top of httpx."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter

from cat_feed.adapters.cat_api_dtos import BreedDTO, CategoryDTO, CatImageDTO
from cat_feed.adapters.cat_api_mapper import CatApiMapper
from cat_feed.domain.cat import Breed, Cat, Category, ImageSearchQuery
from cat_feed.domain.errors import HttpError, TransportError, UnknownError
from cat_feed.infra.config import cat_api_base_url, cat_api_timeout
from cat_feed.ports.cat_service import CatService

logger = logging.getLogger(__name__)

T = TypeVar("T")

_IMAGES = TypeAdapter(list[CatImageDTO])
_IMAGE = TypeAdapter(CatImageDTO)
_BREEDS = TypeAdapter(list[BreedDTO])
_CATEGORIES = TypeAdapter(list[CategoryDTO])


def build_client(base_url: str | None = None, timeout: float | None = None) -> httpx.AsyncClient:
    """Create the shared AsyncClient for the Cat API (caller owns closing it)."""
    return httpx.AsyncClient(
        base_url=base_url or cat_api_base_url(),
        timeout=httpx.Timeout(timeout or cat_api_timeout()),
    )


class HttpCatService(CatService):
    """
    CatService backed by The Cat API.

    - Sends the x-api-key header when a key is configured
    - Parses JSON with pydantic wire models, maps them to domain models
    - Classifies every failure at this boundary:
        non-2xx            -> HttpError(code, reason)
        connect/read/timeout -> TransportError
        unparseable body   -> UnknownError
    """

    def __init__(self, client: httpx.AsyncClient, api_key: str | None = None) -> None:
        """
        Initialize service with an HTTP client.

        Args:
            client: AsyncClient whose base_url points at the API root
            api_key: Optional API key; some endpoints work without one
        """
        self._client = client
        self._headers = {"x-api-key": api_key} if api_key else {}

    async def search_images(self, query: ImageSearchQuery) -> list[Cat]:
        params = CatApiMapper.to_search_params(query)
        response = await self._request("GET", "images/search", params=params)
        cats = [CatApiMapper.to_cat(dto) for dto in self._parse(response, _IMAGES)]
        logger.info("Fetched cat images", extra={"count": len(cats), "params": params})
        return cats

    async def get_image(self, image_id: str) -> Cat:
        response = await self._request("GET", f"images/{image_id}")
        return CatApiMapper.to_cat(self._parse(response, _IMAGE))

    async def upload_image(
        self,
        filename: str,
        content: bytes,
        content_type: str,
        sub_id: str | None = None,
        breed_ids: str | None = None,
    ) -> Cat:
        data = {key: value for key, value in (("sub_id", sub_id), ("breed_ids", breed_ids)) if value}
        response = await self._request(
            "POST",
            "images/upload",
            files={"file": (filename, content, content_type)},
            data=data,
        )
        cat = CatApiMapper.to_cat(self._parse(response, _IMAGE))
        logger.info("Uploaded cat image", extra={"image_id": cat.id, "upload_filename": filename})
        return cat

    async def delete_image(self, image_id: str) -> None:
        await self._request("DELETE", f"images/{image_id}")
        logger.info("Deleted cat image", extra={"image_id": image_id})

    async def list_breeds(
        self,
        attach_breed: int | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[Breed]:
        params = _drop_none({"attach_breed": attach_breed, "page": page, "limit": limit})
        response = await self._request("GET", "breeds", params=params)
        return [CatApiMapper.to_breed(dto) for dto in self._parse(response, _BREEDS)]

    async def search_breeds(self, query: str) -> list[Breed]:
        response = await self._request("GET", "breeds/search", params={"q": query})
        return [CatApiMapper.to_breed(dto) for dto in self._parse(response, _BREEDS)]

    async def list_categories(
        self,
        limit: int | None = None,
        page: int | None = None,
    ) -> list[Category]:
        params = _drop_none({"limit": limit, "page": page})
        response = await self._request("GET", "categories", params=params)
        return [CatApiMapper.to_category(dto) for dto in self._parse(response, _CATEGORIES)]

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, path, headers=self._headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.warning(
                "Cat API returned an error status",
                extra={"method": method, "path": path, "status_code": status_code},
            )
            raise HttpError(status_code, exc.response.reason_phrase) from exc
        except httpx.TransportError as exc:
            logger.warning(
                "Cat API unreachable",
                extra={"method": method, "path": path, "error_type": type(exc).__name__},
            )
            raise TransportError(str(exc) or "Network error") from exc

        return response

    @staticmethod
    def _parse(response: httpx.Response, adapter: TypeAdapter[T]) -> T:
        # pydantic.ValidationError (bad JSON or wrong shape) subclasses ValueError
        try:
            return adapter.validate_json(response.content)
        except ValueError as exc:
            logger.error(
                "Unparseable Cat API response",
                extra={"url": str(response.request.url), "status_code": response.status_code},
            )
            raise UnknownError("Unparseable response from Cat API") from exc


def _drop_none(params: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in params.items() if value is not None}
