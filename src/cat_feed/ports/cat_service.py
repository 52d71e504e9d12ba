from __future__ import annotations

from abc import ABC, abstractmethod

from cat_feed.domain.cat import Breed, Cat, Category, ImageSearchQuery


class CatService(ABC):
    """
    Port for the remote cat API.

    Pure request/response mapping, no state. Every failure is raised as a
    classified CatApiError (HttpError, TransportError, UnknownError), never
    as a transport-library exception.

    Contract (Preconditions):
        - query parameters must be sanitized by caller (UseCase)
        - Implementations trust inputs are valid and do not re-clamp
    """

    @abstractmethod
    async def search_images(self, query: ImageSearchQuery) -> list[Cat]:
        """
        Search images.

        Args:
            query: Remote search parameters - pre-sanitized

        Returns:
            One page of cats, in the order the remote source returned them
        """
        ...

    @abstractmethod
    async def get_image(self, image_id: str) -> Cat: ...

    @abstractmethod
    async def upload_image(
        self,
        filename: str,
        content: bytes,
        content_type: str,
        sub_id: str | None = None,
        breed_ids: str | None = None,
    ) -> Cat: ...

    @abstractmethod
    async def delete_image(self, image_id: str) -> None: ...

    @abstractmethod
    async def list_breeds(
        self,
        attach_breed: int | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> list[Breed]: ...

    @abstractmethod
    async def search_breeds(self, query: str) -> list[Breed]: ...

    @abstractmethod
    async def list_categories(
        self,
        limit: int | None = None,
        page: int | None = None,
    ) -> list[Category]: ...
