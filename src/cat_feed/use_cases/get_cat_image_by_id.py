"""Get cat image by ID use case."""

from __future__ import annotations

from dataclasses import dataclass

from cat_feed.domain.cat import Cat
from cat_feed.domain.errors import HttpError, NotFoundError, ValidationError
from cat_feed.ports.cat_service import CatService
from cat_feed.use_cases.query_rules import is_blank


@dataclass(frozen=True, slots=True)
class GetCatImageByIdRequest:
    """Request to get a cat image by ID."""

    image_id: str


@dataclass(frozen=True, slots=True)
class GetCatImageByIdResponse:
    """Response containing the requested cat image."""

    cat: Cat


def require_image_id(image_id: str) -> str:
    """Return the stripped id, or raise ValidationError if it is blank."""
    if is_blank(image_id):
        raise ValidationError(
            errors=[
                {
                    "field": "image_id",
                    "message": "Image ID cannot be blank",
                    "code": "BLANK_IMAGE_ID",
                }
            ]
        )
    return image_id.strip()


class GetCatImageById:
    """
    Use case for retrieving a single cat image by ID.

    Responsibilities:
    - Reject a blank image id
    - Delegate to the cat service
    - Translate an upstream 404 into NotFoundError
    """

    def __init__(self, cat_service: CatService) -> None:
        """
        Initialize use case with dependencies.

        Args:
            cat_service: Port to the remote cat API
        """
        self._cat_service = cat_service

    async def execute(self, request: GetCatImageByIdRequest) -> GetCatImageByIdResponse:
        """
        Execute the get cat image by ID use case.

        Raises:
            ValidationError: If image_id is blank
            NotFoundError: If the remote API has no image with that id
            CatApiError: For any other remote failure
        """
        image_id = require_image_id(request.image_id)

        try:
            cat = await self._cat_service.get_image(image_id)
        except HttpError as exc:
            if exc.code == 404:
                raise NotFoundError(resource="Cat image", identifier=image_id) from exc
            raise

        return GetCatImageByIdResponse(cat=cat)
