"""Upload and delete use cases for images owned by our API key."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath

from cat_feed.domain.cat import Cat
from cat_feed.domain.errors import HttpError, NotFoundError, ValidationError
from cat_feed.ports.cat_service import CatService
from cat_feed.use_cases.get_cat_image_by_id import require_image_id
from cat_feed.use_cases.query_rules import is_blank


ALLOWED_UPLOAD_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif"}


@dataclass(frozen=True, slots=True)
class UploadCatImageRequest:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"
    sub_id: str | None = None
    breed_ids: str | None = None

    def validate(self) -> None:
        errors: list[dict[str, str]] = []

        if not self.content:
            errors.append(
                {"field": "file", "message": "File content cannot be empty", "code": "EMPTY_FILE"}
            )

        suffix = PurePath(self.filename).suffix.lower() if not is_blank(self.filename) else ""
        if suffix not in ALLOWED_UPLOAD_EXTENSIONS:
            errors.append(
                {
                    "field": "filename",
                    "message": f"Must end with one of {sorted(ALLOWED_UPLOAD_EXTENSIONS)}",
                    "code": "UNSUPPORTED_FILE_TYPE",
                }
            )

        if errors:
            raise ValidationError(errors=errors)


class UploadCatImage:
    def __init__(self, cat_service: CatService) -> None:
        self._cat_service = cat_service

    async def execute(self, request: UploadCatImageRequest) -> Cat:
        request.validate()

        return await self._cat_service.upload_image(
            filename=request.filename,
            content=request.content,
            content_type=request.content_type,
            sub_id=request.sub_id or None,
            breed_ids=request.breed_ids or None,
        )


class DeleteCatImage:
    def __init__(self, cat_service: CatService) -> None:
        self._cat_service = cat_service

    async def execute(self, image_id: str) -> None:
        image_id = require_image_id(image_id)

        try:
            await self._cat_service.delete_image(image_id)
        except HttpError as exc:
            if exc.code == 404:
                raise NotFoundError(resource="Cat image", identifier=image_id) from exc
            raise

