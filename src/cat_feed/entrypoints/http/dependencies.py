"""
Dependency injection for FastAPI routes.

Key principle: the HTTP client, the cat service and the feed controller are
long-lived and built once by the app lifespan (see app.py). Use cases are
cheap and stateless, so each request gets a fresh one wired to the shared
service.
"""

from __future__ import annotations

from fastapi import Depends, Request

from cat_feed.ports.cat_service import CatService
from cat_feed.presentation.feed_controller import FeedController
from cat_feed.use_cases.get_cat_image_by_id import GetCatImageById
from cat_feed.use_cases.get_images_by_breed import GetImagesByBreed
from cat_feed.use_cases.manage_uploads import DeleteCatImage, UploadCatImage


def get_cat_service(request: Request) -> CatService:
    """
    Provides the app-wide CatService.

    Returns:
        CatService: Built once in the app lifespan
    """
    return request.app.state.cat_service


def get_feed_controller(request: Request) -> FeedController:
    """
    Provides the app-wide FeedController.

    There is one feed per process; every request sees the same state.
    """
    return request.app.state.feed_controller


def get_images_by_breed_use_case(
    cat_service: CatService = Depends(get_cat_service),
) -> GetImagesByBreed:
    return GetImagesByBreed(cat_service=cat_service)


def get_cat_image_by_id_use_case(
    cat_service: CatService = Depends(get_cat_service),
) -> GetCatImageById:
    return GetCatImageById(cat_service=cat_service)


def get_upload_cat_image_use_case(
    cat_service: CatService = Depends(get_cat_service),
) -> UploadCatImage:
    return UploadCatImage(cat_service=cat_service)


def get_delete_cat_image_use_case(
    cat_service: CatService = Depends(get_cat_service),
) -> DeleteCatImage:
    return DeleteCatImage(cat_service=cat_service)
