from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from cat_feed.entrypoints.http.dependencies import (
    get_cat_image_by_id_use_case,
    get_delete_cat_image_use_case,
    get_images_by_breed_use_case,
    get_upload_cat_image_use_case,
)
from cat_feed.entrypoints.http.dtos.images import (
    BreedImagesQueryDTO,
    CatImageListResponseDTO,
    CatImageResponseDTO,
)
from cat_feed.entrypoints.http.error_responses import ERROR_RESPONSES
from cat_feed.entrypoints.http.mappers.images_mapper import CatImageMapper
from cat_feed.use_cases.get_cat_image_by_id import GetCatImageById, GetCatImageByIdRequest
from cat_feed.use_cases.get_images_by_breed import GetImagesByBreed
from cat_feed.use_cases.manage_uploads import (
    DeleteCatImage,
    UploadCatImage,
    UploadCatImageRequest,
)


router = APIRouter(tags=["Images"])


@router.get(
    "/breeds/{breed_id}/images",
    response_model=CatImageListResponseDTO,
    summary="Images of one breed",
    description="""
    Fetch images of a single breed.

    - `limit` is clamped to 1..100, negative `page` is treated as 0
    - `min_width`/`min_height` and `include_breeds` filter after the fetch
    - `prioritize_quality` ranks by metadata richness, then pixel area

    ## Example
    ```
    GET /v1/breeds/beng/images?limit=10&prioritize_quality=true
    ```
    """,
    responses=ERROR_RESPONSES,
)
async def get_breed_images(
    breed_id: str,
    query: Annotated[BreedImagesQueryDTO, Query()],
    use_case: GetImagesByBreed = Depends(get_images_by_breed_use_case),
) -> CatImageListResponseDTO:
    request = CatImageMapper.to_breed_images_request(breed_id, query)
    cats = await use_case.execute(request)
    return CatImageMapper.to_list_response(cats)


@router.get(
    "/images/{image_id}",
    response_model=CatImageResponseDTO,
    summary="Get a cat image by ID",
    responses=ERROR_RESPONSES,
)
async def get_image(
    image_id: str,
    use_case: GetCatImageById = Depends(get_cat_image_by_id_use_case),
) -> CatImageResponseDTO:
    result = await use_case.execute(GetCatImageByIdRequest(image_id=image_id))
    return CatImageMapper.to_response(result.cat)


@router.post(
    "/images",
    response_model=CatImageResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a cat image",
    description="Multipart upload. Accepts .jpg, .jpeg, .png and .gif files.",
    responses=ERROR_RESPONSES,
)
async def upload_image(
    file: UploadFile = File(...),
    sub_id: str | None = Form(default=None),
    breed_ids: str | None = Form(default=None),
    use_case: UploadCatImage = Depends(get_upload_cat_image_use_case),
) -> CatImageResponseDTO:
    content = await file.read()
    request = UploadCatImageRequest(
        filename=file.filename or "",
        content=content,
        content_type=file.content_type or "application/octet-stream",
        sub_id=sub_id,
        breed_ids=breed_ids,
    )
    cat = await use_case.execute(request)
    return CatImageMapper.to_response(cat)


@router.delete(
    "/images/{image_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an uploaded cat image",
    responses=ERROR_RESPONSES,
)
async def delete_image(
    image_id: str,
    use_case: DeleteCatImage = Depends(get_delete_cat_image_use_case),
) -> None:
    await use_case.execute(image_id)
