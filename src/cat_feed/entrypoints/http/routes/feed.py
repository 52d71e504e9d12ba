from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.exceptions import RequestValidationError
from pydantic import TypeAdapter, ValidationError

from cat_feed.entrypoints.http.dependencies import get_feed_controller
from cat_feed.entrypoints.http.dtos.feed import FeedEventDTO, FeedStateDTO
from cat_feed.entrypoints.http.error_responses import ERROR_RESPONSES
from cat_feed.entrypoints.http.mappers.feed_mapper import FeedMapper
from cat_feed.presentation.feed_controller import FeedController, settle


router = APIRouter(tags=["Feed"])

_EVENT = TypeAdapter(FeedEventDTO)


@router.get(
    "/feed",
    response_model=FeedStateDTO,
    summary="Current feed state",
    description="""
    Snapshot of the feed: loaded cats, paging, filters, breed search,
    favorites and the last user-facing error.
    """,
)
def get_feed(controller: FeedController = Depends(get_feed_controller)) -> FeedStateDTO:
    return FeedMapper.to_response(controller.state)


@router.post(
    "/feed/events",
    response_model=FeedStateDTO,
    summary="Dispatch a feed event",
    description="""
    Apply one event to the feed and return the resulting state once any
    fetch it started has settled.

    ## Events
    - `load_random_cats`, `refresh`, `load_more_cats`
    - `select_breed` (`breed_id`), `select_category` (`category_id`); null clears
    - `change_image_size` (`size`: small | med | full)
    - `toggle_show_only_with_breeds` (`show`)
    - `search_breeds` (`query`), `load_breeds`, `load_categories`
    - `toggle_favorite` (`cat_id`), `clear_error`

    ## Example
    ```
    POST /v1/feed/events
    {"type": "select_breed", "breed_id": "beng"}
    ```
    """,
    responses=ERROR_RESPONSES,
)
async def post_feed_event(
    payload: dict[str, Any] = Body(..., examples=[{"type": "select_breed", "breed_id": "beng"}]),
    controller: FeedController = Depends(get_feed_controller),
) -> FeedStateDTO:
    """Parse → map → dispatch → wait → return the new snapshot."""
    # 1. Parse the tagged event
    try:
        dto = _EVENT.validate_python(payload)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc

    # 2. Map to a controller event (resolves breed/category ids)
    event = FeedMapper.to_domain_event(dto, controller)

    # 3. Dispatch and wait for the transition to finish
    task = controller.dispatch(event)
    if task is not None:
        await settle([task])

    # 4. Map to response
    return FeedMapper.to_response(controller.state)
