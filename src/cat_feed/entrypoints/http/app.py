import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import FastAPI

from cat_feed.adapters.http_cat_service import HttpCatService, build_client
from cat_feed.adapters.sqlalchemy_favorites_store import SqlAlchemyFavoritesStore
from cat_feed.entrypoints.http.exception_handlers import register_exception_handlers
from cat_feed.entrypoints.http.routes.feed import router as feed_router
from cat_feed.entrypoints.http.routes.health import router as health_router
from cat_feed.entrypoints.http.routes.images import router as images_router
from cat_feed.infra.config import cat_api_key
from cat_feed.infra.logging_config import configure_logging
from cat_feed.ports.cat_service import CatService
from cat_feed.ports.favorites_store import FavoritesStore
from cat_feed.presentation.feed_controller import FeedController
from cat_feed.use_cases.get_breeds import GetBreeds
from cat_feed.use_cases.get_categories import GetCategories
from cat_feed.use_cases.get_random_cats import GetRandomCats
from cat_feed.use_cases.search_breeds import SearchBreeds

logger = logging.getLogger(__name__)


def build_feed_controller(
    cat_service: CatService, favorites_store: FavoritesStore, **options: Any
) -> FeedController:
    """Wire the feed controller's use cases to one cat service."""
    return FeedController(
        get_random_cats=GetRandomCats(cat_service),
        get_breeds=GetBreeds(cat_service),
        search_breeds=SearchBreeds(cat_service),
        get_categories=GetCategories(cat_service),
        favorites_store=favorites_store,
        **options,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the long-lived client, service and controller; tear them down on exit."""
    configure_logging()

    client = build_client()
    cat_service = HttpCatService(client, api_key=cat_api_key())
    controller = build_feed_controller(cat_service, SqlAlchemyFavoritesStore())

    app.state.cat_service = cat_service
    app.state.feed_controller = controller

    controller.start()
    logger.info("Cat feed started", extra={"base_url": str(client.base_url)})

    try:
        yield
    finally:
        await controller.close()
        await client.aclose()
        logger.info("Cat feed stopped")


def build_app() -> FastAPI:
    app = FastAPI(
        title="Cat Feed API",
        description="""
        Paginated, filterable feed of cat images backed by The Cat API.

        ## Features
        - Browse a random or filtered feed with infinite paging
        - Filter by breed, category, image size and breed info
        - Debounced breed search
        - Persistent favorites
        - Breed images, image lookup, upload and delete

        ## Error Handling
        All errors return structured JSON responses with error codes.
        Failures of the upstream cat API surface as 502/503.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(feed_router, prefix="/v1")
    app.include_router(images_router, prefix="/v1")

    return app


app = build_app()
