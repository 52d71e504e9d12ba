"""The feed state machine.

Owns one FeedState, accepts typed events, runs fetches as asyncio tasks and
publishes a new immutable snapshot after every transition.

Concurrency rules:
- All mutation happens on the event loop thread, in dispatch() or in task
  continuations, so no locks are needed.
- At most one feed fetch is in flight. Load-more is ignored while any feed
  fetch runs; a reset cancels whatever fetch was running.
- At most one breed search or full breed-list load is live. Each one
  cancels its predecessor and carries a generation number that is
  re-checked after the debounce and after the fetch, so a superseded
  request never writes state.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Callable, Coroutine, Iterable

from cat_feed.domain.cat import Breed, Cat, Category, ImageOrder, ImageSize
from cat_feed.domain.errors import DomainError
from cat_feed.ports.favorites_store import FavoritesStore
from cat_feed.presentation.error_messages import user_message
from cat_feed.presentation.events import (
    ChangeImageSize,
    ClearError,
    FeedEvent,
    LoadBreeds,
    LoadCategories,
    LoadMoreCats,
    LoadRandomCats,
    Refresh,
    SearchBreeds,
    SelectBreed,
    SelectCategory,
    ToggleFavorite,
    ToggleShowOnlyWithBreeds,
)
from cat_feed.presentation.state import FeedFilters, FeedPhase, FeedState
from cat_feed.infra.broadcast import StateBroadcast
from cat_feed.use_cases.get_breeds import BreedSortKey, GetBreeds, GetBreedsRequest
from cat_feed.use_cases.get_categories import (
    CategorySortKey,
    GetCategories,
    GetCategoriesRequest,
)
from cat_feed.use_cases.get_random_cats import GetRandomCats, GetRandomCatsRequest
from cat_feed.use_cases.search_breeds import SearchBreeds as SearchBreedsUseCase

logger = logging.getLogger(__name__)

CATS_PER_PAGE = 10
SEARCH_DEBOUNCE_SECONDS = 0.5
BREEDS_LIMIT = 50
LARGE_MIN_WIDTH = 800
LARGE_MIN_HEIGHT = 600


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_feed_request(state: FeedState, page_size: int = CATS_PER_PAGE) -> GetRandomCatsRequest:
    """
    Derive the fetch parameters for the next feed page from the state.

    Filtered feeds use ASC order so page N+1 continues page N; unfiltered
    feeds are random.
    """
    filters = state.filters
    large = filters.image_size is ImageSize.LARGE

    return GetRandomCatsRequest(
        limit=page_size,
        size=filters.image_size,
        page=state.current_page,
        breed_ids=filters.selected_breed.id if filters.selected_breed else None,
        category_ids=str(filters.selected_category.id) if filters.selected_category else None,
        order=ImageOrder.ASC if filters.is_active else ImageOrder.RANDOM,
        prefer_breeds_with_info=filters.show_only_with_breeds,
        min_width=LARGE_MIN_WIDTH if large else None,
        min_height=LARGE_MIN_HEIGHT if large else None,
        include_breeds=True,
        include_categories=True,
    )


def has_more_data(fetched: int, filters: FeedFilters, page_size: int = CATS_PER_PAGE) -> bool:
    """
    Guess whether another page exists.

    Filtered queries come back sparse even when more data exists (the
    post-filters drop items), so they only need half a page to keep going.
    Unfiltered queries need a full page.
    """
    if filters.is_active:
        return fetched >= page_size // 2
    return fetched == page_size


class FeedController:
    """
    State-owning controller for the cat feed screen.

    Usage:
        async with FeedController(...) as controller:
            task = controller.dispatch(SelectBreed(breed))
            await task
            controller.state.items
    """

    def __init__(
        self,
        get_random_cats: GetRandomCats,
        get_breeds: GetBreeds,
        search_breeds: SearchBreedsUseCase,
        get_categories: GetCategories,
        favorites_store: FavoritesStore,
        *,
        page_size: int = CATS_PER_PAGE,
        search_debounce: float = SEARCH_DEBOUNCE_SECONDS,
        breeds_limit: int = BREEDS_LIMIT,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._get_random_cats = get_random_cats
        self._get_breeds = get_breeds
        self._search_breeds = search_breeds
        self._get_categories = get_categories
        self._favorites_store = favorites_store

        self._page_size = page_size
        self._search_debounce = search_debounce
        self._breeds_limit = breeds_limit
        self._clock = clock

        self._broadcast: StateBroadcast[FeedState] = StateBroadcast(FeedState())
        self._tasks: set[asyncio.Task[Any]] = set()
        self._feed_task: asyncio.Task[None] | None = None
        self._search_task: asyncio.Task[None] | None = None
        self._search_generation = 0
        self._favorites_task: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def state(self) -> FeedState:
        return self._broadcast.value

    def subscribe(self) -> AsyncIterator[FeedState]:
        """Yield the current snapshot, then every new one."""
        return self._broadcast.subscribe()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> asyncio.Task[None]:
        """
        Mirror the favorites store and load the initial data.

        Returns:
            A task that finishes once cats, breeds and categories have all
            settled (successfully or not)
        """
        if self._favorites_task is None:
            self._favorites_task = self._spawn(self._mirror_favorites())

        initial = [
            self.dispatch(LoadRandomCats()),
            self.dispatch(LoadBreeds()),
            self.dispatch(LoadCategories()),
        ]
        return self._spawn(settle(task for task in initial if task is not None))

    async def close(self) -> None:
        """Cancel every outstanding task and wait for them to unwind."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._favorites_task = None
        logger.debug("Feed controller closed", extra={"cancelled_tasks": len(tasks)})

    async def __aenter__(self) -> FeedController:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def dispatch(self, event: FeedEvent) -> asyncio.Task[None] | None:
        """
        Apply an event.

        The synchronous part of the transition is applied before this
        returns. Anything that needs I/O runs in the returned task.

        Returns:
            The task completing the transition, or None when the event was
            handled synchronously or ignored
        """
        logger.debug("Feed event", extra={"event": type(event).__name__})

        if isinstance(event, LoadRandomCats):
            return self._reset_feed()
        if isinstance(event, Refresh):
            return self._reset_feed(has_more_data=True)
        if isinstance(event, LoadMoreCats):
            return self._load_more()
        if isinstance(event, SelectBreed):
            return self._change_filters(selected_breed=event.breed)
        if isinstance(event, SelectCategory):
            return self._change_filters(selected_category=event.category)
        if isinstance(event, ChangeImageSize):
            return self._change_filters(image_size=event.size)
        if isinstance(event, ToggleShowOnlyWithBreeds):
            return self._change_filters(show_only_with_breeds=event.show)
        if isinstance(event, SearchBreeds):
            return self._search(event.query)
        if isinstance(event, LoadBreeds):
            if self.state.is_searching:
                self._update(is_searching=False)
            return self._reload_breeds()
        if isinstance(event, LoadCategories):
            return self._spawn(self._load_categories())
        if isinstance(event, ToggleFavorite):
            return self._spawn(self._toggle_favorite(event.cat_id))
        if isinstance(event, ClearError):
            self._update(error_message=None)
            return None

        raise TypeError(f"Unsupported feed event: {event!r}")

    # ------------------------------------------------------------------
    # Feed paging
    # ------------------------------------------------------------------

    def _change_filters(self, **filter_changes: Any) -> asyncio.Task[None]:
        filters = replace(self.state.filters, **filter_changes)
        logger.info("Feed filters changed", extra={"filters": filters.summary})
        return self._reset_feed(filters=filters, has_more_data=True)

    def _reset_feed(self, **changes: Any) -> asyncio.Task[None]:
        _cancel(self._feed_task)
        state = self._update(
            phase=FeedPhase.LOADING_INITIAL,
            error_message=None,
            current_page=0,
            **changes,
        )
        return self._start_feed_fetch(state, append=False)

    def _load_more(self) -> asyncio.Task[None] | None:
        state = self.state
        if state.phase in (FeedPhase.LOADING_MORE, FeedPhase.LOADING_INITIAL) or not state.has_more_data:
            logger.debug(
                "Ignoring load more",
                extra={"phase": state.phase.value, "has_more_data": state.has_more_data},
            )
            return None

        state = self._update(phase=FeedPhase.LOADING_MORE)
        return self._start_feed_fetch(state, append=True)

    def _start_feed_fetch(self, state: FeedState, *, append: bool) -> asyncio.Task[None]:
        request = build_feed_request(state, self._page_size)
        self._feed_task = self._spawn(self._fetch_page(request, state, append=append))
        return self._feed_task

    async def _fetch_page(
        self, request: GetRandomCatsRequest, started: FeedState, *, append: bool
    ) -> None:
        try:
            cats = await self._get_random_cats.execute(request)
        except Exception as exc:
            if asyncio.current_task() is not self._feed_task:
                return
            self._log_failure("Failed to load cats", exc, page=request.page)
            self._update(phase=FeedPhase.FAILED, error_message=user_message(exc))
            return

        # A newer reset owns the feed now
        if asyncio.current_task() is not self._feed_task:
            return

        self._apply_page(cats, started, append=append)

    def _apply_page(self, cats: list[Cat], started: FeedState, *, append: bool) -> None:
        items = self.state.items + tuple(cats) if append else tuple(cats)
        more = has_more_data(len(cats), started.filters, self._page_size)

        self._update(
            items=items,
            phase=FeedPhase.READY,
            error_message=None,
            has_more_data=more,
            current_page=started.current_page + 1,
            total_cats_loaded=len(items),
            last_refresh_time=self._clock(),
        )
        logger.info(
            "Loaded cats",
            extra={
                "fetched": len(cats),
                "total": len(items),
                "page": started.current_page,
                "append": append,
                "has_more_data": more,
            },
        )

    # ------------------------------------------------------------------
    # Breeds, categories and search
    # ------------------------------------------------------------------

    def _search(self, query: str) -> asyncio.Task[None]:
        self._update(search_query=query, is_searching=bool(query.strip()))

        if not query.strip():
            return self._reload_breeds()

        _cancel(self._search_task)
        self._search_generation += 1
        self._search_task = self._spawn(self._run_search(query, self._search_generation))
        return self._search_task

    def _reload_breeds(self) -> asyncio.Task[None]:
        # The full list takes a search generation too, so it supersedes and is
        # superseded by searches
        _cancel(self._search_task)
        self._search_generation += 1
        self._search_task = self._spawn(self._load_breeds(self._search_generation))
        return self._search_task

    async def _run_search(self, query: str, generation: int) -> None:
        await asyncio.sleep(self._search_debounce)
        if generation != self._search_generation:
            return

        try:
            breeds = await self._search_breeds.execute(query)
        except Exception as exc:
            self._log_failure("Failed to search breeds", exc, level=logging.WARNING, query=query)
            if generation == self._search_generation:
                self._update(is_searching=False)
            return

        if generation != self._search_generation:
            logger.debug("Discarding superseded breed search", extra={"query": query})
            return

        self._update(breeds=tuple(breeds), is_searching=False)
        logger.info("Breed search finished", extra={"query": query, "count": len(breeds)})

    async def _load_breeds(self, generation: int) -> None:
        request = GetBreedsRequest(limit=self._breeds_limit, sort_by=BreedSortKey.NAME)
        try:
            breeds = await self._get_breeds.execute(request)
        except Exception as exc:
            # Supplementary data: keep the previous list, no user-visible error
            self._log_failure("Failed to load breeds", exc, level=logging.WARNING)
            return

        if generation != self._search_generation:
            logger.debug("Discarding superseded breed list")
            return

        self._update(breeds=tuple(breeds))
        logger.info("Loaded breeds", extra={"count": len(breeds)})

    async def _load_categories(self) -> None:
        request = GetCategoriesRequest(sort_by=CategorySortKey.NAME)
        try:
            categories = await self._get_categories.execute(request)
        except Exception as exc:
            self._log_failure("Failed to load categories", exc, level=logging.WARNING)
            return

        self._update(categories=tuple(categories))
        logger.info("Loaded categories", extra={"count": len(categories)})

    def find_breed(self, breed_id: str) -> Breed | None:
        return next((b for b in self.state.breeds if b.id == breed_id), None)

    def find_category(self, category_id: int) -> Category | None:
        return next((c for c in self.state.categories if c.id == category_id), None)

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------

    async def _toggle_favorite(self, cat_id: str) -> None:
        try:
            await self._favorites_store.toggle(cat_id)
        except Exception as exc:
            self._log_failure("Failed to toggle favorite", exc, cat_id=cat_id)

    async def _mirror_favorites(self) -> None:
        try:
            async for favorite_ids in self._favorites_store.observe():
                if favorite_ids != self.state.favorite_ids:
                    self._update(favorite_ids=favorite_ids)
        except Exception as exc:
            self._log_failure("Favorites subscription ended", exc)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _update(self, **changes: Any) -> FeedState:
        state = replace(self.state, **changes)
        self._broadcast.publish(state)
        return state

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @staticmethod
    def _log_failure(message: str, exc: Exception, level: int = logging.ERROR, **context: Any) -> None:
        # Classified errors are expected; anything else gets a traceback
        if isinstance(exc, DomainError):
            logger.log(level, message, extra={"error_code": exc.error_code, "error": exc.message, **context})
        else:
            logger.log(level, message, exc_info=exc, extra={"error_type": type(exc).__name__, **context})


def _cancel(task: asyncio.Task[Any] | None) -> None:
    if task is not None and not task.done():
        task.cancel()


async def settle(tasks: Iterable[asyncio.Task[Any]]) -> None:
    """Wait for tasks to finish without propagating their errors or cancellation."""
    pending = set(tasks)
    if pending:
        await asyncio.wait(pending)
