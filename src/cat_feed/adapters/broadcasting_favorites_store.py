from __future__ import annotations

import asyncio
import logging
from abc import abstractmethod
from typing import AsyncIterator

from cat_feed.infra.broadcast import StateBroadcast
from cat_feed.ports.favorites_store import FavoritesStore

logger = logging.getLogger(__name__)


class BroadcastingFavoritesStore(FavoritesStore):
    """
    Shared toggle/observe logic for favorites stores.

    Subclasses only say how to read and write the whole set. Toggling is a
    read-modify-write followed by a whole-set replacement, and every
    subscriber sees the new set.

    The async paths go through _load()/_save(). They call _read()/_write()
    directly by default; stores doing blocking I/O override them to run off
    the event loop.
    """

    def __init__(self) -> None:
        self._broadcast: StateBroadcast[frozenset[str]] | None = None
        self._toggle_lock = asyncio.Lock()

    @abstractmethod
    def _read(self) -> frozenset[str]: ...

    @abstractmethod
    def _write(self, favorite_ids: frozenset[str]) -> None: ...

    async def _load(self) -> frozenset[str]:
        return self._read()

    async def _save(self, favorite_ids: frozenset[str]) -> None:
        self._write(favorite_ids)

    def current(self) -> frozenset[str]:
        return self._read()

    async def observe(self) -> AsyncIterator[frozenset[str]]:
        broadcast = await self._get_broadcast()
        subscription = broadcast.subscribe()
        try:
            async for favorite_ids in subscription:
                yield favorite_ids
        finally:
            await subscription.aclose()

    async def toggle(self, cat_id: str) -> frozenset[str]:
        # Serialized so two toggles never read the same starting set
        async with self._toggle_lock:
            current = await self._load()

            if cat_id in current:
                updated = current - {cat_id}
            else:
                updated = current | {cat_id}

            await self._save(updated)

        logger.debug(
            "Favorite toggled",
            extra={"cat_id": cat_id, "favorite": cat_id in updated, "count": len(updated)},
        )

        if self._broadcast is None:
            self._broadcast = StateBroadcast(updated)
        else:
            self._broadcast.publish(updated)
        return updated

    async def _get_broadcast(self) -> StateBroadcast[frozenset[str]]:
        # Seeded from storage on first use, then kept current by toggle()
        if self._broadcast is None:
            initial = await self._load()
            if self._broadcast is None:
                self._broadcast = StateBroadcast(initial)
        return self._broadcast
