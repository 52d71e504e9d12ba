from __future__ import annotations

from typing import Iterable

from cat_feed.adapters.broadcasting_favorites_store import BroadcastingFavoritesStore


class InMemoryFavoritesStore(BroadcastingFavoritesStore):
    """
    Process-local favorites store.

    Canonical contract implementation for tests; nothing survives a restart.
    """

    def __init__(self, initial: Iterable[str] = ()) -> None:
        super().__init__()
        self._favorite_ids = frozenset(initial)

    def _read(self) -> frozenset[str]:
        return self._favorite_ids

    def _write(self, favorite_ids: frozenset[str]) -> None:
        self._favorite_ids = favorite_ids
