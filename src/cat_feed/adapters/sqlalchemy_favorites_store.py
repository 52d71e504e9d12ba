"""SQLAlchemy implementation of FavoritesStore."""

from __future__ import annotations

import asyncio
from contextlib import AbstractContextManager
from typing import Callable

from sqlalchemy import select
from sqlalchemy.orm import Session

from cat_feed.adapters.broadcasting_favorites_store import BroadcastingFavoritesStore
from cat_feed.infra.db.models.preference import PreferenceRow
from cat_feed.infra.db.session import get_session

FAVORITES_KEY = "favorite_cats"


class SqlAlchemyFavoritesStore(BroadcastingFavoritesStore):
    """
    Durable favorites store backed by one key-value row.

    - The whole set lives under a single named key as a JSON list
    - Every toggle replaces the stored list wholesale
    - Ids are sorted on write so the stored value is deterministic
    - Async reads and writes run in a worker thread, never on the event loop
    """

    def __init__(
        self,
        session_scope: Callable[[], AbstractContextManager[Session]] = get_session,
        key: str = FAVORITES_KEY,
    ) -> None:
        """
        Initialize store with a session scope.

        Args:
            session_scope: Context manager factory yielding a session that
                commits on exit (defaults to the app-wide get_session)
            key: Name of the preference slot holding the favorites
        """
        super().__init__()
        self._session_scope = session_scope
        self._key = key

    async def _load(self) -> frozenset[str]:
        return await asyncio.to_thread(self._read)

    async def _save(self, favorite_ids: frozenset[str]) -> None:
        await asyncio.to_thread(self._write, favorite_ids)

    def _read(self) -> frozenset[str]:
        with self._session_scope() as session:
            value = session.execute(
                select(PreferenceRow.value).where(PreferenceRow.key == self._key)
            ).scalar_one_or_none()

        return frozenset(value or ())

    def _write(self, favorite_ids: frozenset[str]) -> None:
        with self._session_scope() as session:
            session.merge(PreferenceRow(key=self._key, value=sorted(favorite_ids)))
