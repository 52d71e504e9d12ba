from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator


class FavoritesStore(ABC):
    """
    Port for the persistent set of favorited cat ids.

    Single writer path (toggle), any number of readers via observe().
    """

    @abstractmethod
    def current(self) -> frozenset[str]:
        """Return the favorites set as currently stored."""
        ...

    @abstractmethod
    def observe(self) -> AsyncIterator[frozenset[str]]:
        """
        Subscribe to the favorites set.

        Yields the current set immediately, then the whole set again after
        every change. The iterator never ends on its own; close it (or
        cancel the consuming task) to unsubscribe.
        """
        ...

    @abstractmethod
    async def toggle(self, cat_id: str) -> frozenset[str]:
        """
        Add cat_id if absent, remove it if present.

        Returns:
            The new favorites set (already written and broadcast)
        """
        ...
