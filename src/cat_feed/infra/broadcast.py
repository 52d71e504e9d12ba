from __future__ import annotations

import asyncio
from typing import AsyncIterator, Generic, TypeVar

T = TypeVar("T")


class StateBroadcast(Generic[T]):
    """
    Holds the latest value of something and fans every new value out to
    subscribers.

    Each subscriber gets its own unbounded queue, so a slow reader never
    blocks publish() and never misses an intermediate value. The queue lives
    until the subscription is closed: consumers must aclose() the iterator
    or cancel the task iterating it, otherwise every publish keeps growing
    a queue nobody reads.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._subscribers: set[asyncio.Queue[T]] = set()

    @property
    def value(self) -> T:
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(self, value: T) -> None:
        self._value = value
        for queue in self._subscribers:
            queue.put_nowait(value)

    async def subscribe(self) -> AsyncIterator[T]:
        """
        Yield the current value, then every published value.

        Unsubscribes when the generator is closed, including when the
        consuming task is cancelled mid-iteration.
        """
        queue: asyncio.Queue[T] = asyncio.Queue()
        self._subscribers.add(queue)
        try:
            yield self._value
            while True:
                yield await queue.get()
        finally:
            self._subscribers.discard(queue)
