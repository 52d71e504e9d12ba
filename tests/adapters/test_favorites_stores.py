"""
Test suite for the favorites stores.

Both stores share the toggle/observe contract; the SQLAlchemy store also
persists across instances that share an engine.
"""

from __future__ import annotations

import asyncio
import threading
from contextlib import contextmanager
from typing import Iterator

import pytest
from sqlalchemy import Engine, create_engine, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from cat_feed.adapters.broadcasting_favorites_store import BroadcastingFavoritesStore
from cat_feed.adapters.in_memory_favorites_store import InMemoryFavoritesStore
from cat_feed.adapters.sqlalchemy_favorites_store import FAVORITES_KEY, SqlAlchemyFavoritesStore
from cat_feed.infra.db.models import Base, PreferenceRow


@pytest.fixture()
def engine() -> Iterator[Engine]:
    """In-memory SQLite shared by every connection in the test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture(params=["memory", "sqlalchemy"])
def store(request: pytest.FixtureRequest, session_factory: sessionmaker) -> BroadcastingFavoritesStore:
    """Each contract test runs against both implementations."""
    if request.param == "memory":
        return InMemoryFavoritesStore()
    return SqlAlchemyFavoritesStore(session_scope=session_factory.begin)


# ==============================================================================
# Toggle contract
# ==============================================================================


async def test_toggle_adds_then_removes(store: BroadcastingFavoritesStore) -> None:
    """Toggling twice returns to the original set."""
    assert await store.toggle("abc") == frozenset({"abc"})
    assert store.current() == frozenset({"abc"})

    assert await store.toggle("abc") == frozenset()
    assert store.current() == frozenset()


async def test_toggles_of_distinct_ids_commute(store: BroadcastingFavoritesStore) -> None:
    """The final set does not depend on toggle order."""
    await store.toggle("a")
    await store.toggle("b")
    forward = store.current()

    await store.toggle("a")
    await store.toggle("b")
    await store.toggle("b")
    await store.toggle("a")

    assert forward == store.current() == frozenset({"a", "b"})


async def test_concurrent_toggles_both_land(store: BroadcastingFavoritesStore) -> None:
    """Overlapping toggles are serialized, so neither write is lost."""
    await asyncio.gather(store.toggle("a"), store.toggle("b"), store.toggle("c"))

    assert store.current() == frozenset({"a", "b", "c"})


async def test_observe_yields_current_then_every_change(store: BroadcastingFavoritesStore) -> None:
    """Subscribers get the current set, then the whole set after each toggle."""
    await store.toggle("a")
    stream = store.observe()

    assert await anext(stream) == frozenset({"a"})

    await store.toggle("b")
    await store.toggle("a")

    assert await anext(stream) == frozenset({"a", "b"})
    assert await anext(stream) == frozenset({"b"})
    await stream.aclose()


async def test_every_subscriber_sees_changes(store: BroadcastingFavoritesStore) -> None:
    first = store.observe()
    second = store.observe()
    await anext(first)
    await anext(second)

    await store.toggle("x")

    assert await anext(first) == frozenset({"x"})
    assert await anext(second) == frozenset({"x"})
    await first.aclose()
    await second.aclose()


# ==============================================================================
# Persistence
# ==============================================================================


async def test_sqlalchemy_store_persists_across_instances(session_factory: sessionmaker) -> None:
    """A new store instance on the same database sees earlier toggles."""
    writer = SqlAlchemyFavoritesStore(session_scope=session_factory.begin)
    await writer.toggle("b")
    await writer.toggle("a")

    reader = SqlAlchemyFavoritesStore(session_scope=session_factory.begin)

    assert reader.current() == frozenset({"a", "b"})
    assert await anext(reader.observe()) == frozenset({"a", "b"})


async def test_sqlalchemy_store_writes_sorted_list(session_factory: sessionmaker) -> None:
    """The stored value is a sorted JSON list under the favorites key."""
    store = SqlAlchemyFavoritesStore(session_scope=session_factory.begin)
    await store.toggle("zeta")
    await store.toggle("alpha")

    with session_factory() as session:
        value = session.execute(
            select(PreferenceRow.value).where(PreferenceRow.key == FAVORITES_KEY)
        ).scalar_one()

    assert value == ["alpha", "zeta"]


async def test_sqlalchemy_store_io_runs_off_the_event_loop(session_factory: sessionmaker) -> None:
    """Toggle and observe open their sessions in a worker thread."""
    threads: list[int] = []

    @contextmanager
    def recording_scope() -> Iterator[Session]:
        threads.append(threading.get_ident())
        with session_factory.begin() as session:
            yield session

    await SqlAlchemyFavoritesStore(session_scope=recording_scope).toggle("a")
    stream = SqlAlchemyFavoritesStore(session_scope=recording_scope).observe()
    assert await anext(stream) == frozenset({"a"})
    await stream.aclose()

    # read + write for the toggle, one read to seed the subscription
    assert len(threads) == 3
    assert threading.get_ident() not in threads


async def test_sqlalchemy_store_empty_database(session_factory: sessionmaker) -> None:
    assert SqlAlchemyFavoritesStore(session_scope=session_factory.begin).current() == frozenset()


async def test_in_memory_store_initial_ids() -> None:
    assert InMemoryFavoritesStore(["a", "b"]).current() == frozenset({"a", "b"})
