"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Callable
from pathlib import Path

import pytest

from actor_link.store import RelationStore


def build_store(
    movies: dict[int, list[int]],
    actors: dict[int, str] | None = None,
    titles: dict[int, str] | None = None,
) -> RelationStore:
    """
    Build an in-memory store with fixed local ids.

    Args:
        movies: movie_id -> cast (actor ids)
        actors: actor_id -> name; actors missing here are named "Actor <id>"
        titles: movie_id -> title; missing titles become "Movie <id>"
    """
    actors = dict(actors or {})
    titles = titles or {}
    for cast in movies.values():
        for actor_id in cast:
            actors.setdefault(actor_id, f"Actor {actor_id}")

    conn = sqlite3.connect(":memory:", check_same_thread=False, isolation_level=None)
    store = RelationStore(conn)
    store.setup()

    for actor_id, name in sorted(actors.items()):
        conn.execute(
            "INSERT INTO actors (actor_id, tmdb_actor_id, name) VALUES (?, ?, ?)",
            (actor_id, 10_000 + actor_id, name),
        )
    for movie_id, cast in movies.items():
        conn.execute(
            "INSERT INTO movies (movie_id, tmdb_movie_id, title) VALUES (?, ?, ?)",
            (movie_id, 20_000 + movie_id, titles.get(movie_id, f"Movie {movie_id}")),
        )
        for actor_id in cast:
            conn.execute(
                "INSERT INTO movie_actors (movie_id, actor_id) VALUES (?, ?)",
                (movie_id, actor_id),
            )
    return store


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def make_store() -> Callable[..., RelationStore]:
    """Factory for in-memory stores; every store built is closed afterwards."""
    stores: list[RelationStore] = []

    def _make(movies, actors=None, titles=None) -> RelationStore:
        store = build_store(movies, actors, titles)
        stores.append(store)
        return store

    yield _make

    for store in stores:
        store.close()


@pytest.fixture
def triangle_store(make_store) -> RelationStore:
    """Actors 1, 2, 3 all in movie 10; actor 4 has no movies."""
    return make_store({10: [1, 2, 3]}, actors={4: "Actor 4"})


@pytest.fixture
def chain_store(make_store) -> RelationStore:
    """1 -(10)- 2 -(11)- 3, no movie shared by 1 and 3."""
    return make_store({10: [1, 2], 11: [2, 3]})


@pytest.fixture
def movie_store(make_store) -> RelationStore:
    """A small named cast list for presentation and API tests."""
    return make_store(
        movies={
            10: [1, 2, 3],  # Fight Club
            11: [2, 4],     # Se7en
            12: [2, 5],     # Ocean's Eleven
            13: [4, 6],     # Driving Miss Daisy
            14: [2, 5],     # Ocean's Twelve
        },
        actors={
            1: "Edward Norton",
            2: "Brad Pitt",
            3: "Helena Bonham Carter",
            4: "Morgan Freeman",
            5: "George Clooney",
            6: "Jessica Tandy",
            7: "Lonely Actor",
        },
        titles={
            10: "Fight Club",
            11: "Se7en",
            12: "Ocean's Eleven",
            13: "Driving Miss Daisy",
            14: "Ocean's Twelve",
        },
    )
