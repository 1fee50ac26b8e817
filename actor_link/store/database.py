"""
SQLite relation store for actors, movies, and the links between them.

Usage:
    from actor_link.store import RelationStore

    with RelationStore.open("actor_link.db") as store:
        store.setup()
        actor_id = store.actor_id_by_name("Brad Pitt")
        movie_ids = store.movie_ids_for_actor(actor_id)

Lookups never raise for unknown ids or names: they return None or an empty
collection. Only ``sqlite3.Error`` escapes, unchanged.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Schema DDL
# ---------------------------------------------------------------------------

_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS actors (
    actor_id             INTEGER PRIMARY KEY AUTOINCREMENT,
    tmdb_actor_id        INTEGER UNIQUE NOT NULL,
    name                 TEXT NOT NULL,
    known_for_department TEXT
);

CREATE TABLE IF NOT EXISTS movies (
    movie_id      INTEGER PRIMARY KEY AUTOINCREMENT,
    tmdb_movie_id INTEGER UNIQUE NOT NULL,
    title         TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS movie_actors (
    movie_actor_id INTEGER PRIMARY KEY AUTOINCREMENT,
    movie_id       INTEGER NOT NULL,
    actor_id       INTEGER NOT NULL,
    FOREIGN KEY (movie_id) REFERENCES movies(movie_id),
    FOREIGN KEY (actor_id) REFERENCES actors(actor_id)
);

CREATE INDEX IF NOT EXISTS idx_actors_name ON actors(name);
CREATE INDEX IF NOT EXISTS idx_movie_actors_actor ON movie_actors(actor_id);
CREATE INDEX IF NOT EXISTS idx_movie_actors_movie ON movie_actors(movie_id);
"""


class RelationStore:
    """
    Thin query layer over the actor/movie SQLite database.

    One connection is shared by every caller; statements are serialized
    behind a lock so a single store can back a threaded web server.

    Attributes:
        path: Database location (":memory:" for an in-memory store)
    """

    def __init__(self, connection: sqlite3.Connection, path: str = ":memory:") -> None:
        self._conn = connection
        self._lock = threading.RLock()
        self.path = path

    @classmethod
    def open(cls, path: str | Path) -> RelationStore:
        """Open (or create) a database file and wrap it."""
        path = str(path)
        logger.debug(f"Opening relation store at {path}")
        conn = sqlite3.connect(path, check_same_thread=False, isolation_level=None)
        conn.execute("PRAGMA foreign_keys = ON")
        return cls(conn, path)

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def __enter__(self) -> RelationStore:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"RelationStore(path={self.path!r})"

    # =========================================================================
    # Schema & Transactions
    # =========================================================================

    def setup(self) -> None:
        """Create tables and indexes if they don't exist yet."""
        with self._lock:
            self._conn.executescript(_SCHEMA_SQL)
        logger.debug("Relation store schema ready")

    @contextmanager
    def transaction(self) -> Iterator[RelationStore]:
        """
        Run a block of writes atomically.

        Commits when the block finishes, rolls back and re-raises if it fails.
        The store lock is held for the whole block.
        """
        with self._lock:
            self._conn.execute("BEGIN")
            try:
                yield self
            except BaseException:
                self._conn.execute("ROLLBACK")
                raise
            self._conn.execute("COMMIT")

    # =========================================================================
    # Writes (ingestion only)
    # =========================================================================

    def insert_actor(
        self, tmdb_actor_id: int, name: str, known_for_department: str | None = None
    ) -> int:
        """Insert an actor unless its TMDB id is known; return the local actor id."""
        with self._lock:
            self._conn.execute(
                "INSERT OR IGNORE INTO actors (tmdb_actor_id, name, known_for_department) "
                "VALUES (?, ?, ?)",
                (tmdb_actor_id, name, known_for_department),
            )
            row = self._conn.execute(
                "SELECT actor_id FROM actors WHERE tmdb_actor_id = ?", (tmdb_actor_id,)
            ).fetchone()
        return row[0]

    def insert_movie(self, tmdb_movie_id: int, title: str) -> int:
        """Insert a movie unless its TMDB id is known; return the local movie id."""
        with self._lock:
            self._conn.execute(
                "INSERT OR IGNORE INTO movies (tmdb_movie_id, title) VALUES (?, ?)",
                (tmdb_movie_id, title),
            )
            row = self._conn.execute(
                "SELECT movie_id FROM movies WHERE tmdb_movie_id = ?", (tmdb_movie_id,)
            ).fetchone()
        return row[0]

    def insert_movie_actor_link(self, movie_id: int, actor_id: int) -> None:
        """Record that an actor appears in a movie."""
        with self._lock:
            self._conn.execute(
                "INSERT INTO movie_actors (movie_id, actor_id) VALUES (?, ?)",
                (movie_id, actor_id),
            )

    # =========================================================================
    # Point Lookups
    # =========================================================================

    def actor_id_by_name(self, name: str) -> int | None:
        """Get actor id for an exact display name, or None if not found."""
        with self._lock:
            row = self._conn.execute(
                "SELECT actor_id FROM actors WHERE name = ? ORDER BY actor_id LIMIT 1",
                (name,),
            ).fetchone()
        return row[0] if row else None

    def actor_name_by_id(self, actor_id: int) -> str | None:
        """Get display name for an actor id, or None if not found."""
        with self._lock:
            row = self._conn.execute(
                "SELECT name FROM actors WHERE actor_id = ?", (actor_id,)
            ).fetchone()
        return row[0] if row else None

    # =========================================================================
    # Set Lookups
    # =========================================================================

    def movie_ids_for_actor(self, actor_id: int) -> set[int]:
        """Get ids of every movie the actor appears in."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT movie_id FROM movie_actors WHERE actor_id = ?", (actor_id,)
            ).fetchall()
        return {row[0] for row in rows}

    def actor_ids_for_movie(self, movie_id: int) -> set[int]:
        """Get ids of every actor credited in the movie."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT actor_id FROM movie_actors WHERE movie_id = ?", (movie_id,)
            ).fetchall()
        return {row[0] for row in rows}

    def movie_titles_by_ids(self, movie_ids: Iterable[int]) -> dict[int, str]:
        """Get titles for a batch of movie ids. Unknown ids are left out."""
        ids = list(movie_ids)
        if not ids:
            return {}

        placeholders = ", ".join("?" for _ in ids)
        with self._lock:
            rows = self._conn.execute(
                f"SELECT movie_id, title FROM movies WHERE movie_id IN ({placeholders})",
                ids,
            ).fetchall()
        return {movie_id: title for movie_id, title in rows}

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def counts(self) -> dict[str, int]:
        """Row counts per table."""
        with self._lock:
            return {
                table: self._conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
                for table in ("actors", "movies", "movie_actors")
            }
