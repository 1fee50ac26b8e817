"""
Fill the relation store with feature films and their casts from TMDB.

Scans a range of TMDB movie ids, keeps only feature films, and writes each
movie, its cast, and the movie/actor links. HTTP fetches run in a thread
pool; all database writes happen on the calling thread, one transaction per
batch.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path

import requests

from actor_link.config import (
    DATABASE_PATH,
    INGEST_BATCH_SIZE,
    INGEST_CONCURRENT_REQUESTS,
    INGEST_MOVIE_ID_END,
    INGEST_MOVIE_ID_START,
    database_exists,
    require_tmdb_api_key,
)
from actor_link.store.database import RelationStore
from actor_link.tmdb.client import TMDBClient, TMDBCredits, TMDBMovie, is_feature_film

logger = logging.getLogger(__name__)


@dataclass
class FetchedMovie:
    """A feature film and its cast, ready to be written."""

    movie: TMDBMovie
    credits: TMDBCredits


@dataclass
class PopulateStats:
    """
    Summary of a population run.

    Attributes:
        scanned: Movie ids checked
        inserted: Feature films written
        skipped: Ids that were missing, filtered out, or failed to fetch
        links: Movie/actor links written
    """

    scanned: int = 0
    inserted: int = 0
    skipped: int = 0
    links: int = 0


def fetch_feature_film(client: TMDBClient, movie_id: int) -> FetchedMovie | None:
    """
    Fetch a movie and its credits if it is an existing feature film.

    Fetch failures are logged and the movie is skipped, so one bad id
    never stops a long scan.

    Returns:
        FetchedMovie, or None if the id should not be ingested
    """
    try:
        if not client.movie_exists(movie_id):
            logger.debug(f"Movie ID {movie_id} does not exist")
            return None

        movie = client.get_movie_details(movie_id)
        if not is_feature_film(movie):
            logger.debug(f"Skipping non-feature film ID: {movie_id}")
            return None

        credits = client.get_movie_credits(movie_id)
    except (requests.RequestException, ValueError, KeyError) as e:
        logger.warning(f"Failed to fetch movie ID {movie_id}: {e}")
        return None

    logger.info(f"Processing feature film ID: {movie_id} ({movie.title})")
    return FetchedMovie(movie=movie, credits=credits)


def _write_batch(store: RelationStore, batch: list[FetchedMovie], stats: PopulateStats) -> None:
    """Write a batch of movies, their cast, and links in one transaction."""
    with store.transaction():
        for fetched in batch:
            movie_id = store.insert_movie(fetched.movie.id, fetched.movie.title)
            for person in fetched.credits.cast:
                actor_id = store.insert_actor(person.id, person.name, person.known_for_department)
                store.insert_movie_actor_link(movie_id, actor_id)
                stats.links += 1
            stats.inserted += 1
    logger.info(f"Wrote batch of {len(batch)} movies ({stats.inserted} total)")


def populate_database(
    store: RelationStore,
    client: TMDBClient,
    movie_ids: Iterable[int],
    concurrent_requests: int = INGEST_CONCURRENT_REQUESTS,
    batch_size: int = INGEST_BATCH_SIZE,
) -> PopulateStats:
    """
    Scan TMDB movie ids and store every feature film found.

    Args:
        store: Relation store (schema must already exist)
        client: TMDB client used from worker threads
        movie_ids: TMDB movie ids to scan
        concurrent_requests: Worker threads fetching from TMDB
        batch_size: Movies buffered before each write

    Returns:
        PopulateStats for the run

    Raises:
        sqlite3.Error: If a write fails (the current batch is rolled back)
    """
    stats = PopulateStats()
    batch: list[FetchedMovie] = []

    with ThreadPoolExecutor(max_workers=concurrent_requests) as executor:
        futures = [executor.submit(fetch_feature_film, client, movie_id) for movie_id in movie_ids]

        try:
            for future in as_completed(futures):
                stats.scanned += 1
                fetched = future.result()
                if fetched is None:
                    stats.skipped += 1
                    continue

                batch.append(fetched)
                if len(batch) >= batch_size:
                    _write_batch(store, batch, stats)
                    batch.clear()

            if batch:
                _write_batch(store, batch, stats)
        except BaseException:
            # Drop queued fetches; only the ones already running finish
            logger.warning(f"Population aborted after {stats.inserted} movies; cancelling pending fetches")
            executor.shutdown(wait=False, cancel_futures=True)
            raise

    logger.info(
        f"Database populated: {stats.inserted} feature films, {stats.links} links "
        f"({stats.skipped} of {stats.scanned} ids skipped)"
    )
    return stats


def ensure_database(
    path: Path = DATABASE_PATH,
    client_factory: Callable[[], TMDBClient] | None = None,
    movie_ids: Iterable[int] | None = None,
) -> RelationStore:
    """
    Open the relation store, building it from TMDB first if the file is missing.

    Args:
        path: Database file location
        client_factory: Builds the TMDB client (defaults to one using TMDB_API_KEY)
        movie_ids: Ids to scan when populating (defaults to the configured range)

    Raises:
        RuntimeError: If population is needed but TMDB_API_KEY is not set
    """
    if database_exists(path):
        store = RelationStore.open(path)
        store.setup()
        return store

    logger.info(f"Database not found at {path}. Setting up and populating database...")
    if client_factory is None:
        api_key = require_tmdb_api_key()
        client_factory = lambda: TMDBClient(api_key)  # noqa: E731

    if movie_ids is None:
        movie_ids = range(INGEST_MOVIE_ID_START, INGEST_MOVIE_ID_END)

    client = client_factory()
    store = RelationStore.open(path)
    try:
        store.setup()
        populate_database(store, client, movie_ids)
    except BaseException:
        store.close()
        raise
    finally:
        client.close()
    return store
