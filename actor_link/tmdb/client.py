"""
TMDB API client for discovering movies and their casts.

Uses a shared requests session with a minimum delay between calls and
retries transient failures (connection errors, timeouts, 429 and 5xx
responses) with exponential backoff.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field

import requests

from actor_link.config import (
    EXCLUDED_GENRE_IDS,
    TMDB_BASE_URL,
    TMDB_MAX_RETRIES,
    TMDB_REQUEST_DELAY,
    TMDB_RETRY_DELAY,
    TMDB_TIMEOUT,
    USER_AGENT,
)

logger = logging.getLogger(__name__)


@dataclass
class TMDBGenre:
    id: int
    name: str

    @classmethod
    def from_json(cls, data: dict) -> TMDBGenre:
        return cls(id=data["id"], name=data.get("name", ""))


@dataclass
class TMDBPerson:
    """
    A cast member as listed in a movie's credits.

    Attributes:
        id: TMDB person id
        name: Display name
        known_for_department: e.g. "Acting" (empty if TMDB omits it)
    """

    id: int
    name: str
    known_for_department: str = ""

    @classmethod
    def from_json(cls, data: dict) -> TMDBPerson:
        return cls(
            id=data["id"],
            name=data["name"],
            known_for_department=data.get("known_for_department") or "",
        )


@dataclass
class TMDBCredits:
    cast: list[TMDBPerson] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict) -> TMDBCredits:
        return cls(cast=[TMDBPerson.from_json(p) for p in data.get("cast", [])])


@dataclass
class TMDBMovie:
    """
    Movie details used to decide whether a title is a feature film.

    Attributes:
        id: TMDB movie id
        title: Display title
        adult: Flagged as adult content
        video: Direct-to-video release
        release_date: ISO date string, or None if TMDB has none
        genres: Genre list
    """

    id: int
    title: str
    adult: bool = False
    video: bool = False
    release_date: str | None = None
    genres: list[TMDBGenre] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict) -> TMDBMovie:
        return cls(
            id=data["id"],
            title=data["title"],
            adult=bool(data.get("adult", False)),
            video=bool(data.get("video", False)),
            # TMDB sends "" for unknown dates
            release_date=data.get("release_date") or None,
            genres=[TMDBGenre.from_json(g) for g in data.get("genres", [])],
        )


def is_feature_film(movie: TMDBMovie) -> bool:
    """
    Check whether a movie should be part of the actor graph.

    Excludes adult titles, video releases, unreleased/undated entries,
    TV movies and documentaries.
    """
    if movie.adult or movie.video or movie.release_date is None:
        return False
    return not any(genre.id in EXCLUDED_GENRE_IDS for genre in movie.genres)


class TMDBClient:
    """
    Minimal TMDB v3 client: existence checks, movie details, and credits.

    Safe to share between threads: the rate limiter is locked and
    requests.Session handles concurrent use for simple GET/HEAD calls.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = TMDB_BASE_URL,
        rate_limit: float = TMDB_REQUEST_DELAY,
        timeout: float = TMDB_TIMEOUT,
        max_retries: int = TMDB_MAX_RETRIES,
        retry_delay: float = TMDB_RETRY_DELAY,
        session: requests.Session | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            api_key: TMDB v3 API key
            base_url: API root, without trailing slash
            rate_limit: Minimum seconds between requests
            timeout: Per-request timeout in seconds
            max_retries: Attempts per request before giving up (at least 1)
            retry_delay: Base backoff in seconds, doubled after each failure
            session: Pre-built session (tests inject fakes here)
        """
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")

        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._rate_limit = rate_limit
        self._timeout = timeout
        self._max_retries = max_retries
        self._retry_delay = retry_delay

        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": USER_AGENT})

        self._rate_lock = threading.Lock()
        self._last_request_time: float = 0

    def _wait_for_rate_limit(self) -> None:
        """Ensure we don't exceed rate limits."""
        with self._rate_lock:
            elapsed = time.time() - self._last_request_time
            if elapsed < self._rate_limit:
                time.sleep(self._rate_limit - elapsed)
            self._last_request_time = time.time()

    def _request(self, method: str, path: str) -> requests.Response:
        """
        Send a request, retrying transient failures with backoff.

        Client errors other than 429 are returned to the caller untouched.

        Raises:
            requests.RequestException: The last error once retries run out
        """
        url = f"{self._base_url}/{path}"
        last_error: requests.RequestException | None = None

        for attempt in range(self._max_retries):
            self._wait_for_rate_limit()
            try:
                response = self._session.request(
                    method,
                    url,
                    params={"api_key": self._api_key},
                    timeout=self._timeout,
                )
                if response.status_code == 429 or response.status_code >= 500:
                    response.raise_for_status()
                return response
            except requests.RequestException as e:
                last_error = e
                if attempt < self._max_retries - 1:
                    wait_time = self._retry_delay * 2 ** attempt
                    logger.debug(
                        f"{method} {path} failed ({e}), waiting {wait_time}s "
                        f"before retry {attempt + 1}/{self._max_retries - 1}"
                    )
                    time.sleep(wait_time)

        logger.warning(f"{method} {path} failed after {self._max_retries} attempts")
        raise last_error

    def movie_exists(self, movie_id: int) -> bool:
        """Check whether TMDB knows a movie id (HEAD request)."""
        return self._request("HEAD", f"movie/{movie_id}").ok

    def get_movie_details(self, movie_id: int) -> TMDBMovie:
        """
        Fetch movie details.

        Raises:
            requests.RequestException: If the fetch fails
        """
        response = self._request("GET", f"movie/{movie_id}")
        response.raise_for_status()
        return TMDBMovie.from_json(response.json())

    def get_movie_credits(self, movie_id: int) -> TMDBCredits:
        """
        Fetch the cast list of a movie.

        Raises:
            requests.RequestException: If the fetch fails
        """
        response = self._request("GET", f"movie/{movie_id}/credits")
        response.raise_for_status()
        return TMDBCredits.from_json(response.json())

    def close(self) -> None:
        self._session.close()
