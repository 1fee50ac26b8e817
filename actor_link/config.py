"""
Configuration constants for the Actor Link project.

All paths, settings, and tunable parameters are defined here.
API keys are loaded from environment variables - never hardcode secrets.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# =============================================================================
# Path Configuration
# =============================================================================

# Project root is parent of actor_link/
PROJECT_ROOT = Path(__file__).parent.parent

# Pick up TMDB_API_KEY and friends from a local .env file
load_dotenv(PROJECT_ROOT / ".env")

# SQLite relation store (actors, movies, movie_actors)
DATABASE_PATH = Path(os.environ.get("ACTOR_LINK_DB", PROJECT_ROOT / "actor_link.db"))

# =============================================================================
# TMDB Configuration
# =============================================================================

TMDB_API_KEY = os.environ.get("TMDB_API_KEY")
TMDB_BASE_URL = "https://api.themoviedb.org/3"

# Request timeout in seconds
TMDB_TIMEOUT = 10

# Rate limiting: minimum seconds between requests
# Set to 0 for max speed; TMDB allows roughly 40 requests/second
TMDB_REQUEST_DELAY = float(os.environ.get("TMDB_REQUEST_DELAY", "0.0"))

# Retry settings: wait RETRY_DELAY * 2**attempt between attempts
TMDB_MAX_RETRIES = 3
TMDB_RETRY_DELAY = 1.0

# Genres that never count as feature films
TV_MOVIE_GENRE_ID = 10770
DOCUMENTARY_GENRE_ID = 99
EXCLUDED_GENRE_IDS = frozenset({TV_MOVIE_GENRE_ID, DOCUMENTARY_GENRE_ID})

# User agent for requests (be a good citizen)
USER_AGENT = "ActorLink/0.1 (movie co-star path finder)"

# =============================================================================
# Ingestion Configuration
# =============================================================================

# TMDB movie ids scanned by a default population run (end is exclusive)
INGEST_MOVIE_ID_START = 232000
INGEST_MOVIE_ID_END = 262000

# Parallel TMDB fetches
INGEST_CONCURRENT_REQUESTS = 10

# Movies written per insert batch
INGEST_BATCH_SIZE = 50

# =============================================================================
# Search Configuration
# =============================================================================

# Cache movie/actor lookups for the duration of one search
SEARCH_MEMOIZE = os.environ.get("ACTOR_LINK_MEMOIZE", "1").lower() not in ("0", "false", "no")

# =============================================================================
# Server Configuration
# =============================================================================

SERVER_HOST = os.environ.get("ACTOR_LINK_HOST", "127.0.0.1")
SERVER_PORT = int(os.environ.get("ACTOR_LINK_PORT", "8080"))

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# =============================================================================
# Validation Helpers
# =============================================================================

def database_exists(path: Path | None = None) -> bool:
    """Check whether the relation store file exists."""
    return (path or DATABASE_PATH).exists()


def require_tmdb_api_key() -> str:
    """Return the TMDB API key or fail with an actionable message."""
    if not TMDB_API_KEY:
        raise RuntimeError(
            "TMDB_API_KEY not set. Add it to .env file."
        )
    return TMDB_API_KEY
