"""
TMDB ingestion module.

Provides the TMDB API client and the pipeline that fills the
relation store with feature films and their casts.
"""

from actor_link.tmdb.client import (
    TMDBClient,
    TMDBCredits,
    TMDBGenre,
    TMDBMovie,
    TMDBPerson,
    is_feature_film,
)
from actor_link.tmdb.populate import (
    FetchedMovie,
    PopulateStats,
    ensure_database,
    fetch_feature_film,
    populate_database,
)

__all__ = [
    "TMDBClient",
    "TMDBCredits",
    "TMDBGenre",
    "TMDBMovie",
    "TMDBPerson",
    "is_feature_film",
    "FetchedMovie",
    "PopulateStats",
    "ensure_database",
    "fetch_feature_film",
    "populate_database",
]
