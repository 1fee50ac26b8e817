"""
Relation store module.

Provides RelationStore, the SQLite-backed home of actors, movies,
and movie/actor links.

Usage:
    from actor_link.store import RelationStore

    store = RelationStore.open("actor_link.db")
    store.movie_ids_for_actor(2)
"""

from actor_link.store.database import RelationStore

__all__ = ["RelationStore"]
