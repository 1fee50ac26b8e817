"""
On-demand adjacency over the actor graph.

Two actors are neighbours when they share at least one movie. Nothing is
materialized up front: every lookup is answered by the relation store, so
the graph can be far larger than memory.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from actor_link.store.database import RelationStore

logger = logging.getLogger(__name__)


class Adjacency:
    """
    Translates an actor id into its co-star set via two store lookups.

    With ``memoize=True`` movie/actor lookups are cached on this instance.
    Create one instance per search so cached results never outlive it.

    Attributes:
        queries: Number of store lookups actually issued
    """

    def __init__(self, store: RelationStore, memoize: bool = False) -> None:
        """
        Initialize the accessor.

        Args:
            store: Relation store answering movie/actor lookups
            memoize: Cache lookups for the lifetime of this accessor
        """
        self._store = store
        self._memoize = memoize
        self._groups_cache: dict[int, frozenset[int]] = {}
        self._nodes_cache: dict[int, frozenset[int]] = {}
        self.queries = 0

    def groups_of(self, node: int) -> frozenset[int]:
        """Movie ids the actor appears in (empty if unknown or isolated)."""
        if self._memoize and node in self._groups_cache:
            return self._groups_cache[node]

        self.queries += 1
        groups = frozenset(self._store.movie_ids_for_actor(node))
        if self._memoize:
            self._groups_cache[node] = groups
        return groups

    def nodes_of(self, group: int) -> frozenset[int]:
        """Actor ids credited in the movie (empty if unknown)."""
        if self._memoize and group in self._nodes_cache:
            return self._nodes_cache[group]

        self.queries += 1
        nodes = frozenset(self._store.actor_ids_for_movie(group))
        if self._memoize:
            self._nodes_cache[group] = nodes
        return nodes

    def neighbors(self, node: int) -> set[int]:
        """Every actor sharing a movie with ``node``, excluding ``node`` itself."""
        result: set[int] = set()
        for group in self.groups_of(node):
            result |= self.nodes_of(group)
        result.discard(node)
        return result
