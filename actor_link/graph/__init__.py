"""
Graph algorithms module.

Provides pathfinding over the actor co-star graph:
- Adjacency: Lazy neighbour lookups backed by the relation store
- find_actor_link: Bidirectional BFS shortest path
- reconstruct_path: Merge forward/backward parent maps into one path
"""

from actor_link.graph.adjacency import Adjacency
from actor_link.graph.search import find_actor_link, reconstruct_path

__all__ = [
    "Adjacency",
    "find_actor_link",
    "reconstruct_path",
]
