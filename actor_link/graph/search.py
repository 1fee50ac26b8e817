"""
Bidirectional BFS for the shortest co-star chain between two actors.

Two breadth-first searches run towards each other, one from the start actor
and one from the target, each expanding a whole level per turn. The first
actor reached by both sides lies on a shortest path; the two parent maps are
then stitched together into a single start-to-target chain.

Adjacency is fetched lazily from the relation store, so the cost of a search
is dominated by the number of lookups, not by graph size.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from actor_link.config import SEARCH_MEMOIZE
from actor_link.errors import PathReconstructionError
from actor_link.graph.adjacency import Adjacency

if TYPE_CHECKING:
    from actor_link.store.database import RelationStore

logger = logging.getLogger(__name__)

FORWARD = "forward"
BACKWARD = "backward"


@dataclass
class _SearchSide:
    """
    Mutable state for one direction of the search.

    Attributes:
        direction: FORWARD or BACKWARD (used in logs and errors)
        root: Actor this side starts from
        queue: Frontier awaiting expansion (FIFO)
        visited: Every actor this side has reached, root included
        parents: Maps an actor to the actor it was discovered from
        depth: Number of levels fully expanded so far
    """

    direction: str
    root: int
    queue: deque[int] = field(default_factory=deque)
    visited: set[int] = field(default_factory=set)
    parents: dict[int, int] = field(default_factory=dict)
    depth: int = 0

    def __post_init__(self) -> None:
        self.queue.append(self.root)
        self.visited.add(self.root)


def _expand_level(side: _SearchSide, other: _SearchSide, adjacency: Adjacency) -> int | None:
    """
    Expand exactly the actors currently queued on ``side``.

    Returns:
        The first newly discovered actor already visited by ``other``,
        or None if the level finished without the searches meeting
    """
    # Snapshot the level size so actors enqueued below wait for the next turn
    level_size = len(side.queue)
    for _ in range(level_size):
        current = side.queue.popleft()
        # Ascending ids, so ties between equal-length chains resolve the same way every run
        for neighbor in sorted(adjacency.neighbors(current)):
            if neighbor in side.visited:
                continue

            side.visited.add(neighbor)
            side.parents[neighbor] = current
            side.queue.append(neighbor)

            if neighbor in other.visited:
                return neighbor

    side.depth += 1
    logger.debug(
        f"{side.direction} level {side.depth} done: "
        f"{len(side.queue)} queued, {len(side.visited)} visited, "
        f"{adjacency.queries} store queries"
    )
    return None


def find_actor_link(
    store: RelationStore,
    start: int,
    target: int,
    *,
    memoize: bool | None = None,
) -> list[int] | None:
    """
    Find a shortest chain of co-stars from ``start`` to ``target``.

    Each outer round expands one full forward level, then one full backward
    level. The search stops at the first actor seen by both sides.

    Args:
        store: Relation store providing movie/actor lookups
        start: Actor id to start from
        target: Actor id to reach
        memoize: Cache lookups within this search (defaults to SEARCH_MEMOIZE)

    Returns:
        Actor ids from start to target (``[start]`` when they are equal),
        or None if the two actors are not connected

    Raises:
        sqlite3.Error: If a store lookup fails; the search is abandoned
        PathReconstructionError: If the parent maps are inconsistent
    """
    if start == target:
        return [start]

    if memoize is None:
        memoize = SEARCH_MEMOIZE
    adjacency = Adjacency(store, memoize=memoize)

    forward = _SearchSide(FORWARD, start)
    backward = _SearchSide(BACKWARD, target)

    while forward.queue and backward.queue:
        meeting = _expand_level(forward, backward, adjacency)
        if meeting is None:
            meeting = _expand_level(backward, forward, adjacency)

        if meeting is not None:
            path = reconstruct_path(
                meeting, forward.parents, backward.parents, start, target
            )
            logger.info(
                f"Linked {start} -> {target} in {len(path) - 1} hops via {meeting} "
                f"({adjacency.queries} store queries)"
            )
            return path

    logger.info(
        f"No link between {start} and {target} "
        f"({len(forward.visited) + len(backward.visited)} actors reached, "
        f"{adjacency.queries} store queries)"
    )
    return None


def reconstruct_path(
    meeting: int,
    parents_forward: dict[int, int],
    parents_backward: dict[int, int],
    start: int,
    target: int,
) -> list[int]:
    """
    Stitch the two search trees into one start-to-target path.

    Walks ``parents_forward`` from the meeting actor back to ``start``
    (then reverses it), and ``parents_backward`` from the meeting actor on to
    ``target``. The meeting actor appears once.

    Raises:
        PathReconstructionError: If a parent is missing or a chain loops
    """
    head = _walk_to_root(meeting, parents_forward, start, FORWARD)
    head.reverse()

    tail = _walk_to_root(meeting, parents_backward, target, BACKWARD)
    return head + tail[1:]


def _walk_to_root(node: int, parents: dict[int, int], root: int, direction: str) -> list[int]:
    """Follow parent links from ``node`` until ``root``, inclusive of both."""
    chain = [node]
    while node != root:
        # A valid chain never revisits an actor, so it has at most len(parents) hops
        if len(chain) > len(parents):
            raise PathReconstructionError(node, direction)
        try:
            node = parents[node]
        except KeyError:
            raise PathReconstructionError(node, direction) from None
        chain.append(node)
    return chain
