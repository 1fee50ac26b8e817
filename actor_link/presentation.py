"""
Turns actor-id paths into names and connecting movie titles.

Shared by the HTTP API and the command-line prompt so both describe a link
the same way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from actor_link.errors import ActorNotFoundError

if TYPE_CHECKING:
    from actor_link.store.database import RelationStore


@dataclass
class LinkHop:
    """
    One step of a link: two actors and the movies they share.

    Attributes:
        from_name: Actor the hop starts at
        movie_titles: Titles of every movie both actors appear in (sorted)
        to_name: Actor the hop ends at
    """

    from_name: str
    movie_titles: list[str]
    to_name: str

    def to_row(self) -> list[str]:
        """[from, "Title A, Title B", to] as used in API responses."""
        return [self.from_name, ", ".join(self.movie_titles), self.to_name]


@dataclass
class ActorLink:
    """
    Display form of a path between two actors.

    Attributes:
        actor_ids: Path as actor ids, start first
        actor_names: Path as display names
        hops: Connecting movies for each consecutive pair
    """

    actor_ids: list[int]
    actor_names: list[str]
    hops: list[LinkHop] = field(default_factory=list)

    @property
    def link_number(self) -> int:
        """Number of hops (0 when start and target are the same actor)."""
        return len(self.hops)

    def to_dict(self) -> dict:
        return {
            "path": list(self.actor_names),
            "link_path": [hop.to_row() for hop in self.hops],
            "link_number": self.link_number,
            "error": None,
        }


def resolve_actor(store: RelationStore, name: str) -> int:
    """
    Look up an actor id by display name.

    Raises:
        ActorNotFoundError: If no actor has exactly this name
    """
    name = name.strip()
    actor_id = store.actor_id_by_name(name)
    if actor_id is None:
        raise ActorNotFoundError(name)
    return actor_id


def _actor_name(store: RelationStore, actor_id: int) -> str:
    name = store.actor_name_by_id(actor_id)
    # Ids on a path come from the store, so a missing name means a broken store
    if name is None:
        raise LookupError(f"Actor id {actor_id} has no name in the store")
    return name


def describe_path(store: RelationStore, path: list[int]) -> ActorLink:
    """
    Resolve a path of actor ids to names and shared movie titles.

    Args:
        store: Relation store to read names and memberships from
        path: Non-empty list of actor ids as returned by find_actor_link

    Returns:
        ActorLink with one hop per consecutive pair
    """
    names = [_actor_name(store, actor_id) for actor_id in path]

    hops: list[LinkHop] = []
    for i in range(1, len(path)):
        shared = store.movie_ids_for_actor(path[i - 1]) & store.movie_ids_for_actor(path[i])
        titles = sorted(store.movie_titles_by_ids(shared).values())
        hops.append(LinkHop(from_name=names[i - 1], movie_titles=titles, to_name=names[i]))

    return ActorLink(actor_ids=list(path), actor_names=names, hops=hops)
