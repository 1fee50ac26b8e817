"""
Unit tests for name resolution and path description.
"""

import pytest

from actor_link.errors import ActorNotFoundError
from actor_link.graph import find_actor_link
from actor_link.presentation import ActorLink, LinkHop, describe_path, resolve_actor


class TestResolveActor:
    """Test display name -> actor id."""

    def test_known_name(self, movie_store):
        """Should return the actor id."""
        assert resolve_actor(movie_store, "Brad Pitt") == 2

    def test_strips_whitespace(self, movie_store):
        """Surrounding whitespace from user input is ignored."""
        assert resolve_actor(movie_store, "  Brad Pitt \n") == 2

    def test_unknown_name_raises(self, movie_store):
        """Unknown names raise ActorNotFoundError carrying the name."""
        with pytest.raises(ActorNotFoundError) as exc_info:
            resolve_actor(movie_store, "Keanu Reeves")
        assert exc_info.value.name == "Keanu Reeves"
        assert "not found" in str(exc_info.value)


class TestDescribePath:
    """Test id path -> names and connecting movies."""

    def test_single_actor(self, movie_store):
        """A zero-hop path has one name and no hops."""
        link = describe_path(movie_store, [2])
        assert link.actor_names == ["Brad Pitt"]
        assert link.hops == []
        assert link.link_number == 0

    def test_hops_name_connecting_movies(self, movie_store):
        """Each hop lists the movies both actors appear in."""
        link = describe_path(movie_store, [1, 2, 4, 6])
        assert link.actor_names == ["Edward Norton", "Brad Pitt", "Morgan Freeman", "Jessica Tandy"]
        assert link.hops == [
            LinkHop("Edward Norton", ["Fight Club"], "Brad Pitt"),
            LinkHop("Brad Pitt", ["Se7en"], "Morgan Freeman"),
            LinkHop("Morgan Freeman", ["Driving Miss Daisy"], "Jessica Tandy"),
        ]
        assert link.link_number == 3

    def test_multiple_shared_movies_sorted(self, movie_store):
        """Several shared movies are listed alphabetically."""
        link = describe_path(movie_store, [2, 5])
        assert link.hops[0].movie_titles == ["Ocean's Eleven", "Ocean's Twelve"]

    def test_describe_search_result(self, movie_store):
        """Every hop of a found path has at least one connecting movie."""
        path = find_actor_link(movie_store, 3, 5)
        link = describe_path(movie_store, path)
        assert link.link_number == 2
        assert all(hop.movie_titles for hop in link.hops)

    def test_unknown_id_on_path_raises(self, movie_store):
        """An id without a name means the store is inconsistent."""
        with pytest.raises(LookupError):
            describe_path(movie_store, [2, 999])


class TestActorLinkDict:
    """Test the API response shape."""

    def test_to_dict(self):
        """Hops become [from, "titles", to] rows."""
        link = ActorLink(
            actor_ids=[2, 5],
            actor_names=["Brad Pitt", "George Clooney"],
            hops=[LinkHop("Brad Pitt", ["Ocean's Eleven", "Ocean's Twelve"], "George Clooney")],
        )
        assert link.to_dict() == {
            "path": ["Brad Pitt", "George Clooney"],
            "link_path": [["Brad Pitt", "Ocean's Eleven, Ocean's Twelve", "George Clooney"]],
            "link_number": 1,
            "error": None,
        }
