"""
Tests for the Flask HTTP front end.
"""

import sqlite3

import pytest

import app as app_module
from actor_link.store import RelationStore
from app import app as flask_app


@pytest.fixture
def client(movie_store):
    """Test client wired to the in-memory movie store."""
    flask_app.config.update(TESTING=True, RELATION_STORE=movie_store)
    with flask_app.test_client() as test_client:
        yield test_client
    flask_app.config.pop("RELATION_STORE", None)


def post_link(client, start, target):
    return client.post(
        "/api/actor-link",
        json={"start_actor_name": start, "target_actor_name": target},
    )


class BrokenStore:
    """Resolves names, then fails on the first adjacency lookup."""

    def __init__(self, store):
        self._store = store

    def actor_id_by_name(self, name):
        return self._store.actor_id_by_name(name)

    def movie_ids_for_actor(self, actor_id):
        raise sqlite3.OperationalError("database disk image is malformed")

    def actor_ids_for_movie(self, movie_id):
        raise sqlite3.OperationalError("database disk image is malformed")


class TestActorLinkEndpoint:
    """Test POST /api/actor-link."""

    def test_link_found(self, client):
        """A connected pair returns names, hops, and connecting movies."""
        resp = post_link(client, "Edward Norton", "Jessica Tandy")
        assert resp.status_code == 200

        data = resp.get_json()
        assert data["error"] is None
        assert data["link_number"] == 3
        assert data["path"] == ["Edward Norton", "Brad Pitt", "Morgan Freeman", "Jessica Tandy"]
        assert data["link_path"][0] == ["Edward Norton", "Fight Club", "Brad Pitt"]

    def test_same_actor(self, client):
        """The same actor twice is a zero-link answer."""
        data = post_link(client, "Brad Pitt", "Brad Pitt").get_json()
        assert data["path"] == ["Brad Pitt"]
        assert data["link_path"] == []
        assert data["link_number"] == 0

    def test_no_link(self, client):
        """Unconnected actors get 200 with a null path and a message."""
        resp = post_link(client, "Brad Pitt", "Lonely Actor")
        assert resp.status_code == 200

        data = resp.get_json()
        assert data["path"] is None
        assert data["link_number"] is None
        assert "No link found" in data["error"]

    def test_unknown_start_actor(self, client):
        """Unknown names are a 404 naming the actor."""
        resp = post_link(client, "Keanu Reeves", "Brad Pitt")
        assert resp.status_code == 404
        assert "Keanu Reeves" in resp.get_json()["error"]

    def test_unknown_target_actor(self, client):
        """The target name is checked too."""
        resp = post_link(client, "Brad Pitt", "Keanu Reeves")
        assert resp.status_code == 404
        assert "Keanu Reeves" in resp.get_json()["error"]

    def test_missing_field(self, client):
        """A body without both names is a 400."""
        resp = client.post("/api/actor-link", json={"start_actor_name": "Brad Pitt"})
        assert resp.status_code == 400

    def test_non_json_body(self, client):
        """A non-JSON body is a 400."""
        resp = client.post("/api/actor-link", data="hello", content_type="text/plain")
        assert resp.status_code == 400

    def test_store_failure_is_500(self, client, movie_store):
        """A store error mid-search becomes a 500, never a 'no link'."""
        flask_app.config["RELATION_STORE"] = BrokenStore(movie_store)
        resp = post_link(client, "Edward Norton", "Jessica Tandy")
        assert resp.status_code == 500
        assert "Error finding actor link" in resp.get_json()["error"]


@pytest.fixture
def unloaded_client(tmp_path, monkeypatch):
    """Test client with no store loaded yet and no TMDB key."""
    monkeypatch.setattr(app_module, "DATABASE_PATH", tmp_path / "actor_link.db")
    monkeypatch.setattr("actor_link.config.TMDB_API_KEY", None)
    flask_app.config["TESTING"] = True
    flask_app.config.pop("RELATION_STORE", None)
    with flask_app.test_client() as test_client:
        yield test_client
    store = flask_app.config.pop("RELATION_STORE", None)
    if store is not None:
        store.close()


class TestFirstUse:
    """Test requests that arrive before the store is loaded."""

    def test_missing_database_is_json_503(self, unloaded_client, tmp_path):
        """No database file gives a JSON 503, and no build is attempted."""
        resp = post_link(unloaded_client, "Brad Pitt", "Edward Norton")

        assert resp.status_code == 503
        data = resp.get_json()
        assert data["path"] is None
        assert "not available" in data["error"]
        assert not (tmp_path / "actor_link.db").exists()

    def test_health_without_database(self, unloaded_client):
        """Health reports the store as unavailable."""
        resp = unloaded_client.get("/health")
        assert resp.status_code == 503
        assert resp.get_json()["status"] == "unavailable"

    def test_existing_database_opened_lazily(self, unloaded_client, tmp_path):
        """A database file already on disk is opened on the first request."""
        with RelationStore.open(tmp_path / "actor_link.db") as store:
            store.setup()
            movie_id = store.insert_movie(550, "Fight Club")
            for tmdb_id, name in [(819, "Edward Norton"), (287, "Brad Pitt")]:
                store.insert_movie_actor_link(movie_id, store.insert_actor(tmdb_id, name))

        resp = post_link(unloaded_client, "Brad Pitt", "Edward Norton")

        assert resp.status_code == 200
        assert resp.get_json()["link_path"] == [["Brad Pitt", "Fight Club", "Edward Norton"]]


class TestPages:
    """Test the HTML form and health check."""

    def test_home(self, client):
        """The home page serves the lookup form."""
        resp = client.get("/")
        assert resp.status_code == 200
        assert b"Actor Link" in resp.data

    def test_health(self, client):
        """Health reports store row counts."""
        data = client.get("/health").get_json()
        assert data["status"] == "ok"
        assert data["counts"]["actors"] == 7
