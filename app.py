"""
Actor Link - Flask app.

Features:
- API: POST /api/actor-link finds the shortest co-star chain between two actors
- Home: Small form for trying the API in a browser
- Health: Row counts of the relation store
"""

import logging
import sqlite3
import threading

from flask import Flask, jsonify, render_template_string, request

from actor_link.config import (
    DATABASE_PATH,
    LOG_FORMAT,
    LOG_LEVEL,
    SERVER_HOST,
    SERVER_PORT,
    database_exists,
)
from actor_link.errors import ActorNotFoundError, PathReconstructionError
from actor_link.graph import find_actor_link
from actor_link.presentation import describe_path, resolve_actor
from actor_link.store import RelationStore
from actor_link.tmdb import ensure_database

logger = logging.getLogger(__name__)

app = Flask(__name__)

# ====================
# Relation Store
# ====================

_store_lock = threading.Lock()


def get_store(build: bool = False) -> RelationStore | None:
    """
    Return the shared store, opening it on first use.

    Args:
        build: Populate a missing database from TMDB (startup only)

    Returns:
        The store, or None if the database has not been built yet
    """
    store = app.config.get("RELATION_STORE")
    if store is None:
        with _store_lock:
            store = app.config.get("RELATION_STORE")
            if store is None:
                if not build and not database_exists(DATABASE_PATH):
                    logger.warning(f"No database at {DATABASE_PATH}; run scripts/populate_db.py")
                    return None
                store = ensure_database(DATABASE_PATH)
                app.config["RELATION_STORE"] = store
    return store


# ====================
# Templates
# ====================

HOME_TEMPLATE = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Actor Link</title>
    <style>
        * { box-sizing: border-box; margin: 0; padding: 0; }
        body { font-family: system-ui, -apple-system, sans-serif; background: #f5f5f5; min-height: 100vh; }
        .header { background: #1a1a2e; color: white; padding: 15px 30px; }
        .container { max-width: 800px; margin: 0 auto; padding: 20px; }
        .card { background: white; border-radius: 12px; box-shadow: 0 2px 8px rgba(0,0,0,0.1); padding: 30px; margin-bottom: 20px; }
        input[type="text"] { width: 100%; padding: 12px 15px; border: 2px solid #ddd; border-radius: 8px; font-size: 16px; margin-bottom: 15px; }
        button { background: #4ecdc4; color: white; border: none; padding: 12px 30px; border-radius: 8px; font-size: 16px; cursor: pointer; }
        #result li { margin: 8px 0 8px 20px; }
        .error { color: #c0392b; }
    </style>
</head>
<body>
    <div class="header"><h1>Actor Link</h1></div>
    <div class="container">
        <div class="card">
            <form id="link-form">
                <input type="text" id="start" placeholder="Start actor (e.g. Brad Pitt)">
                <input type="text" id="target" placeholder="Target actor (e.g. Helena Bonham Carter)">
                <button type="submit">Find Link</button>
            </form>
        </div>
        <div class="card" id="result"></div>
    </div>
    <script>
        document.getElementById('link-form').addEventListener('submit', async (e) => {
            e.preventDefault();
            const resp = await fetch('/api/actor-link', {
                method: 'POST',
                headers: {'Content-Type': 'application/json'},
                body: JSON.stringify({
                    start_actor_name: document.getElementById('start').value,
                    target_actor_name: document.getElementById('target').value,
                }),
            });
            const data = await resp.json();
            const out = document.getElementById('result');
            out.replaceChildren();
            if (data.error) {
                const p = document.createElement('p');
                p.className = 'error';
                p.textContent = data.error;
                out.appendChild(p);
                return;
            }
            const h = document.createElement('h2');
            h.textContent = data.link_number + ' link(s)';
            out.appendChild(h);
            const ul = document.createElement('ul');
            for (const [from, movies, to] of data.link_path) {
                const li = document.createElement('li');
                li.textContent = from + ' → ' + to + ' (' + movies + ')';
                ul.appendChild(li);
            }
            out.appendChild(ul);
        });
    </script>
</body>
</html>
"""


# ====================
# Routes
# ====================

def _error_response(message: str, status: int):
    return jsonify({
        "path": None,
        "link_path": None,
        "link_number": None,
        "error": message,
    }), status


@app.route("/")
def home():
    return render_template_string(HOME_TEMPLATE)


@app.route("/health")
def health():
    """Report relation store row counts."""
    try:
        store = get_store()
        if store is None:
            return jsonify({"status": "unavailable", "counts": None}), 503
        return jsonify({"status": "ok", "counts": store.counts()})
    except sqlite3.Error as e:
        logger.exception("Health check failed")
        return jsonify({"status": "error", "counts": None, "error": str(e)}), 500


@app.route("/api/actor-link", methods=["POST"])
def actor_link():
    """
    Find the shortest co-star chain between two actors given by name.

    Responds 404 for unknown names, 200 with a null path when the actors are
    not connected, 503 before the database has been built, and 500 if the
    store fails mid-search.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return _error_response("Request body must be a JSON object", 400)

    start_name = payload.get("start_actor_name")
    target_name = payload.get("target_actor_name")
    if not isinstance(start_name, str) or not isinstance(target_name, str):
        return _error_response(
            "Both 'start_actor_name' and 'target_actor_name' are required", 400
        )

    try:
        store = get_store()
        if store is None:
            return _error_response("Actor database is not available yet", 503)

        start_id = resolve_actor(store, start_name)
        target_id = resolve_actor(store, target_name)

        path = find_actor_link(store, start_id, target_id)
        if path is None:
            return _error_response(
                f"No link found between '{start_name}' and '{target_name}'", 200
            )

        return jsonify(describe_path(store, path).to_dict())

    except ActorNotFoundError as e:
        return _error_response(str(e), 404)
    except (sqlite3.Error, PathReconstructionError, LookupError) as e:
        logger.exception(f"Actor link lookup failed for '{start_name}' -> '{target_name}'")
        return _error_response(f"Error finding actor link: {e}", 500)


# ====================
# Main
# ====================

if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, datefmt="%H:%M:%S")

    # Build the database up front; requests never trigger a TMDB scan
    try:
        get_store(build=True)
    except RuntimeError as e:
        print(f"Error: {e}")
        raise SystemExit(1)

    print("\n=== Actor Link ===")
    print(f"Listening on http://{SERVER_HOST}:{SERVER_PORT}\n")

    app.run(host=SERVER_HOST, port=SERVER_PORT, debug=False)
