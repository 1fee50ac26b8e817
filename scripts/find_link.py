#!/usr/bin/env python3
"""
Actor Link CLI - Find how two actors are connected through shared movies.

Usage:
    python scripts/find_link.py --start "Brad Pitt" --target "Helena Bonham Carter"
    python scripts/find_link.py                      # interactive prompt
    python scripts/find_link.py --db other.db -v

In interactive mode, enter two actor names per query; type 'quit' or
'exit' (or press Ctrl+D) to leave.
"""

from __future__ import annotations

import argparse
import logging
import sqlite3
import sys
from pathlib import Path

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from actor_link.config import DATABASE_PATH, LOG_FORMAT  # noqa: E402
from actor_link.errors import ActorNotFoundError, PathReconstructionError  # noqa: E402
from actor_link.graph import find_actor_link  # noqa: E402
from actor_link.presentation import describe_path, resolve_actor  # noqa: E402
from actor_link.store import RelationStore  # noqa: E402
from actor_link.tmdb import ensure_database  # noqa: E402

logger = logging.getLogger(__name__)

QUIT_WORDS = {"quit", "exit", "q"}


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Find the shortest co-star chain between two actors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--start",
        type=str,
        default=None,
        help="Starting actor name (omit for interactive mode)",
    )
    parser.add_argument(
        "--target",
        type=str,
        default=None,
        help="Target actor name (omit for interactive mode)",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=DATABASE_PATH,
        help=f"Database file (default: {DATABASE_PATH})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args()


def run_query(store: RelationStore, start_name: str, target_name: str) -> bool:
    """
    Look up and print the link between two actors.

    Returns:
        True if a link was found and printed
    """
    try:
        start_id = resolve_actor(store, start_name)
        target_id = resolve_actor(store, target_name)
    except ActorNotFoundError as e:
        print(f"Error: {e}")
        return False

    try:
        path = find_actor_link(store, start_id, target_id)
        if path is None:
            print(f"No link found between '{start_name}' and '{target_name}'")
            return False

        link = describe_path(store, path)
    except (PathReconstructionError, LookupError) as e:
        logger.debug("Link lookup failed", exc_info=True)
        print(f"Error finding actor link: {e}")
        return False

    print("\n" + "=" * 60)
    print(f"Link number: {link.link_number}")
    print("=" * 60)
    if not link.hops:
        print(f"  {link.actor_names[0]} (same actor)")
    for i, hop in enumerate(link.hops, start=1):
        print(f"  {i}. {hop.from_name} -> {hop.to_name}")
        print(f"     via {', '.join(hop.movie_titles)}")
    print()
    return True


def interactive_loop(store: RelationStore) -> None:
    """Prompt for actor pairs until the user quits."""
    print("Enter two actor names to find how they are linked ('quit' to exit).")
    while True:
        try:
            start_name = input("Start actor: ").strip()
            if start_name.lower() in QUIT_WORDS:
                return
            target_name = input("Target actor: ").strip()
            if target_name.lower() in QUIT_WORDS:
                return
        except EOFError:
            print()
            return

        if not start_name or not target_name:
            print("Please enter both names.")
            continue

        run_query(store, start_name, target_name)


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Set up logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format=LOG_FORMAT, datefmt="%H:%M:%S")

    if (args.start is None) != (args.target is None):
        print("Error: --start and --target must be given together", file=sys.stderr)
        return 2

    try:
        store = ensure_database(args.db)
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    with store:
        try:
            if args.start is not None:
                return 0 if run_query(store, args.start, args.target) else 1
            interactive_loop(store)
        except sqlite3.Error as e:
            print(f"Database error: {e}", file=sys.stderr)
            return 1
        except KeyboardInterrupt:
            print("\n\nInterrupted by user")
            return 130  # Standard exit code for Ctrl+C

    return 0


if __name__ == "__main__":
    sys.exit(main())
