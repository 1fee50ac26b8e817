#!/usr/bin/env python3
"""
Populate the Actor Link database from TMDB.

Usage:
    python scripts/populate_db.py
    python scripts/populate_db.py --start-id 550 --end-id 600 --concurrency 4
    python scripts/populate_db.py --db data/test.db -v

Requires TMDB_API_KEY in the environment or a .env file.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from actor_link.config import (  # noqa: E402 - must be after sys.path modification
    DATABASE_PATH,
    INGEST_BATCH_SIZE,
    INGEST_CONCURRENT_REQUESTS,
    INGEST_MOVIE_ID_END,
    INGEST_MOVIE_ID_START,
    LOG_FORMAT,
    require_tmdb_api_key,
)
from actor_link.store import RelationStore  # noqa: E402
from actor_link.tmdb import TMDBClient, populate_database  # noqa: E402


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Populate the actor/movie database from TMDB",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--start-id",
        type=int,
        default=INGEST_MOVIE_ID_START,
        help=f"First TMDB movie id to scan (default: {INGEST_MOVIE_ID_START})",
    )
    parser.add_argument(
        "--end-id",
        type=int,
        default=INGEST_MOVIE_ID_END,
        help=f"Stop before this TMDB movie id (default: {INGEST_MOVIE_ID_END})",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=INGEST_CONCURRENT_REQUESTS,
        help=f"Parallel TMDB requests (default: {INGEST_CONCURRENT_REQUESTS})",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=INGEST_BATCH_SIZE,
        help=f"Movies per insert transaction (default: {INGEST_BATCH_SIZE})",
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


def main() -> int:
    """Main entry point."""
    args = parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=log_level, format=LOG_FORMAT, datefmt="%H:%M:%S")

    if args.end_id <= args.start_id:
        print("Error: --end-id must be greater than --start-id", file=sys.stderr)
        return 2

    try:
        api_key = require_tmdb_api_key()
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Scanning TMDB movie ids {args.start_id}..{args.end_id - 1} into {args.db}")
    start_time = time.time()

    client = TMDBClient(api_key)
    with RelationStore.open(args.db) as store:
        store.setup()
        try:
            stats = populate_database(
                store,
                client,
                range(args.start_id, args.end_id),
                concurrent_requests=args.concurrency,
                batch_size=args.batch_size,
            )
        except KeyboardInterrupt:
            print("\n\nInterrupted by user (completed batches are kept)")
            return 130
        finally:
            client.close()

        counts = store.counts()

    elapsed = time.time() - start_time
    print("\n=== Population Summary ===\n")
    print(f"  Scanned:      {stats.scanned:,}")
    print(f"  Inserted:     {stats.inserted:,}")
    print(f"  Skipped:      {stats.skipped:,}")
    print(f"  Links:        {stats.links:,}")
    print(f"  Time:         {elapsed:.1f}s")
    print("\n=== Database Totals ===\n")
    for table, count in counts.items():
        print(f"  {table}: {count:,}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
