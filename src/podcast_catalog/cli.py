"""Command-line interface for the podcast catalog.

Provides commands for running the API server and inspecting the database.
"""

import argparse
import os
import sys

from podcast_catalog.config import get_settings
from podcast_catalog.errors import CatalogError
from podcast_catalog.logging import setup_logging
from podcast_catalog.service import CatalogService
from podcast_catalog.storage import CatalogStore


def _open_store(database_url: str | None) -> CatalogStore:
    settings = get_settings()
    store = CatalogStore(database_url or settings.database.url, echo=settings.database.echo)
    try:
        store.create_all()
    except Exception:
        store.close()
        raise
    return store


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the GraphQL API server."""
    import uvicorn

    from podcast_catalog.api import create_app

    if args.database_url:
        # Reload workers re-import the app and read settings from the environment
        os.environ["DATABASE_URL"] = args.database_url
        get_settings.cache_clear()

    settings = get_settings()
    setup_logging(log_level=settings.log_level, json_format=settings.json_logs)

    host = args.host or settings.server.host
    port = args.port or settings.server.port
    print(f"\nStarting Podcast Catalog on {host}:{port}")
    if args.reload:
        uvicorn.run("podcast_catalog.api:app", host=host, port=port, reload=True)
    else:
        uvicorn.run(create_app(settings), host=host, port=port, reload=False)
    return 0


def cmd_init_db(args: argparse.Namespace) -> int:
    """Create the catalog tables."""
    setup_logging(log_level="INFO")

    store = _open_store(args.database_url)
    try:
        if args.reset:
            store.drop_all()
            store.create_all()
            print("Dropped and recreated catalog tables")
        else:
            print("Catalog tables ready")
    finally:
        store.close()
    return 0


def cmd_podcasts(args: argparse.Namespace) -> int:
    """List all podcasts."""
    setup_logging(log_level="WARNING")

    store = _open_store(args.database_url)
    try:
        podcasts = CatalogService(store).get_all_podcasts()
    finally:
        store.close()

    if not podcasts:
        print("\nNo podcasts found.")
        return 0

    print(f"\n{'=' * 60}")
    print(f"  PODCASTS ({len(podcasts)})")
    print(f"{'=' * 60}")
    for podcast in podcasts:
        rating = podcast.rating if podcast.rating is not None else "N/A"
        print(f"\n  ID:        {podcast.id}")
        print(f"  Title:     {podcast.title}")
        print(f"  Category:  {podcast.category}")
        print(f"  Rating:    {rating}")
        print(f"  Episodes:  {len(podcast.episodes)}")

    return 0


def cmd_episodes(args: argparse.Namespace) -> int:
    """List the episodes of one podcast."""
    setup_logging(log_level="WARNING")

    store = _open_store(args.database_url)
    try:
        service = CatalogService(store)
        podcast = service.get_podcast(args.podcast_id)
        episodes = service.get_episodes(args.podcast_id)
    except CatalogError as exc:
        print(f"\nError: {exc}")
        return 1
    finally:
        store.close()

    print(f"\nPodcast: {podcast.title}")
    print(f"Episodes found: {len(episodes)}\n")
    for i, ep in enumerate(episodes, 1):
        print(f"{i}. [{ep.id}] {ep.title}")
        print(f"   Category: {ep.category}")

    return 0


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="podcast-catalog",
        description="Podcast Catalog - GraphQL backend for podcasts and episodes",
    )
    parser.add_argument("--database-url", help="Override DATABASE_URL")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # serve command
    sv_parser = subparsers.add_parser("serve", help="Start the GraphQL API")
    sv_parser.add_argument("--host", help="Host to bind (default: SERVER_HOST)")
    sv_parser.add_argument("--port", "-p", type=int, help="Port (default: SERVER_PORT)")
    sv_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    sv_parser.set_defaults(func=cmd_serve)

    # init-db command
    db_parser = subparsers.add_parser("init-db", help="Create the database tables")
    db_parser.add_argument(
        "--reset", action="store_true", help="Drop existing tables first (deletes all data)"
    )
    db_parser.set_defaults(func=cmd_init_db)

    # podcasts command
    pc_parser = subparsers.add_parser("podcasts", help="List all podcasts")
    pc_parser.set_defaults(func=cmd_podcasts)

    # episodes command
    ep_parser = subparsers.add_parser("episodes", help="List episodes of a podcast")
    ep_parser.add_argument("podcast_id", type=int, help="Podcast ID")
    ep_parser.set_defaults(func=cmd_episodes)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
