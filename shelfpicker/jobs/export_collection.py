"""
Export a user's merged BGG collection to JSON.

Fetches collection, game details and plays, merges them, and writes the
games as a JSON array. Useful for snapshots and offline analysis.

Usage:
    python -m shelfpicker.jobs.export_collection USERNAME [--output games.json]
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import TypeAdapter

from shelfpicker.models.game import Game
from shelfpicker.models.result import Failure
from shelfpicker.services.bgg_client import BggClient
from shelfpicker.services.library import GameLibrary

logger = logging.getLogger(__name__)

_GAMES_ADAPTER = TypeAdapter(list[Game])


async def export_collection(username: str, output_path: Path) -> int:
    """
    Export a collection.

    Args:
        username: BGG username
        output_path: Destination JSON file

    Returns:
        Number of games written, or -1 if the collection could not be loaded
    """
    logger.info("Exporting collection of %s...", username)

    async with BggClient() as client:
        result = await GameLibrary(client).load_games(username)

    if isinstance(result, Failure):
        logger.error(
            "Failed to load collection for %s (%s): %s", username, result.kind.value, result.error
        )
        return -1

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(_GAMES_ADAPTER.dump_json(result.data, indent=2))

    logger.info("Wrote %d games to %s", len(result.data), output_path)
    return len(result.data)


def main() -> None:
    """CLI entrypoint for exporting a collection."""
    parser = argparse.ArgumentParser(description="Export a BoardGameGeek collection to JSON")
    parser.add_argument("username", help="BGG username")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output file (default: <username>.json)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    output_path = args.output or Path(f"{args.username}.json")
    written = asyncio.run(export_collection(args.username, output_path))
    if written < 0:
        sys.exit(1)


if __name__ == "__main__":
    main()
