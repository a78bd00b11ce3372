"""Command-line entry point for the BoardGameGeek XML API client.

This module provides:
- Command-line argument parsing for the game, search and collection commands
- Application initialization and dependency injection
- Plain-text output of the fetched records
"""

import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

import structlog

from bggapi import __version__
from bggapi.models import ClientConfig, CollectionEntry, Game, SearchResult
from bggapi.services.boardgamegeek import BoardGameGeek
from bggapi.services.config import ConfigurationService
from bggapi.services.errors import get_error_service, handle_error
from bggapi.services.logging import LOG_FORMATS, setup_logging


log = structlog.stdlib.get_logger()


class ApplicationContext:
    """Container for the services a command needs.

    Services are created lazily, so that ``--help`` and argument errors never
    touch the configuration file or the network.
    """

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path: Path | None = config_path

        self._config_service: ConfigurationService | None = None
        self._config: ClientConfig | None = None
        self._client: BoardGameGeek | None = None

    @property
    def config_service(self) -> ConfigurationService:
        if self._config_service is None:
            self._config_service = ConfigurationService(config_path=self._config_path)
        return self._config_service

    @property
    def config(self) -> ClientConfig:
        if self._config is None:
            self._config = self.config_service.load_config()
        return self._config

    @property
    def client(self) -> BoardGameGeek:
        if self._client is None:
            self._client = BoardGameGeek(config=self.config)
        return self._client

    async def cleanup(self) -> None:
        """Close open connections."""
        if self._client is not None:
            await self._client.close()
            self._client = None


def format_game(game: Game) -> str:
    line = f"{game.object_id}\t{game.name}"
    if game.year_published:
        line += f" ({game.year_published})"
    line += f"\t{game.min_players}-{game.max_players} players, {game.playing_time} min"
    if game.stats is not None:
        line += f"\tavg {game.stats.average:.2f}"
    return line


def format_search_result(result: SearchResult) -> str:
    line = f"{result.object_id}\t{result.item_type}\t{result.name}"
    if result.year_published is not None:
        line += f" ({result.year_published})"
    return line


def format_collection_entry(entry: CollectionEntry) -> str:
    flags = [
        label
        for label, value in (
            ("owned", entry.status.owned),
            ("wishlist", entry.status.wishlist),
            ("for trade", entry.status.for_trade),
            ("want to play", entry.status.want_to_play),
        )
        if value
    ]
    line = f"{entry.object_id}\t{entry.name}"
    if entry.year_published is not None:
        line += f" ({entry.year_published})"
    if entry.num_plays:
        line += f"\t{entry.num_plays} plays"
    if flags:
        line += f"\t[{', '.join(flags)}]"
    return line


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bggapi",
        description="Query the BoardGameGeek XML API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bggapi game 161936 --stats               Show one game with statistics
  bggapi search "Castles of Burgundy"       Search by name
  bggapi collection someuser --timeout 30   List a user's collection
        """,
    )

    _ = parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: ~/.config/bggapi/config.json)",
    )

    _ = parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set the logging level (default: log_level from the config file)",
    )

    _ = parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for log files (default: console only)",
    )

    _ = parser.add_argument(
        "--log-format",
        choices=list(LOG_FORMATS),
        default=None,
        help="Log output format (default: console in development, json otherwise)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    game_parser = subparsers.add_parser("game", help="Fetch games by id")
    _ = game_parser.add_argument("ids", nargs="+", type=int, help="One or more game ids")
    _ = game_parser.add_argument("--stats", action="store_true", help="Include rating statistics")

    search_parser = subparsers.add_parser("search", help="Search items by name")
    _ = search_parser.add_argument("query", help="Text to search for")
    _ = search_parser.add_argument("--type", dest="search_type", default=None, help="Item type, e.g. boardgame")
    _ = search_parser.add_argument("--exact", action="store_true", help="Only exact name matches")

    collection_parser = subparsers.add_parser("collection", help="Fetch a user's collection")
    _ = collection_parser.add_argument("username", help="BoardGameGeek user name")
    _ = collection_parser.add_argument("--brief", action="store_true", help="Request abbreviated entries")
    _ = collection_parser.add_argument("--stats", action="store_true", help="Include entry statistics")
    _ = collection_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to keep retrying while the collection is prepared (default: from config)",
    )

    return parser


async def run_command(context: ApplicationContext, args: argparse.Namespace) -> list[str]:
    """Run the selected command and return its output lines."""
    client = context.client

    if args.command == "game":
        if len(args.ids) == 1:
            games = [await client.get_game_by_id(args.ids[0], stats=args.stats)]
        else:
            games = await client.get_games_by_id(args.ids, stats=args.stats)
        return [format_game(game) for game in games]

    if args.command == "search":
        results = await client.search_for(args.query, search_type=args.search_type, exact_match=args.exact)
        return [format_search_result(result) for result in results]

    entries = await client.get_user_collection(
        args.username,
        brief=args.brief,
        stats=args.stats,
        timeout_seconds=args.timeout,
    )
    return [format_collection_entry(entry) for entry in entries]


async def run(context: ApplicationContext, args: argparse.Namespace) -> int:
    """Run one command and print its result.

    Returns:
        Exit code (0 for success, 1 for errors)
    """
    try:
        lines = await run_command(context, args)
    except Exception as e:
        user_error = handle_error(e, operation=args.command, component="cli")
        message = get_error_service().create_user_message(user_error, include_details=args.log_level == "DEBUG")
        print(message, file=sys.stderr)
        return 1
    finally:
        await context.cleanup()

    for line in lines:
        print(line)
    log.info("Command complete", command=args.command, records=len(lines))
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point for the command line."""
    args = build_parser().parse_args(argv)

    # Must precede config loading
    _ = setup_logging(log_level=args.log_level or "WARNING", log_dir=args.log_dir, log_format=args.log_format)

    context = ApplicationContext(config_path=args.config)
    if args.log_level is None:
        _ = setup_logging(log_level=context.config.log_level, log_dir=args.log_dir, log_format=args.log_format)

    log.info("Starting bggapi", version=__version__, command=args.command)

    try:
        exit_code = asyncio.run(run(context, args))
    except KeyboardInterrupt:
        log.info("Interrupted by user")
        exit_code = 130

    error_counts = get_error_service().get_error_count_by_category()
    log.debug(
        "Exiting",
        exit_code=exit_code,
        errors={category.value: count for category, count in error_counts.items()},
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
