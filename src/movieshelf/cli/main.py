from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich.console import Console

from movieshelf.cli.commands import add_cmd, doctor_cmd, init_cmd, movies_cmd, show_cmd, web_cmd
from movieshelf.cli.context import CLIContext
from movieshelf.core.config import load_paths
from movieshelf.core.errors import MovieShelfError
from movieshelf.core.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="movieshelf",
        description="MovieShelf upload service CLI",
    )
    parser.add_argument(
        "--project-root",
        type=Path,
        default=Path.cwd(),
        help="Directory holding uploads/ and movies.json (default: current working directory)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)

    subparsers = parser.add_subparsers(dest="command", required=True)
    init_cmd.register(subparsers)
    add_cmd.register(subparsers)
    movies_cmd.register(subparsers)
    show_cmd.register(subparsers)
    doctor_cmd.register(subparsers)
    web_cmd.register(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    paths = load_paths(args.project_root)
    ctx = CLIContext(paths=paths, console=console)

    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 2

    try:
        return handler(args, ctx)
    except MovieShelfError as exc:
        logger.error(str(exc))
        return 1
