from __future__ import annotations

import argparse
import json

from movieshelf.application.services.movie_query_service import MovieQueryService
from movieshelf.cli.context import CLIContext
from movieshelf.infrastructure.catalog.store import CatalogStore


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("show", help="Print one catalog entry as JSON")
    parser.add_argument("movie_id")
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    movie = MovieQueryService(CatalogStore(ctx.paths.catalog_path)).get_by_id(args.movie_id)
    ctx.console.print_json(json.dumps(movie.to_dict(), ensure_ascii=False))
    return 0
