from __future__ import annotations

import argparse

from rich.table import Table

from movieshelf.application.services.movie_query_service import MovieQueryService
from movieshelf.cli.context import CLIContext
from movieshelf.infrastructure.catalog.store import CatalogStore


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("movies", help="List catalog entries in upload order")
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    movies = MovieQueryService(CatalogStore(ctx.paths.catalog_path)).list_all()

    table = Table(title=f"Movies ({len(movies)})")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Folder", overflow="fold")
    table.add_column("Thumbnail", overflow="fold")
    table.add_column("Video", overflow="fold")
    table.add_column("Uploaded")

    for m in movies:
        table.add_row(m.id, m.title, m.folder_path, m.thumbnail, m.video, m.upload_date)

    ctx.console.print(table)
    return 0
