from __future__ import annotations

import argparse
from pathlib import Path

from rich.table import Table

from movieshelf.application.services.intake_service import IntakeService
from movieshelf.application.services.project_service import ProjectService
from movieshelf.cli.context import CLIContext
from movieshelf.core.errors import ProjectNotInitializedError, ValidationError
from movieshelf.domain.models.upload import THUMBNAIL_SLOT, VIDEO_SLOT, StagedUpload
from movieshelf.infrastructure.catalog.store import CatalogStore
from movieshelf.infrastructure.uploads.store import UploadStore


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("add", help="Add a movie from local files and/or URLs")
    parser.add_argument("--title", required=True)
    parser.add_argument("--description", required=True)
    thumbnail = parser.add_mutually_exclusive_group()
    thumbnail.add_argument("--thumbnail", type=Path, help="Local thumbnail file (copied, not moved)")
    thumbnail.add_argument("--thumbnail-url")
    video = parser.add_mutually_exclusive_group()
    video.add_argument("--video", type=Path, help="Local video file (copied, not moved)")
    video.add_argument("--video-url")
    parser.set_defaults(handler=run)


def run(args: argparse.Namespace, ctx: CLIContext) -> int:
    project_service = ProjectService(ctx.paths)
    if not project_service.is_initialized():
        raise ProjectNotInitializedError(
            f"Project is not initialized. Run 'movieshelf init' first in {ctx.paths.project_root}"
        )

    upload_store = UploadStore(ctx.paths.uploads_dir, ctx.paths.temp_dir)
    service = IntakeService(upload_store=upload_store, catalog_store=CatalogStore(ctx.paths.catalog_path))

    staged: dict[str, StagedUpload] = {}
    try:
        for slot, source in ((THUMBNAIL_SLOT, args.thumbnail), (VIDEO_SLOT, args.video)):
            if source is not None:
                source = source.expanduser()
                if not source.is_file():
                    raise ValidationError(f"File not found: {source}")
                staged[slot] = upload_store.stage_local_file(slot, source)
        result = service.submit(
            args.title,
            args.description,
            thumbnail_file=staged.get(THUMBNAIL_SLOT),
            thumbnail_url=args.thumbnail_url,
            video_file=staged.get(VIDEO_SLOT),
            video_url=args.video_url,
        )
    finally:
        for item in staged.values():
            UploadStore.discard(item)

    table = Table(title="Movie added")
    table.add_column("Field")
    table.add_column("Value", overflow="fold")
    for key, value in result.movie.to_dict().items():
        table.add_row(key, value)
    ctx.console.print(table)
    return 0
