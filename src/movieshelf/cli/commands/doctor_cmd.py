from __future__ import annotations

import argparse

from rich.panel import Panel
from rich.table import Table

from movieshelf.application.services.health_service import HealthService
from movieshelf.application.services.project_service import ProjectService
from movieshelf.cli.context import CLIContext
from movieshelf.core.errors import ProjectNotInitializedError
from movieshelf.infrastructure.catalog.store import CatalogStore
from movieshelf.infrastructure.uploads.store import UploadStore


def register(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("doctor", help="Check the catalog against the uploads tree")
    parser.set_defaults(handler=run_doctor)


def run_doctor(args: argparse.Namespace, ctx: CLIContext) -> int:
    if not ProjectService(ctx.paths).is_initialized():
        raise ProjectNotInitializedError(
            f"Project is not initialized. Run 'movieshelf init' first in {ctx.paths.project_root}"
        )

    service = HealthService(
        catalog_store=CatalogStore(ctx.paths.catalog_path),
        upload_store=UploadStore(ctx.paths.uploads_dir, ctx.paths.temp_dir),
    )
    report = service.run_doctor()

    summary = Panel.fit(
        f"Checks run: {report.checks_run}\n"
        f"Catalog entries: {report.catalog_entries}\n"
        f"Issues: {len(report.issues)}\n"
        f"Status: {'PASS' if report.ok else 'FAIL'}",
        title="Doctor Summary",
    )
    ctx.console.print(summary)

    if report.issues:
        out = Table(title="Doctor Issues")
        out.add_column("Level")
        out.add_column("Check")
        out.add_column("Message", overflow="fold")
        for issue in report.issues:
            out.add_row(issue.level, issue.check, issue.message)
        ctx.console.print(out)

    return 0 if report.ok else 1
