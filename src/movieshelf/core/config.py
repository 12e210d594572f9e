from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppPaths:
    project_root: Path
    uploads_dir: Path
    temp_dir: Path
    catalog_path: Path


DEFAULT_UPLOADS_DIRNAME = "uploads"
DEFAULT_CATALOG_FILENAME = "movies.json"
TEMP_DIRNAME = "temp"
DEFAULT_PORT = 3000


def load_paths(project_root: Path | None = None) -> AppPaths:
    root = (project_root or Path.cwd()).expanduser().resolve()

    uploads_raw = os.getenv("MOVIESHELF_UPLOADS_DIR")
    if uploads_raw:
        uploads_dir = Path(uploads_raw).expanduser().resolve()
    else:
        uploads_dir = root / DEFAULT_UPLOADS_DIRNAME

    catalog_raw = os.getenv("MOVIESHELF_CATALOG")
    if catalog_raw:
        catalog_path = Path(catalog_raw).expanduser().resolve()
    else:
        catalog_path = root / DEFAULT_CATALOG_FILENAME

    return AppPaths(
        project_root=root,
        uploads_dir=uploads_dir,
        temp_dir=uploads_dir / TEMP_DIRNAME,
        catalog_path=catalog_path,
    )


def default_port() -> int:
    raw = os.getenv("PORT")
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        return DEFAULT_PORT
