from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from movieshelf.core.config import AppPaths
from movieshelf.infrastructure.catalog.store import CatalogStore
from movieshelf.infrastructure.uploads.store import UploadStore


@dataclass(slots=True)
class InitResult:
    paths_created: list[Path]
    catalog_path: Path


class ProjectService:
    def __init__(self, paths: AppPaths) -> None:
        self.paths = paths

    def init_project(self) -> InitResult:
        paths_created = UploadStore(self.paths.uploads_dir, self.paths.temp_dir).ensure_layout()
        if CatalogStore(self.paths.catalog_path).ensure_initialized():
            paths_created.append(self.paths.catalog_path)
        return InitResult(paths_created=paths_created, catalog_path=self.paths.catalog_path)

    def is_initialized(self) -> bool:
        return self.paths.catalog_path.exists() and self.paths.uploads_dir.is_dir()
