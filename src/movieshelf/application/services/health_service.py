from __future__ import annotations

from dataclasses import dataclass

from movieshelf.core.errors import CatalogIOError
from movieshelf.infrastructure.catalog.store import CatalogStore
from movieshelf.infrastructure.uploads.store import UploadStore


@dataclass(slots=True)
class DoctorIssue:
    check: str
    level: str
    message: str


@dataclass(slots=True)
class DoctorReport:
    ok: bool
    checks_run: int
    issues: list[DoctorIssue]
    catalog_entries: int


class HealthService:
    """Read-only consistency report over the catalog and the uploads tree."""

    def __init__(self, catalog_store: CatalogStore, upload_store: UploadStore) -> None:
        self.catalog_store = catalog_store
        self.upload_store = upload_store

    def run_doctor(self) -> DoctorReport:
        issues: list[DoctorIssue] = []
        checks_run = 0

        # Check 1: catalog parses as a JSON array.
        checks_run += 1
        try:
            self.catalog_store.load_raw_entries()
        except CatalogIOError as exc:
            issues.append(DoctorIssue(check="catalog_readable", level="error", message=str(exc)))

        movies = self.catalog_store.read_all()
        folders = set(self.upload_store.list_movie_folders())

        # Check 2: every catalog entry points at an existing folder with matching metadata.
        checks_run += 1
        for movie in movies:
            if movie.folder_path not in folders:
                issues.append(
                    DoctorIssue(
                        check="folder_exists",
                        level="error",
                        message=f"Movie {movie.id} folder missing: {movie.folder_path}",
                    )
                )
                continue
            metadata = self.upload_store.read_metadata(movie.folder_path)
            if metadata is None:
                issues.append(
                    DoctorIssue(
                        check="metadata_present",
                        level="warning",
                        message=f"Movie {movie.id} has no readable metadata.json",
                    )
                )
            elif str(metadata.get("id")) != movie.id:
                issues.append(
                    DoctorIssue(
                        check="metadata_matches",
                        level="error",
                        message=f"Movie {movie.id} metadata.json carries id {metadata.get('id')}",
                    )
                )

        # Check 3: stored asset references resolve to files on disk.
        checks_run += 1
        for movie in movies:
            for slot, reference in (("thumbnail", movie.thumbnail), ("video", movie.video)):
                target = self.upload_store.resolve_public_reference(reference)
                if target is not None and not target.is_file():
                    issues.append(
                        DoctorIssue(
                            check="asset_exists",
                            level="error",
                            message=f"Movie {movie.id} {slot} file missing: {reference}",
                        )
                    )

        # Check 4: folders on disk that no catalog entry references.
        checks_run += 1
        referenced = {movie.folder_path for movie in movies}
        for folder in sorted(folders - referenced):
            issues.append(
                DoctorIssue(
                    check="orphan_folder",
                    level="warning",
                    message=f"Folder has no catalog entry: {folder}",
                )
            )

        ok = not any(issue.level == "error" for issue in issues)
        return DoctorReport(ok=ok, checks_run=checks_run, issues=issues, catalog_entries=len(movies))
