from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import BinaryIO

from movieshelf.core.files import ensure_directory, move_file, remove_tree, write_json_atomic
from movieshelf.core.ids import new_uuid
from movieshelf.domain.models.movie import MovieMetadata
from movieshelf.domain.models.upload import StagedUpload

logger = logging.getLogger(__name__)

PUBLIC_MOUNT = "/uploads"
METADATA_FILENAME = "metadata.json"


class UploadStore:
    """Owns the uploads tree: temp staging plus one folder per movie."""

    def __init__(self, base_dir: Path, temp_dir: Path | None = None) -> None:
        self.base_dir = base_dir
        self.temp_dir = temp_dir or base_dir / "temp"

    def ensure_layout(self) -> list[Path]:
        created: list[Path] = []
        for path in (self.base_dir, self.temp_dir):
            if not path.exists():
                created.append(path)
                logger.info("Created directory %s", path)
            ensure_directory(path)
        return created

    def stage_stream(
        self,
        slot: str,
        stream: BinaryIO,
        original_filename: str,
        content_type: str | None = None,
    ) -> StagedUpload:
        ensure_directory(self.temp_dir)
        suffix = Path(original_filename).suffix
        temp_path = self.temp_dir / f"{new_uuid()}{suffix}"
        with temp_path.open("wb") as out:
            shutil.copyfileobj(stream, out)
        logger.info("Received %s file %s (%s)", slot, original_filename, content_type or "unknown type")
        return StagedUpload(
            slot=slot,
            temp_path=temp_path,
            original_filename=original_filename,
            content_type=content_type,
        )

    def stage_local_file(self, slot: str, source: Path) -> StagedUpload:
        with source.open("rb") as stream:
            return self.stage_stream(slot, stream, source.name)

    @staticmethod
    def discard(staged: StagedUpload) -> None:
        staged.temp_path.unlink(missing_ok=True)

    def folder_path(self, folder_name: str) -> Path:
        return self.base_dir / folder_name

    def create_movie_folder(self, folder_name: str) -> Path:
        path = self.folder_path(folder_name)
        if not path.exists():
            ensure_directory(path)
            logger.info("Created movie folder %s", path)
        return path

    def remove_movie_folder(self, folder_name: str) -> None:
        path = self.folder_path(folder_name)
        if path.exists():
            remove_tree(path)
            logger.info("Removed movie folder %s", path)

    def list_movie_folders(self) -> list[str]:
        if not self.base_dir.exists():
            return []
        return sorted(
            p.name for p in self.base_dir.iterdir() if p.is_dir() and p.resolve() != self.temp_dir.resolve()
        )

    def move_into_folder(self, staged: StagedUpload, folder_name: str, filename: str) -> Path:
        dst = self.folder_path(folder_name) / filename
        move_file(staged.temp_path, dst)
        logger.info("Moved %s to %s", staged.slot, dst)
        return dst

    def write_url_sidecar(self, folder_name: str, slot: str, url: str) -> Path:
        path = self.folder_path(folder_name) / f"{slot}-url.txt"
        path.write_text(url, encoding="utf-8")
        return path

    def write_metadata(self, folder_name: str, metadata: MovieMetadata) -> Path:
        path = self.folder_path(folder_name) / METADATA_FILENAME
        write_json_atomic(path, metadata.to_dict())
        logger.info("Saved metadata to %s", path)
        return path

    def read_metadata(self, folder_name: str) -> dict[str, object] | None:
        path = self.folder_path(folder_name) / METADATA_FILENAME
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return None
        return payload if isinstance(payload, dict) else None

    @staticmethod
    def public_reference(folder_name: str, filename: str) -> str:
        return f"{PUBLIC_MOUNT}/{folder_name}/{filename}"

    def resolve_public_reference(self, reference: str) -> Path | None:
        """Map an ``/uploads/...`` reference back to a path under the uploads root."""
        prefix = f"{PUBLIC_MOUNT}/"
        if not reference.startswith(prefix):
            return None
        candidate = (self.base_dir / reference[len(prefix):]).resolve()
        if not candidate.is_relative_to(self.base_dir.resolve()):
            return None
        return candidate
