from __future__ import annotations

import logging
from dataclasses import dataclass

from movieshelf.application.services.asset_slot_service import AssetSlotResolver
from movieshelf.core.errors import (
    AssetResolutionError,
    IncompleteAssetsError,
    StorageError,
    ValidationError,
)
from movieshelf.core.filenames import movie_folder_name
from movieshelf.core.ids import next_movie_timestamp
from movieshelf.core.time import millis_to_iso
from movieshelf.domain.models.movie import Movie, MovieMetadata
from movieshelf.domain.models.upload import THUMBNAIL_SLOT, VIDEO_SLOT, StagedUpload
from movieshelf.infrastructure.catalog.store import CatalogStore
from movieshelf.infrastructure.uploads.store import UploadStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SubmitResult:
    movie: Movie
    folder_name: str


class IntakeService:
    def __init__(
        self,
        upload_store: UploadStore,
        catalog_store: CatalogStore,
        slot_resolver: AssetSlotResolver | None = None,
    ) -> None:
        self.upload_store = upload_store
        self.catalog_store = catalog_store
        self.slot_resolver = slot_resolver or AssetSlotResolver(upload_store)

    def submit(
        self,
        title: str | None,
        description: str | None,
        thumbnail_file: StagedUpload | None = None,
        thumbnail_url: str | None = None,
        video_file: StagedUpload | None = None,
        video_url: str | None = None,
    ) -> SubmitResult:
        if not title or not description:
            raise ValidationError("Title and description are required")

        timestamp_ms = next_movie_timestamp()
        movie_id = str(timestamp_ms)
        upload_date = millis_to_iso(timestamp_ms)
        folder_name = movie_folder_name(title, timestamp_ms)
        try:
            self.upload_store.create_movie_folder(folder_name)
        except OSError as exc:
            raise StorageError(f"Unable to create movie folder {folder_name}: {exc}") from exc

        try:
            thumbnail = self.slot_resolver.resolve(
                THUMBNAIL_SLOT, folder_name, staged=thumbnail_file, url=thumbnail_url
            )
            video = self.slot_resolver.resolve(VIDEO_SLOT, folder_name, staged=video_file, url=video_url)
        except AssetResolutionError:
            self._cleanup_folder(folder_name)
            raise

        metadata = MovieMetadata(
            id=movie_id,
            title=title,
            description=description,
            upload_date=upload_date,
            thumbnail=thumbnail.reference,
            video=video.reference,
        )
        try:
            self.upload_store.write_metadata(folder_name, metadata)
        except OSError as exc:
            self._cleanup_folder(folder_name)
            raise StorageError(f"Unable to write metadata for {folder_name}: {exc}") from exc

        if not thumbnail.resolved and not video.resolved:
            self._cleanup_folder(folder_name)
            raise IncompleteAssetsError("Please provide at least one thumbnail or video (file or URL)")

        movie = metadata.to_movie(folder_name)
        self.catalog_store.append(movie)
        return SubmitResult(movie=movie, folder_name=folder_name)

    def _cleanup_folder(self, folder_name: str) -> None:
        try:
            self.upload_store.remove_movie_folder(folder_name)
        except OSError as exc:
            logger.warning("Could not clean up movie folder %s: %s", folder_name, exc)
