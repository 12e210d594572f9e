from __future__ import annotations

import logging

from movieshelf.core.errors import AssetResolutionError
from movieshelf.core.filenames import stored_asset_filename
from movieshelf.core.time import now_millis
from movieshelf.domain.models.upload import SlotResolution, StagedUpload
from movieshelf.infrastructure.uploads.store import UploadStore

logger = logging.getLogger(__name__)


class AssetSlotResolver:
    """Decides between an uploaded file and a URL for one asset slot.

    An uploaded file always wins over a URL for the same slot. Files are moved
    into the movie folder and referenced by their public ``/uploads`` path;
    URLs are returned verbatim and recorded in a ``<slot>-url.txt`` sidecar.
    """

    def __init__(self, upload_store: UploadStore) -> None:
        self.upload_store = upload_store

    def resolve(
        self,
        slot: str,
        folder_name: str,
        staged: StagedUpload | None = None,
        url: str | None = None,
    ) -> SlotResolution:
        if staged is not None:
            filename = stored_asset_filename(slot, now_millis(), staged.original_filename)
            try:
                stored_path = self.upload_store.move_into_folder(staged, folder_name, filename)
            except OSError as exc:
                raise AssetResolutionError(slot, exc) from exc
            return SlotResolution(
                slot=slot,
                reference=self.upload_store.public_reference(folder_name, filename),
                stored_path=stored_path,
            )

        if url:
            logger.info("Using %s URL: %s", slot, url)
            try:
                sidecar_path = self.upload_store.write_url_sidecar(folder_name, slot, url)
            except OSError as exc:
                raise AssetResolutionError(slot, exc) from exc
            return SlotResolution(slot=slot, reference=url, sidecar_path=sidecar_path)

        return SlotResolution(slot=slot, reference="")
