from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

THUMBNAIL_SLOT = "thumbnail"
VIDEO_SLOT = "video"
ASSET_SLOTS = (THUMBNAIL_SLOT, VIDEO_SLOT)


@dataclass(slots=True, frozen=True)
class StagedUpload:
    """A file already written to temp storage, waiting to be moved into a movie folder."""

    slot: str
    temp_path: Path
    original_filename: str
    content_type: str | None = None


@dataclass(slots=True, frozen=True)
class SlotResolution:
    slot: str
    reference: str
    stored_path: Path | None = None
    sidecar_path: Path | None = None

    @property
    def resolved(self) -> bool:
        return bool(self.reference)
