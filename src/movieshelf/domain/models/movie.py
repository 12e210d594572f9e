from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class Movie:
    """One catalog entry. Serialized with the camelCase keys clients already expect."""

    id: str
    title: str
    description: str
    folder_path: str
    thumbnail: str
    video: str
    upload_date: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "folderPath": self.folder_path,
            "thumbnail": self.thumbnail,
            "video": self.video,
            "uploadDate": self.upload_date,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> Movie:
        return cls(
            id=str(payload.get("id", "")),
            title=str(payload.get("title", "")),
            description=str(payload.get("description", "")),
            folder_path=str(payload.get("folderPath", "")),
            thumbnail=str(payload.get("thumbnail") or ""),
            video=str(payload.get("video") or ""),
            upload_date=str(payload.get("uploadDate", "")),
        )


@dataclass(slots=True, frozen=True)
class MovieMetadata:
    id: str
    title: str
    description: str
    upload_date: str
    thumbnail: str
    video: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "uploadDate": self.upload_date,
            "thumbnail": self.thumbnail,
            "video": self.video,
        }

    def to_movie(self, folder_path: str) -> Movie:
        return Movie(
            id=self.id,
            title=self.title,
            description=self.description,
            folder_path=folder_path,
            thumbnail=self.thumbnail,
            video=self.video,
            upload_date=self.upload_date,
        )
