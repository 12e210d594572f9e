from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

from movieshelf.core.errors import CatalogIOError
from movieshelf.core.files import write_json_atomic
from movieshelf.domain.models.movie import Movie

logger = logging.getLogger(__name__)

# Every writer in the process funnels through append(); one lock serializes them.
_APPEND_LOCK = threading.Lock()


class CatalogStore:
    """Append-only JSON array of movies, the sole index of uploaded items."""

    def __init__(self, catalog_path: Path) -> None:
        self.catalog_path = catalog_path

    def ensure_initialized(self) -> bool:
        if self.catalog_path.exists():
            return False
        try:
            write_json_atomic(self.catalog_path, [])
        except OSError as exc:
            raise CatalogIOError(f"Unable to create catalog at {self.catalog_path}: {exc}") from exc
        logger.info("Created catalog file %s", self.catalog_path)
        return True

    def read_all(self) -> list[Movie]:
        """Return every movie in insertion order; an unreadable catalog reads as empty."""
        try:
            entries = self.load_raw_entries()
        except CatalogIOError as exc:
            logger.warning("Ignoring unreadable catalog: %s", exc)
            return []
        return self._to_movies(entries)

    def append(self, movie: Movie) -> None:
        with _APPEND_LOCK:
            entries = self.load_raw_entries()
            entries.append(movie.to_dict())
            try:
                write_json_atomic(self.catalog_path, entries)
            except OSError as exc:
                raise CatalogIOError(f"Unable to write catalog {self.catalog_path}: {exc}") from exc
        logger.info("Added movie %s (%s), catalog now holds %d entries", movie.id, movie.title, len(entries))

    def find_by_id(self, movie_id: str) -> Movie | None:
        for movie in self.read_all():
            if movie.id == movie_id:
                return movie
        return None

    def load_raw_entries(self) -> list[Any]:
        """Strict read of the backing array; raises CatalogIOError instead of degrading."""
        if not self.catalog_path.exists():
            return []
        try:
            raw = self.catalog_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CatalogIOError(f"Unable to read catalog {self.catalog_path}: {exc}") from exc
        if not raw.strip():
            return []
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CatalogIOError(f"Catalog {self.catalog_path} is not valid JSON: {exc}") from exc
        if not isinstance(parsed, list):
            raise CatalogIOError(f"Catalog {self.catalog_path} is not a JSON array")
        return parsed

    @staticmethod
    def _to_movies(entries: list[Any]) -> list[Movie]:
        movies: list[Movie] = []
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                logger.warning("Skipping catalog entry %d: expected an object", index)
                continue
            movies.append(Movie.from_dict(entry))
        return movies
