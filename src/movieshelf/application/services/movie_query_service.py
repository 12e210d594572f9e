from __future__ import annotations

from movieshelf.core.errors import MovieNotFoundError
from movieshelf.domain.models.movie import Movie
from movieshelf.infrastructure.catalog.store import CatalogStore


class MovieQueryService:
    def __init__(self, catalog_store: CatalogStore) -> None:
        self.catalog_store = catalog_store

    def list_all(self) -> list[Movie]:
        return self.catalog_store.read_all()

    def get_by_id(self, movie_id: str) -> Movie:
        movie = self.catalog_store.find_by_id(movie_id)
        if movie is None:
            raise MovieNotFoundError(movie_id)
        return movie
