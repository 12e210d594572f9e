class MovieShelfError(Exception):
    """Base error for all user-facing MovieShelf exceptions."""


class ConfigurationError(MovieShelfError):
    """Raised when configuration is invalid or incomplete."""


class ProjectNotInitializedError(MovieShelfError):
    """Raised when the uploads root or catalog file is missing."""


class ValidationError(MovieShelfError):
    """Raised when required upload fields are missing."""


class IncompleteAssetsError(MovieShelfError):
    """Raised when neither the thumbnail nor the video slot resolved."""


class AssetResolutionError(MovieShelfError):
    """Raised when an asset file could not be moved or a URL sidecar written."""

    def __init__(self, slot: str, cause: BaseException) -> None:
        super().__init__(f"Failed to store {slot}: {cause}")
        self.slot = slot
        self.cause = cause


class CatalogIOError(MovieShelfError):
    """Raised when the catalog file cannot be read or written."""


class MovieNotFoundError(MovieShelfError):
    """Raised when a catalog lookup finds no movie."""

    def __init__(self, movie_id: str) -> None:
        super().__init__(f"Movie not found: {movie_id}")
        self.movie_id = movie_id


class StorageError(MovieShelfError):
    """Raised when a movie folder or its metadata file cannot be written."""
