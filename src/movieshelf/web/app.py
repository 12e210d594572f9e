from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from movieshelf.application.services.intake_service import IntakeService
from movieshelf.application.services.movie_query_service import MovieQueryService
from movieshelf.application.services.project_service import ProjectService
from movieshelf.core.config import AppPaths
from movieshelf.core.errors import (
    IncompleteAssetsError,
    MovieNotFoundError,
    MovieShelfError,
    ValidationError,
)
from movieshelf.domain.models.upload import ASSET_SLOTS, StagedUpload
from movieshelf.infrastructure.catalog.store import CatalogStore
from movieshelf.infrastructure.uploads.store import PUBLIC_MOUNT, UploadStore

logger = logging.getLogger(__name__)


class MessageResponse(BaseModel):
    message: str


class UploadResponse(BaseModel):
    message: str
    movie: dict[str, Any]
    folderPath: str


class StatusResponse(BaseModel):
    status: str
    message: str


def _text_field(form: FormData, name: str) -> str | None:
    value = form.get(name)
    if isinstance(value, str):
        return value.strip() or None
    return None


def _file_field(form: FormData, name: str) -> UploadFile | None:
    value = form.get(name)
    if isinstance(value, UploadFile) and value.filename:
        return value
    return None


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=MessageResponse(message=message).model_dump())


def create_app(paths: AppPaths) -> FastAPI:
    app = FastAPI(title="MovieShelf", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    ProjectService(paths).init_project()
    upload_store = UploadStore(paths.uploads_dir, paths.temp_dir)
    catalog_store = CatalogStore(paths.catalog_path)

    def get_intake_service() -> IntakeService:
        return IntakeService(upload_store=upload_store, catalog_store=catalog_store)

    def get_query_service() -> MovieQueryService:
        return MovieQueryService(catalog_store)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> Any:
        if exc.status_code in (404, 405):
            logger.info("404 - Route not found: %s %s", request.method, request.url.path)
            return PlainTextResponse("Not found", status_code=404)
        return _message(exc.status_code, str(exc.detail))

    @app.exception_handler(MovieNotFoundError)
    async def movie_not_found(request: Request, exc: MovieNotFoundError) -> JSONResponse:
        return _message(404, "Movie not found")

    @app.exception_handler(ValidationError)
    @app.exception_handler(IncompleteAssetsError)
    async def client_error(request: Request, exc: MovieShelfError) -> JSONResponse:
        return _message(400, str(exc))

    @app.exception_handler(MovieShelfError)
    async def server_error(request: Request, exc: MovieShelfError) -> JSONResponse:
        logger.error("Error processing request %s: %s", request.url.path, exc)
        return _message(500, f"Server error: {exc}")

    async def _stage_files(form: FormData) -> dict[str, StagedUpload]:
        staged: dict[str, StagedUpload] = {}
        for slot in ASSET_SLOTS:
            upload = _file_field(form, slot)
            if upload is None:
                continue
            await upload.seek(0)
            staged[slot] = await run_in_threadpool(
                upload_store.stage_stream,
                slot,
                upload.file,
                upload.filename or slot,
                upload.content_type,
            )
        return staged

    @app.post("/upload", response_model=UploadResponse)
    async def upload(request: Request) -> Any:
        logger.info("Received upload request")
        staged: dict[str, StagedUpload] = {}
        form: FormData | None = None
        try:
            try:
                form = await request.form()
                staged = await _stage_files(form)
            except Exception as exc:
                logger.exception("Could not read upload body")
                return _message(500, f"Upload error: {exc}")

            result = await run_in_threadpool(
                get_intake_service().submit,
                _text_field(form, "title"),
                _text_field(form, "description"),
                thumbnail_file=staged.get("thumbnail"),
                thumbnail_url=_text_field(form, "thumbnailURL"),
                video_file=staged.get("video"),
                video_url=_text_field(form, "videoURL"),
            )
        finally:
            for item in staged.values():
                UploadStore.discard(item)
            if form is not None:
                await form.close()

        return UploadResponse(
            message="Movie added successfully",
            movie=result.movie.to_dict(),
            folderPath=result.folder_name,
        )

    @app.get("/api/movies")
    def api_movies() -> Any:
        try:
            movies = get_query_service().list_all()
        except Exception:
            logger.exception("Error reading movies")
            return _message(500, "Error reading movies")
        return [movie.to_dict() for movie in movies]

    @app.get("/api/movies/{movie_id}")
    def api_movie_detail(movie_id: str) -> Any:
        try:
            movie = get_query_service().get_by_id(movie_id)
        except MovieNotFoundError:
            raise
        except Exception:
            logger.exception("Error reading movie %s", movie_id)
            return _message(500, "Error reading movie")
        return movie.to_dict()

    @app.get("/api/status", response_model=StatusResponse)
    def api_status() -> StatusResponse:
        return StatusResponse(status="ok", message="Server is running")

    app.mount(PUBLIC_MOUNT, StaticFiles(directory=str(paths.uploads_dir)), name="uploads")
    logger.info("Serving uploads from %s", paths.uploads_dir)

    return app
