from pathlib import Path

from fastapi.testclient import TestClient
from starlette.datastructures import FormData

from movieshelf.core.config import AppPaths
from movieshelf.infrastructure.catalog.store import CatalogStore
from movieshelf.infrastructure.uploads.store import UploadStore
from movieshelf.web.app import create_app


def _paths(tmp_path: Path) -> AppPaths:
    return AppPaths(
        project_root=tmp_path,
        uploads_dir=tmp_path / "uploads",
        temp_dir=tmp_path / "uploads" / "temp",
        catalog_path=tmp_path / "movies.json",
    )


def _client(tmp_path: Path) -> tuple[TestClient, AppPaths]:
    paths = _paths(tmp_path)
    return TestClient(create_app(paths)), paths


def test_startup_creates_layout_and_status(tmp_path: Path) -> None:
    client, paths = _client(tmp_path)

    assert paths.uploads_dir.is_dir()
    assert paths.temp_dir.is_dir()
    assert paths.catalog_path.read_text(encoding="utf-8") == "[]"

    r = client.get("/api/status")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "message": "Server is running"}


def test_upload_end_to_end(tmp_path: Path) -> None:
    client, paths = _client(tmp_path)

    r = client.post(
        "/upload",
        data={
            "title": "Space Opera",
            "description": "Stars and ships",
            "videoURL": "https://videos.example/opera.mp4",
        },
        files={"thumbnail": ("poster.png", b"\x89PNG fake", "image/png")},
    )
    assert r.status_code == 200
    payload = r.json()
    assert payload["message"] == "Movie added successfully"
    movie = payload["movie"]
    assert payload["folderPath"] == movie["folderPath"] == f"{movie['id']}-Space_Opera"
    assert movie["video"] == "https://videos.example/opera.mp4"
    assert movie["thumbnail"].startswith(f"/uploads/{payload['folderPath']}/thumbnail-")
    assert set(movie) == {"id", "title", "description", "folderPath", "thumbnail", "video", "uploadDate"}

    # Stored asset is served statically and the staging area is empty again.
    r = client.get(movie["thumbnail"])
    assert r.status_code == 200
    assert r.content == b"\x89PNG fake"
    assert list(paths.temp_dir.iterdir()) == []

    r = client.get("/api/movies")
    assert r.status_code == 200
    assert r.json() == [movie]

    r = client.get(f"/api/movies/{movie['id']}")
    assert r.status_code == 200
    assert r.json() == movie


def test_upload_requires_title_and_description(tmp_path: Path) -> None:
    client, paths = _client(tmp_path)

    r = client.post(
        "/upload",
        data={"title": "", "description": "desc"},
        files={"video": ("clip.mp4", b"mp4", "video/mp4")},
    )
    assert r.status_code == 400
    assert r.json() == {"message": "Title and description are required"}
    assert UploadStore(paths.uploads_dir, paths.temp_dir).list_movie_folders() == []
    assert list(paths.temp_dir.iterdir()) == []
    assert CatalogStore(paths.catalog_path).read_all() == []


def test_upload_without_any_asset_is_rejected(tmp_path: Path) -> None:
    client, paths = _client(tmp_path)

    r = client.post("/upload", data={"title": "Bare", "description": "No assets"})
    assert r.status_code == 400
    assert "at least one" in r.json()["message"]
    assert UploadStore(paths.uploads_dir, paths.temp_dir).list_movie_folders() == []
    assert client.get("/api/movies").json() == []


def test_malformed_multipart_is_server_error(tmp_path: Path) -> None:
    client, _ = _client(tmp_path)

    r = client.post(
        "/upload",
        content=b"definitely not multipart",
        headers={"Content-Type": "multipart/form-data"},
    )
    assert r.status_code == 500
    assert r.json()["message"].startswith("Upload error")


def test_asset_move_failure_is_server_error(tmp_path: Path, monkeypatch) -> None:
    client, paths = _client(tmp_path)

    def broken_move(self, *args, **kwargs):
        raise OSError("read-only filesystem")

    monkeypatch.setattr(UploadStore, "move_into_folder", broken_move)

    r = client.post(
        "/upload",
        data={"title": "Doomed", "description": "desc"},
        files={"video": ("clip.mp4", b"mp4", "video/mp4")},
    )
    assert r.status_code == 500
    assert "read-only filesystem" in r.json()["message"]
    assert UploadStore(paths.uploads_dir, paths.temp_dir).list_movie_folders() == []
    assert list(paths.temp_dir.iterdir()) == []
    assert client.get("/api/movies").json() == []


def test_unknown_movie_and_route(tmp_path: Path) -> None:
    client, _ = _client(tmp_path)

    r = client.get("/api/movies/12345")
    assert r.status_code == 404
    assert r.json() == {"message": "Movie not found"}

    r = client.get("/no/such/route")
    assert r.status_code == 404
    assert r.text == "Not found"


def test_list_failure_is_server_error(tmp_path: Path, monkeypatch) -> None:
    client, _ = _client(tmp_path)

    def boom(self):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(CatalogStore, "read_all", boom)

    r = client.get("/api/movies")
    assert r.status_code == 500
    assert r.json() == {"message": "Error reading movies"}


def test_metadata_write_failure_is_json_server_error(tmp_path: Path, monkeypatch) -> None:
    client, paths = _client(tmp_path)

    def broken_write(self, *args, **kwargs):
        raise OSError("no space left on device")

    monkeypatch.setattr(UploadStore, "write_metadata", broken_write)

    r = client.post(
        "/upload",
        data={"title": "T", "description": "desc", "videoURL": "https://videos.example/t.mp4"},
    )
    assert r.status_code == 500
    assert r.headers["content-type"].startswith("application/json")
    assert "no space left on device" in r.json()["message"]
    assert UploadStore(paths.uploads_dir, paths.temp_dir).list_movie_folders() == []
    assert client.get("/api/movies").json() == []


def test_folder_creation_failure_is_json_server_error(tmp_path: Path, monkeypatch) -> None:
    client, _ = _client(tmp_path)

    def broken_create(self, *args, **kwargs):
        raise OSError("permission denied")

    monkeypatch.setattr(UploadStore, "create_movie_folder", broken_create)

    r = client.post(
        "/upload",
        data={"title": "T", "description": "desc", "videoURL": "https://videos.example/t.mp4"},
    )
    assert r.status_code == 500
    assert r.json()["message"].startswith("Server error")
    assert "permission denied" in r.json()["message"]


def test_wrong_method_on_known_path_is_plain_not_found(tmp_path: Path) -> None:
    client, _ = _client(tmp_path)

    r = client.get("/upload")
    assert r.status_code == 404
    assert r.text == "Not found"


def test_upload_form_is_closed_after_request(tmp_path: Path, monkeypatch) -> None:
    client, _ = _client(tmp_path)
    closed: list[bool] = []
    original_close = FormData.close

    async def tracking_close(self) -> None:
        closed.append(True)
        await original_close(self)

    monkeypatch.setattr(FormData, "close", tracking_close)

    r = client.post(
        "/upload",
        data={"title": "Closed", "description": "desc"},
        files={"video": ("clip.mp4", b"mp4", "video/mp4")},
    )
    assert r.status_code == 200
    assert closed
