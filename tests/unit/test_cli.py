import json
from pathlib import Path

import pytest

from movieshelf.cli.main import main


@pytest.fixture(autouse=True)
def _no_env_overrides(monkeypatch) -> None:
    monkeypatch.delenv("MOVIESHELF_UPLOADS_DIR", raising=False)
    monkeypatch.delenv("MOVIESHELF_CATALOG", raising=False)


def test_init_add_list_show(tmp_path: Path) -> None:
    root = ["--project-root", str(tmp_path)]
    assert main([*root, "init"]) == 0
    assert (tmp_path / "movies.json").exists()
    assert (tmp_path / "uploads" / "temp").is_dir()

    poster = tmp_path / "poster.png"
    poster.write_bytes(b"png")
    assert (
        main(
            [
                *root,
                "add",
                "--title",
                "From CLI",
                "--description",
                "Added locally",
                "--thumbnail",
                str(poster),
                "--video-url",
                "https://videos.example/cli.mp4",
            ]
        )
        == 0
    )
    assert poster.exists()

    catalog = json.loads((tmp_path / "movies.json").read_text(encoding="utf-8"))
    assert len(catalog) == 1
    assert catalog[0]["video"] == "https://videos.example/cli.mp4"
    assert list((tmp_path / "uploads" / "temp").iterdir()) == []

    assert main([*root, "movies"]) == 0
    assert main([*root, "show", catalog[0]["id"]]) == 0
    assert main([*root, "show", "missing"]) == 1
    assert main([*root, "doctor"]) == 0


def test_add_requires_initialized_project(tmp_path: Path) -> None:
    code = main(
        [
            "--project-root",
            str(tmp_path),
            "add",
            "--title",
            "t",
            "--description",
            "d",
            "--video-url",
            "https://videos.example/x.mp4",
        ]
    )
    assert code == 1


def test_add_rejects_missing_local_file(tmp_path: Path) -> None:
    root = ["--project-root", str(tmp_path)]
    main([*root, "init"])
    code = main([*root, "add", "--title", "t", "--description", "d", "--video", str(tmp_path / "nope.mp4")])
    assert code == 1
    assert json.loads((tmp_path / "movies.json").read_text(encoding="utf-8")) == []
