from __future__ import annotations

import json
import os
import shutil
from pathlib import Path
from typing import Any


def ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def move_file(src: Path, dst: Path) -> None:
    ensure_directory(dst.parent)
    shutil.move(str(src), str(dst))


def write_text_atomic(path: Path, text: str) -> None:
    ensure_directory(path.parent)
    temp_path = path.parent / f".{path.name}.tmp"
    temp_path.write_text(text, encoding="utf-8")
    os.replace(temp_path, path)


def write_json_atomic(path: Path, payload: Any) -> None:
    write_text_atomic(path, json.dumps(payload, ensure_ascii=False, indent=2))


def remove_tree(path: Path) -> None:
    shutil.rmtree(path)
