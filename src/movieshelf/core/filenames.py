from __future__ import annotations

import re

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9_.-]")
_UNDERSCORE_RUN_RE = re.compile(r"_+")

FOLDER_TITLE_MAX_CHARS = 30


def sanitize_filename(value: str) -> str:
    """Map any string to a token of ``[A-Za-z0-9_.-]`` with no repeated underscores."""
    cleaned = _UNSAFE_CHARS_RE.sub("_", value)
    return _UNDERSCORE_RUN_RE.sub("_", cleaned)


def movie_folder_name(title: str, timestamp_ms: int) -> str:
    return f"{timestamp_ms}-{sanitize_filename(title)[:FOLDER_TITLE_MAX_CHARS]}"


def stored_asset_filename(slot: str, timestamp_ms: int, original_filename: str) -> str:
    # Only the final path component counts; browsers may send client-side paths.
    name = re.split(r"[\\/]", original_filename)[-1]
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        stem, ext = name, ""
    else:
        ext = f".{ext}"
    return f"{slot}-{timestamp_ms}-{sanitize_filename(stem)}{sanitize_filename(ext)}"
