"""Path helpers shared by the sprite engine and the handlers.

- Settings store absolute directories.
- Generated sheet names are flattened into a single file name.
- URLs written into CSS always use forward slashes.
"""

from __future__ import annotations

import os
from pathlib import Path
from urllib.parse import urlsplit, urlunsplit

_UNSAFE_NAME_CHARS = ("/", "*")


def abs_path(path: str | Path) -> Path:
    """Return an absolute path without requiring that it exists."""
    p = Path(path).expanduser()
    try:
        # strict=False avoids exceptions for non-existent paths.
        return p.resolve(strict=False)
    except OSError:
        return p.absolute()


def abs_path_str(path: str | Path) -> str:
    return str(abs_path(path))


def sanitize_filename(name: str) -> str:
    """Strip glob and path fragments (`/`, `*`) out of a generated file name."""
    for ch in _UNSAFE_NAME_CHARS:
        name = name.replace(ch, "")
    return name


def to_url_path(path: str) -> str:
    return path.replace(os.sep, "/") if os.sep != "/" else path


def relative_url(target_dir: str, start_dir: str, filename: str) -> str:
    """URL of `filename` inside `target_dir`, relative to `start_dir`."""
    rel = os.path.relpath(target_dir or ".", start_dir or ".")
    return "/".join([to_url_path(rel), filename])


def join_url(base: str, filename: str) -> str:
    """Append `filename` to the path component of the URL `base`."""
    parts = urlsplit(base)
    path = parts.path.rstrip("/")
    return urlunsplit((parts.scheme, parts.netloc, f"{path}/{filename}", parts.query, parts.fragment))
