"""ImageList: an ordered set of decoded images laid out as one sprite sheet.

Images keep the order their globs matched in; every offset is a prefix sum
over that order, so the list is decoded once and never reordered. The
composite canvas is built lazily on the first export and reused afterwards.
"""

from __future__ import annotations

import base64
import glob as _glob
import os
import secrets
import string
from enum import Enum
from typing import Any

from sass_sprites.errors import ExportError, ImageNotFoundError, InvalidGlobError, SpriteError
from sass_sprites.logger import get_logger
from sass_sprites.path_utils import sanitize_filename

from . import decoder
from .metrics import metrics

_logger = get_logger("image_list")

NOT_FOUND = -1
_SUFFIX_LEN = 6
_ALPHANUM = string.digits + string.ascii_uppercase + string.ascii_lowercase


class Direction(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def parse(cls, value: str | Direction) -> Direction:
        if isinstance(value, Direction):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise SpriteError(f"unknown layout direction: {value!r}") from None


def random_suffix(n: int = _SUFFIX_LEN) -> str:
    # Probabilistic uniqueness only; sheets are regenerated every run.
    return "".join(secrets.choice(_ALPHANUM) for _ in range(n))


def _check_pattern(pattern: str) -> None:
    if not pattern:
        raise InvalidGlobError(pattern, "empty pattern")
    i, n = 0, len(pattern)
    while i < n:
        if pattern[i] == "[":
            j = i + 1
            if j < n and pattern[j] == "!":
                j += 1
            # A leading ']' is part of the set
            if j < n and pattern[j] == "]":
                j += 1
            j = pattern.find("]", j)
            if j == -1:
                raise InvalidGlobError(pattern, "unterminated character class")
            i = j
        i += 1


def expand_glob(pattern: str) -> list[str]:
    """Sorted file matches for `pattern`; directories are skipped."""
    _check_pattern(pattern)
    return sorted(p for p in _glob.glob(pattern) if os.path.isfile(p))


class ImageList:
    def __init__(
        self,
        direction: str | Direction = Direction.HORIZONTAL,
        padding: int = 0,
        out_dir: str | None = None,
        image_dir: str | None = None,
    ) -> None:
        self.images: list[Any] = []
        self.files: list[str] = []
        self.direction = Direction.parse(direction)
        self.padding = max(0, int(padding))
        self.out_dir = out_dir or ""
        self.image_dir = image_dir or ""
        self.out_file = ""
        self.canvas: Any | None = None
        self.combined = False
        self._written = ""
        # out_file came from an export(path) call rather than decode()
        self._explicit = False

    def __len__(self) -> int:
        return len(self.images)

    def __str__(self) -> str:
        return " ".join(self.names())

    def __repr__(self) -> str:
        return f"ImageList({self.direction.value}, files={self.files!r})"

    @property
    def vertical(self) -> bool:
        return self.direction is Direction.VERTICAL

    # ---- decode ----------------------------------------------------
    def _resolve(self, pattern: str) -> str:
        if self.image_dir and not os.path.isabs(pattern):
            return os.path.join(self.image_dir, pattern)
        return pattern

    def _source_dir(self, path: str) -> str:
        src = os.path.dirname(path)
        if self.image_dir:
            src = os.path.relpath(src or ".", self.image_dir)
        if src in ("", "."):
            src = os.path.basename(os.path.normpath(self.image_dir)) if self.image_dir else "sprite"
        return src

    def decode(self, *patterns: str) -> None:
        """Expand each glob and decode every match, in match order.

        Nothing is kept if any glob or decode fails, so a failed list can be
        discarded and rebuilt.
        """
        paths: list[str] = []
        for pattern in patterns:
            paths.extend(expand_glob(self._resolve(pattern)))

        images = [decoder.decode_image(path) for path in paths]

        self.canvas = None
        self.combined = False
        self.images.extend(images)
        self.files.extend(paths)
        if paths and not self.out_file:
            ext = os.path.splitext(paths[0])[1]
            self.out_file = f"{self._source_dir(paths[0])}-{random_suffix()}{ext}"
        metrics.inc("image_list.decode")
        _logger.debug("decoded %d image(s) from %s", len(images), ", ".join(patterns))

    # ---- lookup ----------------------------------------------------
    def names(self) -> list[str]:
        return [os.path.splitext(os.path.basename(f))[0] for f in self.files]

    def lookup(self, name: str) -> int:
        """Index of `name` (full path, file name or file name without extension).

        Returns NOT_FOUND when no file matches; the first match in list order wins.
        """
        for i, path in enumerate(self.files):
            base = os.path.basename(path)
            if name in (path, base, os.path.splitext(base)[0]):
                return i
        _logger.debug("file not found: %s, try one of: %s", name, self)
        return NOT_FOUND

    def _require(self, name: str) -> int:
        pos = self.lookup(name)
        if pos == NOT_FOUND:
            raise ImageNotFoundError(name, self.names())
        return pos

    # ---- layout ----------------------------------------------------
    def _check_pos(self, pos: int) -> None:
        if not 0 <= pos <= len(self.images):
            raise IndexError(f"position {pos} out of range for {len(self.images)} image(s)")

    def x(self, pos: int) -> int:
        """Left edge of the image at `pos`."""
        self._check_pos(pos)
        if self.vertical:
            return 0
        return sum(img.width for img in self.images[:pos]) + self.padding * pos

    def y(self, pos: int) -> int:
        """Top edge of the image at `pos`."""
        self._check_pos(pos)
        if not self.vertical:
            return 0
        return sum(img.height for img in self.images[:pos]) + self.padding * pos

    def _gaps(self) -> int:
        return self.padding * max(0, len(self.images) - 1)

    def width(self) -> int:
        if not self.images:
            return 0
        if self.vertical:
            return max(img.width for img in self.images)
        return sum(img.width for img in self.images) + self._gaps()

    def height(self) -> int:
        if not self.images:
            return 0
        if self.vertical:
            return sum(img.height for img in self.images) + self._gaps()
        return max(img.height for img in self.images)

    def offset(self, name: str) -> tuple[int, int]:
        pos = self._require(name)
        return self.x(pos), self.y(pos)

    def position(self, name: str) -> str:
        """CSS background-position that shifts the sheet onto `name`."""
        x, y = self.offset(name)
        return f"{-x}px {-y}px"

    def css(self, name: str) -> str:
        if not self.images:
            return "transparent"
        return f'url("{self._written or self.out_file}") {self.position(name)}'

    def dimensions(self, name: str) -> str:
        pos = self.lookup(name)
        if pos == NOT_FOUND:
            return ""
        img = self.images[pos]
        return f"width: {img.width}px;\nheight: {img.height}px"

    def image_width(self, name: str) -> int:
        pos = self.lookup(name)
        return self.images[pos].width if pos != NOT_FOUND else NOT_FOUND

    def image_height(self, name: str) -> int:
        pos = self.lookup(name)
        return self.images[pos].height if pos != NOT_FOUND else NOT_FOUND

    # ---- output ----------------------------------------------------
    def combine(self) -> Any | None:
        """Composite all images onto one canvas; cached after the first call."""
        if self.canvas is not None:
            return self.canvas
        if not self.images:
            return None

        canvas = decoder.new_canvas(self.width(), self.height())
        cur_w, cur_h = 0, 0
        for img in self.images:
            canvas = decoder.composite(canvas, img, cur_w, cur_h)
            if self.vertical:
                cur_h += img.height + self.padding
            else:
                cur_w += img.width + self.padding
        metrics.inc("image_list.combine")

        self.canvas = canvas
        self.combined = True
        return canvas

    def _write_path(self) -> str:
        if self._explicit:
            head, name = os.path.split(self.out_file)
        else:
            head, name = "", self.out_file
        return os.path.join(self.out_dir, head, sanitize_filename(name))

    def export(self, path: str = "") -> str:
        """Write the sheet and return the path written.

        An empty `path` reuses the last output path: the one given to a previous
        export, or else the generated name inside `out_dir`. The
        encoder is picked from the file extension. An empty list writes nothing
        and returns "".
        """
        if path:
            self.out_file = path
            self._explicit = True
        if not self.images or not self.out_file:
            _logger.debug("nothing to export")
            return ""

        dest = self._write_path()
        ext = os.path.splitext(dest)[1]
        if len(ext) < 2:
            raise ExportError(f"cannot determine image format for {dest}")

        with metrics.timed("image_list.export_duration"):
            try:
                parent = os.path.dirname(dest)
                if parent:
                    os.makedirs(parent, exist_ok=True)
                with open(dest, "wb") as fo:
                    # Cached if already combined
                    canvas = self.combine()
                    decoder.encode(canvas, ext[1:].upper(), fo)
            except OSError as e:
                raise ExportError(f"failed to write {dest}: {e}") from e

        self._written = dest
        _logger.debug("exported %dx%d sheet to %s", self.width(), self.height(), dest)
        return dest

    def output_path(self) -> str:
        if not self._written:
            raise SpriteError("sprite sheet has not been exported")
        return self._written

    def inline(self) -> str:
        """First image as a base64 PNG data URI."""
        if not self.images:
            raise SpriteError("no images to inline")
        data = decoder.encode_to_png_bytes(self.images[0])
        enc = base64.b64encode(data).decode("ascii")
        return f"url('data:image/png;base64,{enc}')"
