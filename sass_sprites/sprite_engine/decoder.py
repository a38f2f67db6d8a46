"""Image codec boundary built on pyvips.

Every decoded image is normalized to 8-bit sRGB with an alpha band so that
sheets can be assembled from mixed sources (greyscale, palette, RGB, RGBA)
onto one transparent canvas.
"""

from __future__ import annotations

import contextlib
from typing import Any, BinaryIO

from sass_sprites.errors import DecodeError, EncodeError, SpriteError
from sass_sprites.logger import get_logger

from .metrics import metrics

_logger = get_logger("decoder")

RGB_CHANNELS = 3
RGBA_CHANNELS = 4

_pyvips: Any | None = None


def _get_pyvips_module() -> Any:
    global _pyvips
    if _pyvips is None:
        import pyvips  # type: ignore

        _pyvips = pyvips
    return _pyvips


def _to_rgba(image: Any) -> Any:
    pyvips = _get_pyvips_module()
    with contextlib.suppress(pyvips.Error):
        image = image.colourspace("srgb")
    if image.bands < RGB_CHANNELS and not image.hasalpha():
        image = pyvips.Image.bandjoin([image] * RGB_CHANNELS)
    if not image.hasalpha():
        image = image.bandjoin(255)
    if image.bands > RGBA_CHANNELS:
        image = image.extract_band(0, n=RGBA_CHANNELS)
    if image.format != "uchar":
        image = image.cast("uchar")
    return image.copy(interpretation="srgb")


def decode_image(path: str) -> Any:
    """Decode `path` into an in-memory RGBA pyvips image.

    The pixels are loaded eagerly so a truncated or corrupt file fails here
    rather than later while the sheet is being encoded.
    """
    pyvips = _get_pyvips_module()
    try:
        image = pyvips.Image.new_from_file(path, access="sequential")
        image = _to_rgba(image).copy_memory()
    except pyvips.Error as e:
        _logger.debug("decode failed: %s: %s", path, e)
        raise DecodeError(path, str(e).strip()) from e
    metrics.inc("decoder.decoded")
    _logger.debug("decoded %s (%dx%d)", path, image.width, image.height)
    return image


def new_canvas(width: int, height: int) -> Any:
    """Fully transparent RGBA canvas."""
    pyvips = _get_pyvips_module()
    return pyvips.Image.black(width, height, bands=RGBA_CHANNELS).copy(interpretation="srgb")


def composite(canvas: Any, image: Any, x: int, y: int) -> Any:
    """Return a new canvas with `image` copied at (x, y)."""
    pyvips = _get_pyvips_module()
    try:
        return canvas.insert(image, x, y)
    except pyvips.Error as e:
        raise SpriteError(f"composite at {x},{y} failed: {e}") from e


def encode(canvas: Any, fmt: str, stream: BinaryIO) -> None:
    """Write `canvas` to `stream` in format `fmt` (case-insensitive, e.g. "PNG")."""
    pyvips = _get_pyvips_module()
    suffix = "." + fmt.strip().lstrip(".").lower()
    try:
        data = canvas.write_to_buffer(suffix)
    except pyvips.Error as e:
        raise EncodeError(f"cannot encode image as {fmt}: {str(e).strip()}") from e
    stream.write(data if isinstance(data, bytes) else bytes(data))


def encode_to_png_bytes(image: Any) -> bytes:
    pyvips = _get_pyvips_module()
    try:
        out = image.write_to_buffer(".png")
    except pyvips.Error as e:
        raise EncodeError(f"png encode failed: {str(e).strip()}") from e
    # Normalize to bytes in case pyvips returns a memoryview-like object
    return out if isinstance(out, bytes) else bytes(out)
