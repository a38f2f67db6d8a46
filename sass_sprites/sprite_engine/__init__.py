"""Sprite Engine - image decoding, sheet layout and the per-compile cache.

This package provides the core sprite functionality:
- Image codec access (decoder)
- Sheet layout, compositing and export (image_list)
- Concurrency-safe cache of built sheets (sprite_store)
- Counters and timings (metrics)

Usage:
    from sass_sprites.sprite_engine import ImageList, SpriteStore

    store = SpriteStore()
    sheet = store.get_or_build("icons/*.png0", lambda: build(...))
    sheet.position("home")
"""

from .image_list import NOT_FOUND, Direction, ImageList
from .sprite_store import SpriteStore

__all__ = ["NOT_FOUND", "Direction", "ImageList", "SpriteStore"]
