"""Per-compile context handed to every sprite function.

A `CompileContext` represents one stylesheet compile: the directories used to
find images and place generated sheets, plus the `SpriteStore` that lives
exactly as long as the compile does.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .errors import ContextPayloadError
from .settings_manager import SettingsManager
from .sprite_engine import Direction, SpriteStore


@runtime_checkable
class SpriteProvider(Protocol):
    def sprites(self) -> SpriteStore: ...


class CompileContext:
    def __init__(
        self,
        image_dir: str = "",
        build_dir: str = "",
        gen_img_dir: str = "",
        http_path: str = "",
        direction: str | Direction = Direction.HORIZONTAL,
        payload: object | None = None,
    ) -> None:
        self.image_dir = image_dir
        self.build_dir = build_dir
        self.gen_img_dir = gen_img_dir
        self.http_path = http_path
        self.direction = Direction.parse(direction)
        self._store = SpriteStore()
        # The context provides its own store unless another provider is injected
        self.payload: object = self if payload is None else payload

    @classmethod
    def from_settings(cls, settings: SettingsManager, **overrides) -> CompileContext:
        kwargs = {
            "image_dir": settings.image_dir,
            "build_dir": settings.build_dir,
            "gen_img_dir": settings.gen_img_dir,
            "http_path": settings.http_path,
            "direction": settings.direction,
        }
        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)

    def __repr__(self) -> str:
        return (
            f"CompileContext(image_dir={self.image_dir!r}, build_dir={self.build_dir!r}, "
            f"gen_img_dir={self.gen_img_dir!r}, http_path={self.http_path!r})"
        )

    def sprites(self) -> SpriteStore:
        return self._store

    @property
    def out_dir(self) -> str:
        """Directory generated sheets are written to."""
        return self.gen_img_dir or self.build_dir

    def sprite_store(self) -> SpriteStore:
        """The store of the injected provider."""
        if not isinstance(self.payload, SpriteProvider):
            raise ContextPayloadError()
        return self.payload.sprites()
