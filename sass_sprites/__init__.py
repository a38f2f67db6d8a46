"""Sprite sheet functions for a Sass stylesheet compiler."""

from .context import CompileContext, SpriteProvider
from .errors import SpriteError
from .handlers import call

__all__ = ["CompileContext", "SpriteError", "SpriteProvider", "call"]
__version__ = "0.1.0"
