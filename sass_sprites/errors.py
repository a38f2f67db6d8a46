"""Exception hierarchy for sprite sheet building and the handler boundary.

Everything raised on purpose by this package derives from `SpriteError`, so the
handler boundary (`sass_sprites.handlers.call`) can turn it into an error
message for the stylesheet compiler instead of aborting the compile.
"""

from __future__ import annotations

from collections.abc import Iterable


class SpriteError(Exception):
    """Base class for all reportable sprite errors."""


class InvalidGlobError(SpriteError):
    def __init__(self, pattern: str, reason: str = "syntax error in pattern"):
        super().__init__(f"invalid glob {pattern!r}: {reason}")
        self.pattern = pattern


class DecodeError(SpriteError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"failed to decode {path}: {reason}")
        self.path = path


class EncodeError(SpriteError):
    pass


class ExportError(SpriteError):
    pass


class GlobNotFoundError(SpriteError):
    def __init__(self, glob: str, name: str):
        super().__init__(f"Variable not found matching glob: {glob} sprite:{name}")
        self.glob = glob
        self.name = name


class ImageNotFoundError(SpriteError):
    def __init__(self, name: str, names: Iterable[str] = ()):
        self.name = name
        self.names = list(names)
        super().__init__(f"image {name} not found\n   try one of these: [{' '.join(self.names)}]")


class NoUnitError(SpriteError):
    def __init__(self, message: str = "Please specify unit for offset ie. (2px)"):
        super().__init__(message)


class UnitMismatchError(SpriteError):
    def __init__(self, left: str, right: str):
        super().__init__(f"incompatible units: {left!r} and {right!r}")
        self.left = left
        self.right = right


class ArgumentTypeError(SpriteError):
    def __init__(self, expected: str, value: object):
        got = type(value).__name__
        super().__init__(f"Invalid Sass type expected: {expected} got: {got} value: {value}")
        self.expected = expected
        self.value = value


class ContextPayloadError(SpriteError):
    def __init__(self, message: str = "context payload not found"):
        super().__init__(message)
