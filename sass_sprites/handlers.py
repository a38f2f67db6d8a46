"""Sprite functions exposed to the stylesheet compiler.

Each function is registered under its Sass signature, e.g.
``sprite-map($glob, $spacing: 0px)``. `call` is the boundary the compiler
talks to: it binds and type-checks arguments, runs the function and returns
``(value, None)`` on success or ``(None, message)`` on failure. Nothing
raised by a sprite function escapes `call`.
"""

from __future__ import annotations

import os
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .context import CompileContext
from .errors import ArgumentTypeError, GlobNotFoundError, SpriteError
from .logger import get_logger
from .path_utils import join_url, relative_url
from .sprite_engine import ImageList
from .values import SassNumber, parse_number, px, unquote

_logger = get_logger("handlers")

_REQUIRED = object()
_SIGNATURE_RE = re.compile(r"^\s*([\w-]+)\s*\((.*)\)\s*$")


@dataclass(frozen=True)
class Param:
    name: str
    default: Any = _REQUIRED

    @property
    def kind(self) -> type:
        # Parameters with numeric defaults take numbers, everything else strings
        return SassNumber if isinstance(self.default, SassNumber) else str


@dataclass(frozen=True)
class Handler:
    name: str
    params: tuple[Param, ...]
    fn: Callable[..., Any]


HANDLERS: dict[str, Handler] = {}


def _parse_signature(signature: str) -> tuple[str, tuple[Param, ...]]:
    m = _SIGNATURE_RE.match(signature)
    if not m:
        raise ValueError(f"bad handler signature: {signature!r}")
    name, body = m.groups()
    params = []
    for raw in filter(None, (p.strip() for p in body.split(","))):
        pname, _, default = raw.partition(":")
        pname = pname.strip().lstrip("$")
        if not default:
            params.append(Param(pname))
            continue
        default = default.strip()
        try:
            params.append(Param(pname, parse_number(default)))
        except ValueError:
            params.append(Param(pname, unquote(default)))
    return name, tuple(params)


def register_handler(signature: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    def _register(fn: Callable[..., Any]) -> Callable[..., Any]:
        name, params = _parse_signature(signature)
        HANDLERS[name] = Handler(name, params, fn)
        return fn

    return _register


def _coerce(param: Param, value: Any) -> Any:
    if param.kind is SassNumber:
        if isinstance(value, SassNumber):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return SassNumber(value)
        raise ArgumentTypeError("number", value)
    if isinstance(value, str):
        return value
    raise ArgumentTypeError("string", value)


def _bind(handler: Handler, args: tuple, kwargs: dict[str, Any]) -> list[Any]:
    if len(args) > len(handler.params):
        raise SpriteError(
            f"{handler.name}: expected at most {len(handler.params)} argument(s), got {len(args)}"
        )
    named = {k.lstrip("$"): v for k, v in kwargs.items()}
    bound = []
    for i, param in enumerate(handler.params):
        if i < len(args):
            value = args[i]
        elif param.name in named:
            value = named.pop(param.name)
        elif param.default is not _REQUIRED:
            value = param.default
        else:
            raise SpriteError(f"{handler.name}: missing argument ${param.name}")
        bound.append(_coerce(param, value))
    if named:
        raise SpriteError(f"{handler.name}: no argument named ${next(iter(named))}")
    return bound


def call(ctx: CompileContext, name: str, *args: Any, **kwargs: Any) -> tuple[Any | None, str | None]:
    """Invoke the sprite function `name`.

    Returns (value, None) or (None, error message).
    """
    handler = HANDLERS.get(name)
    if handler is None:
        return None, f"unknown function: {name}"
    try:
        return handler.fn(ctx, *_bind(handler, args, kwargs)), None
    except SpriteError as e:
        _logger.warning("%s: %s", name, e)
        return None, str(e)
    except Exception as e:
        _logger.exception("%s failed", name)
        return None, f"error in function {name}: {e}"


def _find_sheet(ctx: CompileContext, glob: str, name: str) -> ImageList:
    sheet = ctx.sprite_store().get(glob)
    if sheet is None:
        raise GlobNotFoundError(glob, name)
    return sheet


def sheet_url(ctx: CompileContext, path: str) -> str:
    """URL the compiled stylesheet uses to reference the sheet at `path`."""
    filename = os.path.basename(path)
    if ctx.http_path:
        return join_url(ctx.http_path, filename)
    return relative_url(ctx.out_dir, ctx.build_dir, filename)


def _spacing_px(spacing: SassNumber) -> int:
    """Spacing as whole px; unitless numbers count as px."""
    value = spacing.convert("px").value if spacing.unit else spacing.value
    if value < 0:
        raise SpriteError(f"spacing must not be negative: {spacing}")
    return int(round(value))


@register_handler("sprite-map($glob, $spacing: 0px)")
def sprite_map(ctx: CompileContext, glob: str, spacing: SassNumber) -> str:
    """Build (or fetch) the sheet for `glob`; returns its cache key."""
    glob = unquote(glob)
    padding = _spacing_px(spacing)
    key = f"{glob}{padding}"
    store = ctx.sprite_store()

    def _build() -> ImageList:
        sheet = ImageList(
            direction=ctx.direction,
            padding=padding,
            out_dir=ctx.out_dir,
            image_dir=ctx.image_dir,
        )
        sheet.decode(glob)
        sheet.export()
        return sheet

    store.get_or_build(key, _build)
    return key


@register_handler("sprite($map, $name, $offsetX: 0px, $offsetY: 0px)")
def sprite(ctx: CompileContext, glob: str, name: str, offset_x: SassNumber, offset_y: SassNumber) -> str:
    """Sheet URL plus background position of `name`, shifted by the offsets."""
    sheet = _find_sheet(ctx, glob, name)
    x, y = sheet.offset(name)
    path = sheet.output_path()
    pos_x = px(-x) + offset_x
    pos_y = px(-y) + offset_y
    return f'url("{sheet_url(ctx, path)}") {pos_x} {pos_y}'


@register_handler("sprite-position($map, $file)")
def sprite_position(ctx: CompileContext, glob: str, name: str) -> list[SassNumber]:
    sheet = _find_sheet(ctx, glob, name)
    x, y = sheet.offset(name)
    return [px(-x), px(-y)]


@register_handler("sprite-file($map, $name)")
def sprite_file(ctx: CompileContext, glob: str, name: str) -> list[str]:
    return [glob, name]
