"""Command line entry point: build one sprite sheet and print its CSS."""

from __future__ import annotations

import argparse
import logging
import sys

from .context import CompileContext
from .errors import SpriteError
from .handlers import call
from .logger import parse_level, setup_logger
from .settings_manager import SettingsManager


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sass-sprites", description="Build a CSS sprite sheet from a glob")
    parser.add_argument("glob", help="Image glob, relative to --image-dir")
    parser.add_argument("--vertical", action="store_true", help="Stack images top to bottom")
    parser.add_argument("--spacing", type=int, default=0, help="Gap between images in px")
    parser.add_argument("--image-dir", help="Directory globs are resolved against")
    parser.add_argument("--build-dir", help="Directory the compiled CSS lives in")
    parser.add_argument("--out-dir", help="Directory generated sheets are written to")
    parser.add_argument("--http-path", help="Base URL for generated sheets")
    parser.add_argument("--settings", help="JSON settings file")
    parser.add_argument("--name", action="append", default=[], help="Image to print CSS for (repeatable)")
    parser.add_argument("--inline", action="store_true", help="Also print the first image as a data URI")
    parser.add_argument("--log-level", help="Set log level")
    return parser


def run(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    setup_logger(level=parse_level(args.log_level, logging.WARNING))

    overrides = {
        "image_dir": args.image_dir,
        "build_dir": args.build_dir,
        "gen_img_dir": args.out_dir,
        "http_path": args.http_path,
        "direction": "vertical" if args.vertical else None,
    }
    if args.settings:
        ctx = CompileContext.from_settings(SettingsManager(args.settings), **overrides)
    else:
        ctx = CompileContext(**{k: v for k, v in overrides.items() if v is not None})

    key, err = call(ctx, "sprite-map", args.glob, args.spacing)
    if err:
        print(f"error: {err}", file=sys.stderr)
        return 1

    sheet = ctx.sprite_store().get(key)
    if sheet is None or not len(sheet):
        print(f"no images matched {args.glob}", file=sys.stderr)
        return 1
    print(f"{sheet.output_path()} {sheet.width()}x{sheet.height()}")

    rc = 0
    for name in args.name:
        value, err = call(ctx, "sprite", key, name)
        if err:
            print(f"error: {err}", file=sys.stderr)
            rc = 1
            continue
        print(f"{name}: {value}")
    if args.inline:
        try:
            print(sheet.inline())
        except SpriteError as e:
            print(f"error: {e}", file=sys.stderr)
            rc = 1
    return rc


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
