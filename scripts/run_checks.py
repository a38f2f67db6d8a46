#!/usr/bin/env python3
"""Run the sass-sprites checks: ruff, pyright and pytest.

Exits non-zero on the first failing step so CI can observe status.
"""

from __future__ import annotations

import argparse
import subprocess
import sys

_TARGETS = ["sass_sprites", "tests", "scripts"]


def run(cmd: list[str]) -> int:
    print("=>", " ".join(cmd))
    return subprocess.run(cmd, check=False).returncode


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--fix", action="store_true", help="Let ruff apply fixes")
    parser.add_argument("--no-types", action="store_true", help="Skip pyright")
    parser.add_argument("--no-tests", action="store_true", help="Skip pytest")
    parser.add_argument("pytest_args", nargs=argparse.REMAINDER, help="Extra pytest arguments")
    args = parser.parse_args()

    steps: list[tuple[str, list[str]]] = [
        ("ruff", [sys.executable, "-m", "ruff", "check", *(["--fix"] if args.fix else []), *_TARGETS]),
    ]
    if not args.no_types:
        steps.append(("pyright", [sys.executable, "-m", "pyright"]))
    if not args.no_tests:
        steps.append(("pytest", [sys.executable, "-m", "pytest", "-q", *args.pytest_args]))

    for name, cmd in steps:
        rc = run(cmd)
        if rc != 0:
            print(f"{name} failed")
            return rc

    print("All checks passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
