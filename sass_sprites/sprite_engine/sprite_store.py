"""SpriteStore: per-compile cache of built sprite sheets.

Lookups share a read lock. A missing sheet is built with no lock held and then
inserted under the write lock. Two callers racing on the same key may both
build it; the last insert wins. Sheets for one key are interchangeable, so the
only cost is the duplicate work. A sheet is exported before it is inserted,
so readers never see a partially built one.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sass_sprites.logger import get_logger

from .image_list import ImageList
from .metrics import metrics

_logger = get_logger("sprite_store")


class ReadWriteLock:
    """Many concurrent readers or a single writer."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            # Waiting writers go first so a stream of readers cannot starve them
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class SpriteStore:
    def __init__(self) -> None:
        self._entries: dict[str, ImageList] = {}
        self._lock = ReadWriteLock()

    def __contains__(self, key: object) -> bool:
        with self._lock.read():
            return key in self._entries

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)

    def keys(self) -> list[str]:
        with self._lock.read():
            return list(self._entries)

    def get(self, key: str) -> ImageList | None:
        with self._lock.read():
            return self._entries.get(key)

    def put(self, key: str, sheet: ImageList) -> None:
        with self._lock.write():
            self._entries[key] = sheet

    def get_or_build(self, key: str, build: Callable[[], ImageList]) -> ImageList:
        """Return the cached sheet for `key`, building and storing it on a miss.

        Exceptions from `build` propagate and nothing is stored.
        """
        sheet = self.get(key)
        if sheet is not None:
            metrics.inc("sprite_store.hit")
            _logger.debug("cache hit: %s", key)
            return sheet

        metrics.inc("sprite_store.miss")
        with metrics.timed("sprite_store.build_duration"):
            sheet = build()
        metrics.inc("sprite_store.build")

        self.put(key, sheet)
        _logger.debug("cached sheet: %s", key)
        return sheet

    def remove(self, *keys: str) -> None:
        with self._lock.write():
            for key in keys:
                self._entries.pop(key, None)
