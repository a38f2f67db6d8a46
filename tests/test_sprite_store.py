import threading

import pytest

from sass_sprites.errors import DecodeError
from sass_sprites.sprite_engine import ImageList, SpriteStore
from sass_sprites.sprite_engine.metrics import metrics
from sass_sprites.sprite_engine.sprite_store import ReadWriteLock


def test_get_or_build_builds_once():
    store = SpriteStore()
    calls = {"count": 0}

    def build():
        calls["count"] += 1
        return ImageList()

    first = store.get_or_build("icons/*.png0", build)
    second = store.get_or_build("icons/*.png0", build)
    assert first is second
    assert calls["count"] == 1
    assert metrics.count("sprite_store.hit") == 1
    assert metrics.count("sprite_store.miss") == 1


def test_spacing_is_part_of_the_key():
    store = SpriteStore()
    a = store.get_or_build("icons/*.png0", ImageList)
    b = store.get_or_build("icons/*.png4", ImageList)
    assert a is not b
    assert sorted(store.keys()) == ["icons/*.png0", "icons/*.png4"]


def test_failed_build_is_not_cached():
    store = SpriteStore()

    def build():
        raise DecodeError("icons/bad.png", "not an image")

    with pytest.raises(DecodeError):
        store.get_or_build("icons/*.png0", build)
    assert "icons/*.png0" not in store
    assert len(store) == 0


def test_remove():
    store = SpriteStore()
    store.put("a", ImageList())
    store.put("b", ImageList())
    store.remove("a", "missing")
    assert store.keys() == ["b"]
    assert store.get("a") is None


def test_removed_entry_stays_usable_by_holder():
    store = SpriteStore()
    sheet = store.get_or_build("k", ImageList)
    store.remove("k")
    assert sheet.width() == 0
    assert store.get_or_build("k", ImageList) is not sheet


def test_concurrent_builds_leave_one_entry():
    store = SpriteStore()
    workers = 8
    barrier = threading.Barrier(workers)
    results: list = []

    def build():
        return ImageList()

    def worker():
        barrier.wait()
        results.append(store.get_or_build("icons/*.png0", build))

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == workers
    assert len(store) == 1
    # later callers get the surviving entry without building
    builds = metrics.count("sprite_store.build")
    assert store.get_or_build("icons/*.png0", build) is store.get("icons/*.png0")
    assert metrics.count("sprite_store.build") == builds


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    barrier = threading.Barrier(2, timeout=2)
    errors: list = []

    def reader():
        with lock.read():
            try:
                barrier.wait()
            except threading.BrokenBarrierError as e:
                errors.append(e)

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []


def test_writer_waits_for_readers():
    lock = ReadWriteLock()
    entered = threading.Event()

    def writer():
        with lock.write():
            entered.set()

    with lock.read():
        t = threading.Thread(target=writer)
        t.start()
        assert not entered.wait(0.1)
    t.join(timeout=2)
    assert entered.is_set()
