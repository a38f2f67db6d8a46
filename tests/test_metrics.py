from sass_sprites.sprite_engine.metrics import metrics


def test_counters_and_timings():
    metrics.inc("decoder.decoded")
    metrics.inc("decoder.decoded", 2)
    with metrics.timed("image_list.export_duration"):
        pass

    snap = metrics.snapshot()
    assert snap["counters"]["decoder.decoded"] == 3
    assert len(snap["timings"]["image_list.export_duration"]) == 1
    assert metrics.count("decoder.decoded") == 3
    assert metrics.count("never.touched") == 0


def test_timed_records_on_error():
    try:
        with metrics.timed("sprite_store.build_duration"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert "sprite_store.build_duration" in metrics.snapshot()["timings"]


def test_reset():
    metrics.inc("x")
    metrics.reset()
    assert metrics.snapshot() == {"counters": {}, "timings": {}}
