from pathlib import Path

from sass_sprites.path_utils import abs_path_str, join_url, relative_url, sanitize_filename


def test_sanitize_filename():
    assert sanitize_filename("img/icons-Ab12Cd.png") == "imgicons-Ab12Cd.png"
    assert sanitize_filename("*sheet*.png") == "sheet.png"


def test_relative_url(tmp_path: Path):
    build = tmp_path / "build"
    assert relative_url(str(build / "img"), str(build), "s.png") == "img/s.png"
    assert relative_url(str(tmp_path / "gen"), str(build), "s.png") == "../gen/s.png"


def test_join_url():
    assert join_url("http://cdn.example.com", "s.png") == "http://cdn.example.com/s.png"
    assert join_url("http://cdn.example.com/a/", "s.png") == "http://cdn.example.com/a/s.png"
    assert join_url("/static", "s.png") == "/static/s.png"


def test_abs_path_str(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert abs_path_str("x/y") == str((tmp_path / "x" / "y").resolve())
