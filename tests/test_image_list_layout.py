"""Layout arithmetic only; images are stand-ins with width/height."""

from types import SimpleNamespace

import pytest

from sass_sprites.errors import ImageNotFoundError, SpriteError
from sass_sprites.sprite_engine import NOT_FOUND, Direction, ImageList


def _sheet(sizes, direction=Direction.HORIZONTAL, padding=0, names=None):
    sheet = ImageList(direction=direction, padding=padding)
    names = names or [f"img/{i}.png" for i in range(len(sizes))]
    sheet.images = [SimpleNamespace(width=w, height=h) for w, h in sizes]
    sheet.files = list(names)
    return sheet


SIZES = [(10, 20), (30, 5), (7, 40)]


def test_horizontal_extent():
    sheet = _sheet(SIZES)
    assert sheet.width() == 47
    assert sheet.height() == 40


def test_vertical_extent():
    sheet = _sheet(SIZES, Direction.VERTICAL)
    assert sheet.width() == 30
    assert sheet.height() == 65


def test_horizontal_offsets_are_prefix_sums():
    sheet = _sheet(SIZES)
    assert [sheet.x(i) for i in range(3)] == [0, 10, 40]
    assert [sheet.y(i) for i in range(3)] == [0, 0, 0]


def test_vertical_offsets_are_prefix_sums():
    sheet = _sheet(SIZES, "vertical")
    assert [sheet.x(i) for i in range(3)] == [0, 0, 0]
    assert [sheet.y(i) for i in range(3)] == [0, 20, 25]


def test_padding_adds_gaps_along_layout_axis():
    sheet = _sheet(SIZES, padding=4)
    assert sheet.width() == 47 + 8
    assert sheet.height() == 40
    assert sheet.x(2) == 48

    vsheet = _sheet(SIZES, Direction.VERTICAL, padding=4)
    assert vsheet.height() == 65 + 8
    assert vsheet.y(1) == 24


def test_position_is_negated_offset():
    sheet = _sheet(SIZES)
    assert sheet.position("img/0.png") == "0px 0px"
    assert sheet.position("1") == "-10px 0px"
    assert sheet.offset("2.png") == (40, 0)


def test_lookup_matches_path_basename_and_stem():
    sheet = _sheet([(1, 1), (2, 2)], names=["icons/home.png", "icons/home.gif"])
    assert sheet.lookup("icons/home.gif") == 1
    assert sheet.lookup("home.gif") == 1
    # first match in list order wins
    assert sheet.lookup("home") == 0


def test_lookup_miss_returns_sentinel():
    sheet = _sheet(SIZES)
    assert sheet.lookup("missing") == NOT_FOUND


def test_position_on_missing_name_raises():
    sheet = _sheet(SIZES)
    with pytest.raises(ImageNotFoundError) as exc:
        sheet.position("missing")
    assert exc.value.names == ["0", "1", "2"]
    assert "try one of these" in str(exc.value)


def test_out_of_range_position():
    sheet = _sheet(SIZES)
    with pytest.raises(IndexError):
        sheet.x(-1)


def test_dimensions_and_image_size():
    sheet = _sheet(SIZES)
    assert sheet.dimensions("1") == "width: 30px;\nheight: 5px"
    assert sheet.dimensions("nope") == ""
    assert sheet.image_width("2") == 7
    assert sheet.image_height("2") == 40
    assert sheet.image_width("nope") == NOT_FOUND


def test_empty_list_is_transparent():
    sheet = ImageList()
    assert sheet.width() == 0
    assert sheet.height() == 0
    assert sheet.combine() is None
    assert sheet.export() == ""
    assert sheet.css("anything") == "transparent"
    with pytest.raises(SpriteError):
        sheet.output_path()


def test_names_and_str():
    sheet = _sheet([(1, 1), (1, 1)], names=["a/x.png", "a/y.png"])
    assert sheet.names() == ["x", "y"]
    assert str(sheet) == "x y"


def test_direction_parse():
    assert Direction.parse("Vertical") is Direction.VERTICAL
    assert Direction.parse(Direction.HORIZONTAL) is Direction.HORIZONTAL
    with pytest.raises(SpriteError):
        Direction.parse("diagonal")
