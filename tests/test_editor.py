import random

import pytest

from sotiles.editor import (
    SELECTABLE,
    Editor,
    create_blank_map,
    save_map,
    selectable_char,
    validate_size,
)
from sotiles.game import ONE_NP, ZERO_NP, Game
from sotiles.mapcheck import MapInfo, check_map


def _game():
    info = MapInfo(rows=("11111", "1PCE1", "11111"), player=(1, 1), collectibles=1)
    return Game(info, random.Random(1))


@pytest.mark.parametrize(
    "key, expected",
    [
        (ord("c"), "C"),
        (ord("e"), "E"),
        (ord("p"), "P"),
        (ord("d"), "D"),
        (ord("C"), "C"),
        ("0", "0"),
        (ord("1"), "1"),
        (ZERO_NP, "0"),
        (ONE_NP, "1"),
    ],
)
def test_selectable_char_accepts(key, expected):
    assert selectable_char(key) == expected


@pytest.mark.parametrize("key", [ord("x"), ord("z"), ord("s"), 65362, -5])
def test_selectable_char_rejects(key):
    assert selectable_char(key) is None


def test_selectable_results_are_in_set():
    results = {selectable_char(code) for code in range(128)} - {None}
    assert results == set(SELECTABLE)


@pytest.mark.parametrize("size", [(5, 5), (60, 31), (20, 10)])
def test_validate_size_accepts(size):
    assert validate_size(*size) == size


@pytest.mark.parametrize("size", [(4, 5), (5, 4), (61, 10), (10, 32)])
def test_validate_size_rejects(size):
    with pytest.raises(ValueError):
        validate_size(*size)


@pytest.mark.parametrize("width, height", [(5, 5), (12, 7), (60, 31)])
def test_blank_map_shape(width, height):
    rows = create_blank_map(width, height)
    assert len(rows) == height
    assert all(len(row) == width for row in rows)
    assert rows[0] == rows[-1] == "1" * width
    assert all(row[0] == row[-1] == "1" for row in rows)
    assert rows[1].startswith("1PCE")


def test_blank_map_rejects_small():
    with pytest.raises(ValueError):
        create_blank_map(3, 8)


def test_blank_map_is_valid_map(tmp_path):
    path = tmp_path / "blank.ber"
    save_map(path, create_blank_map(8, 6))
    info = check_map(path)
    assert info.player == (1, 1)
    assert info.collectibles == 1
    assert (info.width, info.height) == (8, 6)


def test_save_map_writes_lines(tmp_path):
    path = tmp_path / "out.ber"
    rows = ["111", "1P1", "111"]
    save_map(path, rows)
    assert path.read_text(encoding="latin-1") == "111\n1P1\n111\n"


def test_editor_turns_game_editing_on():
    game = _game()
    editor = Editor(game)
    assert game.editor_on is True
    assert editor.selected == "1"


def test_editor_select_and_paint():
    game = _game()
    editor = Editor(game)
    assert editor.select(ord("d")) == "D"
    assert editor.select(ord("x")) is None
    assert editor.selected == "D"
    editor.paint(2, 1)
    assert game.tile(2, 1) == "D"


def test_movement_ignored_while_editing():
    game = _game()
    Editor(game)
    game.key_press("d")
    assert game.player == (1, 1)
    assert game.moves == 0