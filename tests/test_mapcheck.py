import pytest

from sotiles.mapcheck import (
    ErrorCode,
    MapError,
    check_map,
    check_map_name,
    check_walls,
    count_elements,
    error_message,
    find_player,
    flood_fill,
    read_map,
)

VALID = "11111\n1PCE1\n11111\n"


def write_map(tmp_path, text, name="map.ber"):
    path = tmp_path / name
    path.write_text(text, encoding="latin-1")
    return path


def test_error_messages():
    assert error_message(ErrorCode.NAME) == "Invalid map name"
    assert error_message(ErrorCode.PATH) == "Invalid path"
    assert error_message(ErrorCode.MEMORY) == "No memory available or other"


def test_map_error_carries_message():
    error = MapError(ErrorCode.SIZE)
    assert str(error) == "Invalid map size"


@pytest.mark.parametrize("name", ["map.txt", "ber", "map.ber.txt", "mapber"])
def test_bad_names(name):
    with pytest.raises(MapError) as info:
        check_map_name(name)
    assert info.value.code == ErrorCode.NAME


def test_bad_name_checked_before_reading(tmp_path):
    path = write_map(tmp_path, VALID, name="map.txt")
    with pytest.raises(MapError) as info:
        read_map(path)
    assert info.value.code == ErrorCode.NAME


def test_missing_file(tmp_path):
    with pytest.raises(MapError) as info:
        read_map(tmp_path / "absent.ber")
    assert info.value.code == ErrorCode.FILE


def test_read_map_rows(tmp_path):
    rows = read_map(write_map(tmp_path, VALID))
    assert rows == ["11111", "1PCE1", "11111"]


def test_read_map_without_final_newline(tmp_path):
    rows = read_map(write_map(tmp_path, VALID.rstrip("\n")))
    assert rows == ["11111", "1PCE1", "11111"]


def test_non_rectangular(tmp_path):
    path = write_map(tmp_path, "11111\n1PCE11\n11111\n")
    with pytest.raises(MapError) as info:
        read_map(path)
    assert info.value.code == ErrorCode.WALLS


def test_side_walls_required(tmp_path):
    path = write_map(tmp_path, "11111\n0PCE1\n11111\n")
    with pytest.raises(MapError) as info:
        read_map(path)
    assert info.value.code == ErrorCode.WALLS


def test_too_small(tmp_path):
    path = write_map(tmp_path, "11111\n11111\n")
    with pytest.raises(MapError) as info:
        read_map(path)
    assert info.value.code == ErrorCode.SIZE


def test_empty_file(tmp_path):
    path = write_map(tmp_path, "")
    with pytest.raises(MapError) as info:
        read_map(path)
    assert info.value.code == ErrorCode.SIZE


def test_check_walls_border():
    with pytest.raises(MapError) as info:
        check_walls(["11011", "1PCE1", "11111"], 5)
    assert info.value.code == ErrorCode.WALLS


def test_check_walls_invalid_char():
    with pytest.raises(MapError) as info:
        check_walls(["11111", "1PXE1", "11111"], 5)
    assert info.value.code == ErrorCode.WALLS


def test_check_walls_accepts_valid():
    rows = ["111111", "1PCED1", "111111"]
    check_walls(rows, 6)
    assert count_elements(rows) == (1, 1, 1)


def test_count_elements_ignores_borders():
    rows = ["1PCE1", "1PCC1", "1CEP1"]
    assert count_elements(rows) == (1, 0, 2)


def test_find_player():
    assert find_player(["11111", "10001", "1P001", "11111"]) == (1, 2)


def test_find_player_missing():
    with pytest.raises(MapError) as info:
        find_player(["111", "101", "111"])
    assert info.value.code == ErrorCode.ELEMENTS


def test_flood_fill_blocked_by_danger():
    grid = [list("11111"), list("1PDC1"), list("11111")]
    assert flood_fill(grid, 1, 1) == (0, 0)
    assert grid[1][1] == "1"
    assert grid[1][3] == "C"


def test_flood_fill_reaches_all():
    grid = [list("11111"), list("1PCE1"), list("11111")]
    assert flood_fill(grid, 1, 1) == (1, 1)
    assert all(cell == "1" for row in grid for cell in row)


def test_check_map_valid(tmp_path):
    info = check_map(write_map(tmp_path, VALID))
    assert info.rows == ("11111", "1PCE1", "11111")
    assert info.player == (1, 1)
    assert info.collectibles == 1
    assert (info.width, info.height) == (5, 3)


def test_check_map_two_players(tmp_path):
    path = write_map(tmp_path, "111111\n1PPCE1\n111111\n")
    with pytest.raises(MapError) as info:
        check_map(path)
    assert info.value.code == ErrorCode.ELEMENTS


def test_check_map_no_collectible(tmp_path):
    path = write_map(tmp_path, "11111\n1P0E1\n11111\n")
    with pytest.raises(MapError) as info:
        check_map(path)
    assert info.value.code == ErrorCode.ELEMENTS


def test_check_map_unreachable(tmp_path):
    path = write_map(tmp_path, "1111111\n1P01CE1\n1111111\n")
    with pytest.raises(MapError) as info:
        check_map(path)
    assert info.value.code == ErrorCode.PATH


def test_check_map_exit_behind_danger(tmp_path):
    path = write_map(tmp_path, "1111111\n1PC0DE1\n1111111\n")
    with pytest.raises(MapError) as info:
        check_map(path)
    assert info.value.code == ErrorCode.PATH