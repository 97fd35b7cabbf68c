import pytest

from sotiles.colors import NO_COLOR, lookup_color


@pytest.mark.parametrize(
    "name, expected",
    [
        ("red", 0xff0000),
        ("snow", 0xfffafa),
        ("navy", 0x80),
        ("gray50", 0x7f7f7f),
        ("darkred", 0x8b0000),
        ("black", 0x0),
    ],
)
def test_known_names(name, expected):
    assert lookup_color(name) == expected


def test_lookup_ignores_case():
    assert lookup_color("ReD") == lookup_color("red")
    assert lookup_color("GHOSTWHITE") == lookup_color("ghostwhite")


def test_suffix_joined_with_space():
    assert lookup_color("ghost", "white") == 0xf8f8ff
    assert lookup_color("light", "green") == lookup_color("lightgreen")


def test_first_duplicate_entry_wins():
    assert lookup_color("dark", "slate") == 0x2f4f4f
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xfafad2


def test_none_is_transparent():
    assert lookup_color("none") == NO_COLOR
    assert lookup_color("None") == -1


def test_unknown_name_is_black():
    assert lookup_color("nosuchcolour") == 0
    assert lookup_color("red", "planet") == 0


@pytest.mark.parametrize("value", [0xff0000, 0x00ff00, 0x123456, 0xffffff, 0])
def test_hex_round_trip(value):
    assert lookup_color(f"#{value:06x}") == value
    assert lookup_color(f"#{value:06X}") == value


def test_hex_ignores_suffix():
    assert lookup_color("#0000ff", "ignored") == 0xff


def test_hex_with_trailing_garbage_reads_leading_digits():
    assert lookup_color("#ffzz") == 0xff


def test_empty_or_invalid_hex_is_zero():
    assert lookup_color("#") == 0
    assert lookup_color("#zz") == 0


def test_overlong_joined_name_does_not_match():
    assert lookup_color("x" * 70, "white") == 0