import pytest

from sotiles.colors import lookup_color
from sotiles.xpm import (
    TRANSPARENT,
    XpmError,
    XpmImage,
    extract_strings,
    load_xpm,
    parse_xpm,
    split_words,
    strip_comments,
)


def test_split_words_spaces_and_tabs():
    assert split_words("  40 40\t3 1  ") == ["40", "40", "3", "1"]


def test_split_words_keeps_newlines_inside_words():
    assert split_words("a\nb c") == ["a\nb", "c"]


def test_split_words_empty():
    assert split_words(" \t ") == []


def test_strip_block_comment_keeps_length_and_quotes():
    text = '/* XPM */\nstatic char *x[] = {\n"a /* b */"\n};'
    result = strip_comments(text)
    assert len(result) == len(text)
    assert result.startswith(" " * len("/* XPM */"))
    assert '"a /* b */"' in result


def test_strip_line_comment_blanks_newline():
    text = "x // hi\ny"
    result = strip_comments(text)
    assert len(result) == len(text)
    assert "hi" not in result
    assert "\n" not in result
    assert result[0] == "x" and result[-1] == "y"


def test_strip_comments_without_comments_is_identity():
    text = '"a b", "c"\n'
    assert strip_comments(text) == text


def test_extract_strings():
    assert extract_strings('{"ab", "c d",\n"e"}') == ["ab", "c d", "e"]


def test_parse_basic_image():
    image = parse_xpm(["2 2 2 1", "a c #FF0000", "b c None", "ab", "ba"])
    assert (image.width, image.height) == (2, 2)
    assert image.pixel(0, 0) == 0xFF0000
    assert image.pixel(1, 0) == TRANSPARENT
    assert image.pixel(0, 1) == TRANSPARENT
    assert image.pixel(1, 1) == 0xFF0000


def test_parse_named_color_with_two_words():
    image = parse_xpm(["1 1 1 1", "x c dark red", "x"])
    assert image.pixel(0, 0) == 0x8B0000


def test_parse_two_chars_per_pixel():
    image = parse_xpm(["2 1 2 2", "aa c red", "bb c blue", "bbaa"])
    assert image.pixels == ((lookup_color("blue"), lookup_color("red")),)


def test_duplicate_key_short_keys_last_wins():
    image = parse_xpm(["1 1 2 1", "a c red", "a c blue", "a"])
    assert image.pixel(0, 0) == lookup_color("blue")


def test_duplicate_key_long_keys_first_wins():
    image = parse_xpm(["1 1 2 3", "aaa c red", "aaa c blue", "aaa"])
    assert image.pixel(0, 0) == lookup_color("red")


def test_unknown_pixel_key_is_zero():
    image = parse_xpm(["2 1 1 1", "a c white", "az"])
    assert image.pixels == ((lookup_color("white"), 0),)


def test_pixel_out_of_range():
    image = XpmImage(1, 1, ((TRANSPARENT,),))
    with pytest.raises(IndexError):
        image.pixel(1, 0)
    with pytest.raises(IndexError):
        image.pixel(0, -1)


@pytest.mark.parametrize(
    "lines",
    [
        [],
        ["0 1 1 1", "a c red", "a"],
        ["1 1"],
        ["1 1 1 1", "a s red", "a"],
        ["1 1 1 1", "a c"],
        ["1 2 1 1", "a c red", "a"],
    ],
)
def test_parse_errors(lines):
    with pytest.raises(XpmError):
        parse_xpm(lines)


def test_load_xpm_file(tmp_path):
    path = tmp_path / "tile.xpm"
    path.write_text(
        "/* XPM */\n"
        "static char *tile[] = {\n"
        "/* columns rows colors chars-per-pixel */\n"
        '"2 1 2 1 ",\n'
        '"  c None",\n'
        '". c #00FF00",\n'
        "// a row\n"
        '" ."\n'
        "};\n"
    )
    image = load_xpm(path)
    assert (image.width, image.height) == (2, 1)
    assert image.pixel(0, 0) == TRANSPARENT
    assert image.pixel(1, 0) == 0x00FF00


def test_load_xpm_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_xpm(tmp_path / "absent.xpm")