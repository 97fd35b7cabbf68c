import io

import pytest

from sotiles.text import (
    BUFFER_SIZE,
    format_message,
    line_length,
    prt,
    read_lines,
    strspn,
)


def test_format_string_argument():
    assert format_message("Map saved to %s", "map.ber") == "Map saved to map.ber"


def test_format_null_string():
    assert format_message("%s", None) == "(null)"


def test_format_integer_minimum():
    assert format_message("%i", -2147483648) == "-2147483648"


def test_format_integer_positive():
    assert format_message("moves: %i", 42) == "moves: " + str(42)


def test_format_char_from_str_and_int():
    assert format_message("%c selected\n", "P") == "P selected\n"
    assert format_message("%c selected\n", ord("C")) == "C selected\n"


def test_format_unknown_specifier_is_dropped():
    assert format_message("a%zb") == "ab"


def test_format_without_specifiers_is_unchanged():
    text = "How to edit the map:\n0 - ground\n"
    assert format_message(text) == text


def test_format_missing_argument_raises():
    with pytest.raises(TypeError):
        format_message("%s and %s", "one")


def test_prt_writes_to_stdout(capsys):
    prt("New map created to %s\n", "level.ber")
    assert capsys.readouterr().out == "New map created to level.ber\n"


def test_strspn_all_accepted():
    row = "10C0P1"
    assert strspn(row, "01CEPD") == len(row)


def test_strspn_stops_at_rejected_char():
    row = "10X01"
    assert strspn(row, "01") == row.index("X")


def test_strspn_stops_at_newline():
    line = "11111\n"
    assert strspn(line, "1") == line_length(line, False)


def test_strspn_empty_accept():
    assert strspn("abc", "") == 0


def test_line_length_modes():
    assert line_length("abc\n", True) == len("abc\n")
    assert line_length("abc\n", False) == len("abc")


def test_line_length_without_newline():
    assert line_length("abc", True) == line_length("abc", False) == len("abc")


def test_line_length_none():
    assert line_length(None, True) == 0


def test_read_lines_matches_splitlines():
    text = "1111\n1PC1\n" + "1" * (BUFFER_SIZE * 2 + 7) + "\n1E01"
    assert list(read_lines(io.StringIO(text))) == text.splitlines(keepends=True)


def test_read_lines_bytes():
    data = b"111\n1P1\n111\n"
    assert list(read_lines(io.BytesIO(data))) == data.splitlines(keepends=True)


def test_read_lines_empty_stream():
    assert list(read_lines(io.StringIO(""))) == []


def test_read_lines_rejoin_round_trip():
    text = "ab\n\ncd\n" * 60
    assert "".join(read_lines(io.StringIO(text))) == text