"""Reader for XPM images."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from sotiles.colors import NO_COLOR, lookup_color

TRANSPARENT = 0xFF000000
"""Pixel value stored for the colour ``None``."""

_WORD_SPLIT = re.compile(r"[ \t]+")
_QUOTED = re.compile(r'"([^"]*)"')
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read."""


@dataclass(frozen=True)
class XpmImage:
    """A decoded image; ``pixels`` holds rows of 32-bit pixel values."""

    width: int
    height: int
    pixels: tuple[tuple[int, ...], ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel value at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"pixel ({x}, {y}) outside {self.width}x{self.height} image"
            )
        return self.pixels[y][x]


def split_words(text: str) -> list[str]:
    """Split ``text`` on spaces and tabs, dropping empty words."""
    return [word for word in _WORD_SPLIT.split(text) if word]


def _find_outside_quotes(text: str, token: str) -> int:
    in_quote = False
    last_start = len(text) - len(token)
    for pos, char in enumerate(text):
        if pos > last_start:
            break
        if char == '"':
            in_quote = not in_quote
        if not in_quote and text.startswith(token, pos):
            return pos
    return -1


def _blank(text: str, begin: int, stop: int) -> str:
    return text[:begin] + " " * len(text[begin:stop]) + text[stop:]


def strip_comments(text: str) -> str:
    """Blank out ``/* */`` and ``//`` comments outside quoted strings.

    Comment characters are replaced by spaces, so the length is unchanged.
    """
    while (begin := _find_outside_quotes(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        stop = end + 2 if end != -1 else begin + 3
        text = _blank(text, begin, stop)
    while (begin := _find_outside_quotes(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        stop = end + 1 if end != -1 else begin + 2
        text = _blank(text, begin, stop)
    return text


def extract_strings(text: str) -> list[str]:
    """Return the contents of the successive double-quoted strings in ``text``."""
    return _QUOTED.findall(text)


def _atoi(word: str) -> int:
    match = _LEADING_INT.match(word)
    return int(match.group(1)) if match else 0


def _pixel_value(color: int) -> int:
    return TRANSPARENT if color == NO_COLOR else color & 0xFFFFFFFF


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Decode XPM data given as its sequence of strings."""
    rows: Iterator[str] = iter(lines)

    def next_line() -> str:
        line = next(rows, None)
        if line is None:
            raise XpmError("unexpected end of XPM data")
        return line

    header = split_words(next_line())
    if len(header) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError("invalid XPM header")

    # Small keys are stored in a direct table where later entries overwrite
    # earlier ones; longer keys keep their first definition.
    direct = cpp <= 2
    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = next_line()
        words = split_words(line[cpp:])
        try:
            index = words.index("c")
        except ValueError:
            raise XpmError(f"colour line without 'c' key: {line!r}") from None
        if index + 1 >= len(words):
            raise XpmError(f"colour line without a colour: {line!r}")
        suffix = words[index + 2] if index + 2 < len(words) else None
        value = lookup_color(words[index + 1], suffix)
        key = line[:cpp]
        if direct:
            palette[key] = value
        else:
            palette.setdefault(key, value)

    pixels = []
    for _ in range(height):
        line = next_line()
        pixels.append(
            tuple(
                _pixel_value(palette.get(line[x * cpp:(x + 1) * cpp], 0))
                for x in range(width)
            )
        )
    return XpmImage(width, height, tuple(pixels))


def load_xpm(path: str | PathLike[str]) -> XpmImage:
    """Read and decode an XPM file."""
    text = Path(path).read_text(encoding="latin-1")
    return parse_xpm(extract_strings(strip_comments(text)))