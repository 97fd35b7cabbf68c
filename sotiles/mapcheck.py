"""Validation of ``.ber`` map files."""

from __future__ import annotations

import os
from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from os import PathLike

from sotiles.text import line_length, read_lines, strspn

MAP_SUFFIX = ".ber"
WALL = "1"
GROUND = "0"
COLLECTIBLE = "C"
EXIT = "E"
PLAYER = "P"
DANGER = "D"
MAP_CHARS = "01CEPD"


class ErrorCode(IntEnum):
    """Reasons a map or the command line is rejected."""

    MEMORY = -1
    ARGUMENTS = 0
    NAME = 1
    FILE = 2
    SIZE = 3
    WALLS = 4
    ELEMENTS = 5
    PATH = 6


_MESSAGES = {
    ErrorCode.ARGUMENTS: "Needs only 1 argument",
    ErrorCode.NAME: "Invalid map name",
    ErrorCode.FILE: "File doesn't exist or other",
    ErrorCode.SIZE: "Invalid map size",
    ErrorCode.WALLS: "Invalid walls or characters",
    ErrorCode.ELEMENTS: "Player/exit is not 1 || no collectibles",
    ErrorCode.PATH: "Invalid path",
}
_DEFAULT_MESSAGE = "No memory available or other"


def error_message(code: int) -> str:
    """Return the user-facing text for an error code."""
    return _MESSAGES.get(code, _DEFAULT_MESSAGE)


class MapError(Exception):
    """Raised when a map cannot be used; ``code`` tells why."""

    def __init__(self, code: ErrorCode) -> None:
        super().__init__(error_message(code))
        self.code = code


@dataclass(frozen=True)
class MapInfo:
    """A validated map with its player start and collectible count."""

    rows: tuple[str, ...]
    player: tuple[int, int]
    collectibles: int

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)


def check_map_name(path: str | PathLike[str]) -> None:
    """Reject paths that do not end in ``.ber``."""
    name = os.fspath(path)
    if len(name) < len(MAP_SUFFIX) or not name.endswith(MAP_SUFFIX):
        raise MapError(ErrorCode.NAME)


def read_map(path: str | PathLike[str]) -> list[str]:
    """Read a map file into rows, checking it is a walled rectangle."""
    check_map_name(path)
    try:
        with open(path, encoding="latin-1", newline="") as stream:
            lines = list(read_lines(stream))
    except OSError as exc:
        raise MapError(ErrorCode.FILE) from exc

    rows: list[str] = []
    width = None
    for line in lines:
        length = line_length(line, False)
        if width is None:
            width = length
        row = line[:length]
        if length != width or not row.startswith(WALL) or not row.endswith(WALL):
            raise MapError(ErrorCode.WALLS)
        rows.append(row)
    if len(rows) < 3 or (width or 0) < 3:
        raise MapError(ErrorCode.SIZE)
    return rows


def check_walls(rows: list[str], width: int) -> None:
    """Check the border rows are walls and every character is allowed."""
    last = len(rows) - 1
    for index, row in enumerate(rows):
        border = index in (0, last)
        if (border and strspn(row, WALL) != width) or strspn(row, MAP_CHARS) != width:
            raise MapError(ErrorCode.WALLS)


def count_elements(rows: list[str]) -> tuple[int, int, int]:
    """Count players, exits and collectibles in the inner rows."""
    counts = Counter("".join(rows[1:-1]))
    return counts[PLAYER], counts[EXIT], counts[COLLECTIBLE]


def find_player(rows: list[str]) -> tuple[int, int]:
    """Return the ``(x, y)`` of the last player mark in reading order."""
    found = None
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if char == PLAYER:
                found = (x, y)
    if found is None:
        raise MapError(ErrorCode.ELEMENTS)
    return found


def flood_fill(grid: list[list[str]], x: int, y: int) -> tuple[int, int]:
    """Fill every cell reachable from ``(x, y)`` with walls.

    Walls and dangers block the fill. Returns how many collectibles and
    exits were reached.
    """
    collected = exits = 0
    stack = [(x, y)]
    while stack:
        cx, cy = stack.pop()
        if not (0 <= cy < len(grid) and 0 <= cx < len(grid[cy])):
            continue
        cell = grid[cy][cx]
        if cell in (WALL, DANGER):
            continue
        if cell == COLLECTIBLE:
            collected += 1
        elif cell == EXIT:
            exits += 1
        grid[cy][cx] = WALL
        stack.extend(((cx, cy - 1), (cx, cy + 1), (cx + 1, cy), (cx - 1, cy)))
    return collected, exits


def check_map(path: str | PathLike[str]) -> MapInfo:
    """Read and fully validate a map file."""
    rows = read_map(path)
    check_walls(rows, len(rows[0]))
    players, exits, collectibles = count_elements(rows)
    if players != 1 or exits != 1 or not collectibles:
        raise MapError(ErrorCode.ELEMENTS)
    player = find_player(rows)
    grid = [list(row) for row in rows]
    reached_collectibles, reached_exits = flood_fill(grid, *player)
    if reached_collectibles != collectibles or reached_exits != exits:
        raise MapError(ErrorCode.PATH)
    return MapInfo(tuple(rows), player, collectibles)