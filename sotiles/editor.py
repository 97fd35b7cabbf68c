"""Map editing: tile selection, painting, saving and blank maps."""

from __future__ import annotations

from collections.abc import Iterable
from os import PathLike

from sotiles.game import ONE_NP, ZERO_NP, Game
from sotiles.mapcheck import COLLECTIBLE, DANGER, EXIT, GROUND, PLAYER, WALL

MIN_SIZE = 5
MAX_WIDTH = 60
MAX_HEIGHT = 31
DEFAULT_SAVE_NAME = "map.ber"

SELECTABLE = (WALL, GROUND, COLLECTIBLE, EXIT, PLAYER, DANGER)
"""Map characters the editor can paint with."""

HELP = (
    "How to edit the map:\n"
    "0 - ground\n"
    "1 - wall\n"
    "e - exit\n"
    "c - collectible\n"
    "p - player\n"
    "d - danger\n"
    "s - save the map\n"
    "n - create a new map\n"
)

SIZE_HINT = "Size has to be:\n5 < map_width < 60\n5 < map_height < 31\n"


def selectable_char(key: int | str) -> str | None:
    """Return the map character a key selects, or ``None`` if it selects none.

    Lower-case letters from ``a`` to ``y`` count as their upper-case form and
    the keypad digits 0 and 1 as the plain digits.
    """
    code = ord(key) if isinstance(key, str) else key
    if code == ZERO_NP:
        code = ord(GROUND)
    elif code == ONE_NP:
        code = ord(WALL)
    if ord("a") <= code < ord("z"):
        code -= 32
    if not 0 <= code < 0x110000:
        return None
    char = chr(code)
    return char if char in SELECTABLE else None


def validate_size(width: int, height: int) -> tuple[int, int]:
    """Check the size of a new map and return it; raise ``ValueError`` if invalid."""
    if width < MIN_SIZE or height < MIN_SIZE or width > MAX_WIDTH or height > MAX_HEIGHT:
        raise ValueError(SIZE_HINT)
    return width, height


def create_blank_map(width: int, height: int) -> list[str]:
    """Build a walled map with the player, a collectible and the exit in a row."""
    validate_size(width, height)
    rows = []
    for y in range(height):
        if y in (0, height - 1):
            rows.append(WALL * width)
        elif y == 1:
            rows.append(WALL + PLAYER + COLLECTIBLE + EXIT + GROUND * (width - 5) + WALL)
        else:
            rows.append(WALL + GROUND * (width - 2) + WALL)
    return rows


def save_map(path: str | PathLike[str], rows: Iterable[str]) -> None:
    """Write map rows to ``path``, one line each."""
    with open(path, "w", encoding="latin-1", newline="") as stream:
        stream.writelines(f"{row}\n" for row in rows)


class Editor:
    """Edits the map of a running game."""

    def __init__(self, game: Game) -> None:
        self.game = game
        self.selected = WALL
        game.editor_on = True

    def select(self, key: int | str) -> str | None:
        """Select the character a key stands for; return it, or ``None``."""
        char = selectable_char(key)
        if char is not None:
            self.selected = char
        return char

    def paint(self, x: int, y: int) -> None:
        """Put the selected character at ``(x, y)``."""
        self.game.set_tile(x, y, self.selected)