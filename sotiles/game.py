"""Game state: moving the player, collecting and finishing."""

from __future__ import annotations

import random
from enum import Enum

from sotiles.mapcheck import COLLECTIBLE, DANGER, EXIT, GROUND, WALL, MapInfo, find_player

UP_KEY = 65362
LEFT_KEY = 65361
DOWN_KEY = 65364
RIGHT_KEY = 65363
ESC_KEY = 65307
SHIFT = 65506
ONE_NP = 65436
ZERO_NP = 65438

EXIT_FRAME_BASE = 143
EXIT_FRAME_CHOICES = 4
OPEN_EXIT_SHIFT = 8
EXIT_TEXTURE = "./textures/xpm/tile/tile{}.xpm"

_DIRECTIONS = {
    UP_KEY: (0, -1),
    ord("w"): (0, -1),
    LEFT_KEY: (-1, 0),
    ord("a"): (-1, 0),
    RIGHT_KEY: (1, 0),
    ord("d"): (1, 0),
    DOWN_KEY: (0, 1),
    ord("s"): (0, 1),
}


class Outcome(Enum):
    """State of play after an action."""

    PLAYING = "playing"
    WON = "won"
    LOST = "lost"
    CLOSED = "closed"


def _keycode(key: int | str) -> int:
    return ord(key) if isinstance(key, str) else key


class Game:
    """A running game on a validated map."""

    def __init__(self, info: MapInfo, rng: random.Random | None = None) -> None:
        self.info = info
        self.rng = rng if rng is not None else random.Random()
        self.editor_on = False
        self.keycode = 0
        self.frame_of_release = 0
        self.restart()

    @property
    def width(self) -> int:
        return self.info.width

    @property
    def height(self) -> int:
        return self.info.height

    @property
    def rows(self) -> list[str]:
        """The current map as strings."""
        return ["".join(row) for row in self.grid]

    def tile(self, x: int, y: int) -> str:
        """Return the map character at ``(x, y)``."""
        return self.grid[y][x]

    def set_tile(self, x: int, y: int, char: str) -> None:
        """Replace the map character at ``(x, y)``."""
        self.grid[y][x] = char

    def key_press(self, key: int | str) -> Outcome:
        """Handle a pressed key and report the outcome."""
        key = _keycode(key)
        self.keycode = key
        if key in (ESC_KEY, ord("q")):
            return Outcome.CLOSED
        if key == ord("r"):
            self.restart()
            return Outcome.PLAYING
        if self.editor_on or key not in _DIRECTIONS:
            return Outcome.PLAYING
        return self.move(*_DIRECTIONS[key])

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= y < len(self.grid) and 0 <= x < len(self.grid[y])

    def move(self, dx: int, dy: int) -> Outcome:
        """Try to move the player by ``(dx, dy)``."""
        x, y = self.player[0] + dx, self.player[1] + dy
        if not self._inside(x, y) or self.grid[y][x] == WALL:
            return Outcome.PLAYING
        self.player = (x, y)
        target = self.grid[y][x]
        if target == COLLECTIBLE:
            self.grid[y][x] = GROUND
            self.collectibles -= 1
            if not self.collectibles:
                self.exit_frame -= OPEN_EXIT_SHIFT
        elif target == DANGER:
            return Outcome.LOST
        elif target == EXIT and not self.collectibles:
            return Outcome.WON
        self.moves += 1
        return Outcome.PLAYING

    def restart(self) -> None:
        """Reset the map, the player and the counters."""
        self.grid = [list(row) for row in self.info.rows]
        self.player = find_player(self.info.rows)
        self.collectibles = self.info.collectibles
        self.total_collectibles = self.info.collectibles
        self.moves = 0
        self.current_frame = 0
        self.exit_frame = EXIT_FRAME_BASE + self.rng.randrange(EXIT_FRAME_CHOICES)

    def finish_message(self) -> str:
        """Message shown when the game ends, based on the player's tile."""
        here = self.tile(*self.player)
        if here == DANGER:
            return "You lose!"
        if here == EXIT and not self.collectibles:
            return "You win!"
        return "Program closed!"

    def exit_texture(self) -> str:
        """Path of the texture currently used for the exit."""
        return EXIT_TEXTURE.format(self.exit_frame)