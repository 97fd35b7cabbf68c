"""The windowed game: textures, drawing and the event loop."""

from __future__ import annotations

import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import random
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from itertools import product
from os import PathLike
from pathlib import Path

import pygame

from sotiles.editor import (
    DEFAULT_SAVE_NAME,
    HELP,
    SIZE_HINT,
    Editor,
    create_blank_map,
    save_map,
    validate_size,
)
from sotiles.game import (
    DOWN_KEY,
    ESC_KEY,
    EXIT_FRAME_BASE,
    EXIT_TEXTURE,
    LEFT_KEY,
    ONE_NP,
    RIGHT_KEY,
    SHIFT,
    UP_KEY,
    ZERO_NP,
    Game,
    Outcome,
)
from sotiles.mapcheck import (
    COLLECTIBLE,
    DANGER,
    EXIT,
    GROUND,
    PLAYER,
    WALL,
    ErrorCode,
    MapError,
    check_map,
    error_message,
)
from sotiles.text import prt
from sotiles.xpm import TRANSPARENT, XpmError, XpmImage, load_xpm

TILE_SIZE = 32
ANIMATION_DELAY = 20000
"""Frames after a key release before the player stops walking."""

DIRECTIONS = ("down", "up", "left", "right")
POSES = ("stand", "right", "left")

WALL_TEXTURE = "./textures/xpm/tile/tile001.xpm"
DANGER_TEXTURE = "./textures/xpm/tile/tile016.xpm"
WALK_TEXTURE = "./textures/xpm/walk/walk{:02d}.xpm"
FOOD_TEXTURE = "./textures/xpm/food/food{}.xpm"
FLOOR_TEXTURE = "./textures/xpm/floor/floor{}.xpm"
FOOD_COUNT = 64
FLOOR_BASE = 227
FLOOR_VARIANTS = 5

_TEXT_COLOR = (255, 255, 255)
_DIRECTION_NAMES = {
    UP_KEY: "up",
    ord("w"): "up",
    LEFT_KEY: "left",
    ord("a"): "left",
    RIGHT_KEY: "right",
    ord("d"): "right",
    DOWN_KEY: "down",
    ord("s"): "down",
}
_PYGAME_KEYS = {
    pygame.K_UP: UP_KEY,
    pygame.K_DOWN: DOWN_KEY,
    pygame.K_LEFT: LEFT_KEY,
    pygame.K_RIGHT: RIGHT_KEY,
    pygame.K_ESCAPE: ESC_KEY,
    pygame.K_LSHIFT: SHIFT,
    pygame.K_KP0: ZERO_NP,
    pygame.K_KP1: ONE_NP,
}
_FINISH_COLORS = {"You lose!": "\033[1;31m", "You win!": "\033[1;32m"}


def _surface_from_xpm(image: XpmImage) -> pygame.Surface:
    data = bytearray()
    for row in image.pixels:
        for value in row:
            if value == TRANSPARENT:
                data += b"\0\0\0\0"
            else:
                data += bytes(((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, 0xFF))
    return pygame.image.frombuffer(bytes(data), (image.width, image.height), "RGBA").copy()


def _keycode(key: int | str) -> int:
    return ord(key) if isinstance(key, str) else key


@dataclass
class TextureSet:
    """Tile and player images; extra variants are read from ``root`` on demand."""

    wall: pygame.Surface
    ground: pygame.Surface
    collectible: pygame.Surface
    exit: pygame.Surface
    danger: pygame.Surface
    player: dict[tuple[str, str], pygame.Surface]
    root: Path | None = None
    cache: dict[str, pygame.Surface] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def load(cls, root: str | PathLike[str] = ".") -> TextureSet:
        """Read every base texture from the texture tree under ``root``."""
        base = Path(root)

        def read(relative: str) -> pygame.Surface:
            return _surface_from_xpm(load_xpm(base / relative))

        player = {
            (direction, pose): read(WALK_TEXTURE.format(index))
            for index, (pose, direction) in enumerate(product(POSES, DIRECTIONS), start=1)
        }
        return cls(
            wall=read(WALL_TEXTURE),
            ground=read(FLOOR_TEXTURE.format(FLOOR_BASE)),
            collectible=read(FOOD_TEXTURE.format(1)),
            exit=read(EXIT_TEXTURE.format(EXIT_FRAME_BASE)),
            danger=read(DANGER_TEXTURE),
            player=player,
            root=base,
        )

    def image(self, relative: str, fallback: pygame.Surface) -> pygame.Surface:
        """Return the image at ``relative`` under ``root``, or ``fallback`` without a root."""
        if self.root is None:
            return fallback
        if relative not in self.cache:
            self.cache[relative] = _surface_from_xpm(load_xpm(self.root / relative))
        return self.cache[relative]

    def food(self, rng: random.Random) -> pygame.Surface:
        """A randomly chosen collectible image."""
        return self.image(FOOD_TEXTURE.format(1 + rng.randrange(FOOD_COUNT)), self.collectible)

    def floor(self, rng: random.Random) -> pygame.Surface:
        """A randomly chosen floor image, favouring the plain one."""
        number = FLOOR_BASE + rng.randrange(FLOOR_VARIANTS) if rng.randrange(3) else FLOOR_BASE
        return self.image(FLOOR_TEXTURE.format(number), self.ground)

    def exit_surface(self, path: str) -> pygame.Surface:
        """The exit image stored at ``path``."""
        return self.image(path, self.exit)


class Renderer:
    """Draws a game onto a surface."""

    def __init__(
        self,
        game: Game,
        textures: TextureSet,
        surface: pygame.Surface,
        rng: random.Random | None = None,
    ) -> None:
        self.game = game
        self.textures = textures
        self.surface = surface
        self.rng = rng if rng is not None else random.Random()
        self.left_leg = False
        self._foods: dict[tuple[int, int], pygame.Surface] = {}
        self._font: pygame.font.Font | None = None

    @property
    def size(self) -> tuple[int, int]:
        return self.game.width * TILE_SIZE, self.game.height * TILE_SIZE

    def tile_at(self, mx: int, my: int) -> tuple[int, int] | None:
        """Return the tile strictly containing the point, or ``None`` on a border."""
        if mx % TILE_SIZE == 0 or my % TILE_SIZE == 0:
            return None
        x, y = mx // TILE_SIZE, my // TILE_SIZE
        if 0 <= x < self.game.width and 0 <= y < self.game.height:
            return x, y
        return None

    def blit(self, image: pygame.Surface, x: int, y: int) -> None:
        """Draw ``image`` on tile ``(x, y)``."""
        self.surface.blit(image, (x * TILE_SIZE, y * TILE_SIZE))

    def surface_for_char(self, char: str) -> pygame.Surface:
        """The image that stands for a map character."""
        images = {
            WALL: self.textures.wall,
            COLLECTIBLE: self.textures.collectible,
            EXIT: self.textures.exit_surface(self.game.exit_texture()),
            DANGER: self.textures.danger,
            GROUND: self.textures.ground,
            PLAYER: self.textures.player[("down", "stand")],
        }
        return images.get(char, self.textures.ground)

    def draw_map(self) -> None:
        """Draw every tile, the player and the move counter."""
        self._foods.clear()
        for y, row in enumerate(self.game.rows):
            for x, char in enumerate(row):
                if char == WALL:
                    image = self.textures.wall
                elif char == COLLECTIBLE:
                    image = self._foods[(x, y)] = self.textures.food(self.rng)
                elif char == EXIT:
                    image = self.textures.exit_surface(self.game.exit_texture())
                elif char == DANGER:
                    image = self.textures.danger
                else:
                    image = self.textures.floor(self.rng)
                self.blit(image, x, y)
        self.draw_player(0, False)
        self.draw_moves()

    def draw_tile(self, x: int, y: int) -> None:
        """Redraw one tile from the current map."""
        char = self.game.tile(x, y)
        if char == COLLECTIBLE:
            image = self._foods.get((x, y), self.textures.collectible)
        elif char == PLAYER:
            image = self.textures.ground
        else:
            image = self.surface_for_char(char)
        self.blit(image, x, y)
        if (x, y) == self.game.player:
            self.draw_player(self.game.keycode, False)

    def draw_exits(self) -> None:
        """Redraw every exit tile."""
        for y, row in enumerate(self.game.rows):
            for x, char in enumerate(row):
                if char == EXIT:
                    self.blit(self.textures.exit_surface(self.game.exit_texture()), x, y)

    def draw_player(self, key: int | str, walking: bool) -> pygame.Surface | None:
        """Draw the player facing the key's direction; return the image used.

        Walking alternates between the two steps on each call.
        """
        direction = _DIRECTION_NAMES.get(_keycode(key))
        if not walking:
            image = self.textures.player[(direction or "down", "stand")]
        else:
            pose = "left" if self.left_leg else "right"
            self.left_leg = not self.left_leg
            image = self.textures.player.get((direction, pose)) if direction else None
        if image is not None:
            self.blit(image, *self.game.player)
        return image

    def draw_moves(self) -> None:
        """Show the move counter over the top-left tile."""
        if not pygame.font.get_init():
            return
        if self._font is None:
            self._font = pygame.font.Font(None, 20)
        self.blit(self.textures.wall, 0, 0)
        text = self._font.render(str(self.game.moves), True, _TEXT_COLOR)
        self.surface.blit(text, (5, 8))


def _keysym(key: int) -> int | None:
    if key in _PYGAME_KEYS:
        return _PYGAME_KEYS[key]
    if 0 < key < 128:
        return key
    return None


def _read_word(prompt: str) -> str | None:
    prt(prompt)
    try:
        words = input().split()
    except EOFError:
        return None
    return words[0][:99] if words else None


def _print_error(code: int) -> None:
    prt("\033[1;31mError\n")
    prt("%s\n", error_message(code))
    prt("\033[0m")


class _Session:
    def __init__(self, game: Game, renderer: Renderer) -> None:
        self.game = game
        self.renderer = renderer
        self.editor: Editor | None = None
        self.clicking = False
        self.hovered: tuple[int, int] | None = None

    def run(self) -> None:
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if self.handle(event) is not Outcome.PLAYING:
                    self.finish()
                    return
            self.tick()
            pygame.display.flip()
            clock.tick()

    def handle(self, event: pygame.event.Event) -> Outcome:
        if event.type == pygame.QUIT:
            return Outcome.CLOSED
        if event.type in (pygame.KEYDOWN, pygame.KEYUP):
            key = _keysym(event.key)
            if key is None:
                return Outcome.PLAYING
            if event.type == pygame.KEYDOWN:
                return self.key_down(key)
            return self.key_up(key)
        if event.type == pygame.MOUSEBUTTONDOWN:
            self.clicking = True
            tile = self.renderer.tile_at(*event.pos)
            if tile is not None:
                if self.editor is not None:
                    self.editor.paint(*tile)
                self.renderer.draw_tile(*tile)
        elif event.type == pygame.MOUSEBUTTONUP:
            self.clicking = False
        elif event.type == pygame.MOUSEMOTION:
            self.hover(event.pos)
        return Outcome.PLAYING

    def key_down(self, key: int) -> Outcome:
        previous = self.game.player
        exit_frame = self.game.exit_frame
        outcome = self.game.key_press(key)
        if key == ord("r"):
            self.hovered = None
            self.renderer.draw_map()
        elif key in _DIRECTION_NAMES and not self.game.editor_on and outcome is Outcome.PLAYING:
            self.renderer.draw_tile(*previous)
            if self.game.exit_frame != exit_frame:
                self.renderer.draw_exits()
            self.renderer.draw_player(self.game.keycode, False)
            self.renderer.draw_moves()
        return outcome

    def key_up(self, key: int) -> Outcome:
        self.game.frame_of_release = self.game.current_frame
        if self.game.keycode == ord("h"):
            self.renderer.surface.fill((0, 0, 0))
        if self.editor is None:
            self.renderer.draw_player(self.game.keycode, True)
            if key == ord("e"):
                self.editor = Editor(self.game)
                prt(HELP)
            return Outcome.PLAYING
        char = self.editor.select(self.game.keycode)
        if char is not None:
            prt("\033[1;36m%c selected\n", char)
        if key == ord("s"):
            return self.save()
        if key == ord("n"):
            return self.new_map()
        return Outcome.PLAYING

    def save(self) -> Outcome:
        name = _read_word("name of the map (m to map.ber): ")
        if name is None:
            return Outcome.PLAYING
        if name == "m":
            name = DEFAULT_SAVE_NAME
        try:
            save_map(name, self.game.rows)
        except OSError:
            _print_error(ErrorCode.MEMORY)
            return Outcome.CLOSED
        prt("\033[1;32mMap saved to %s\033[0m\n", name)
        return Outcome.PLAYING

    def new_map(self) -> Outcome:
        prt("Choose map width and height!\n")
        try:
            width, height = (int(word) for word in input().split()[:2])
            validate_size(width, height)
        except (ValueError, EOFError):
            prt(SIZE_HINT)
            return Outcome.PLAYING
        name = _read_word("name of the map: ")
        if name is None:
            return Outcome.PLAYING
        try:
            save_map(name, create_blank_map(width, height))
        except OSError:
            _print_error(ErrorCode.MEMORY)
            return Outcome.CLOSED
        prt("\033[1;33mNew map created to %s\033[0m\n", name)
        return Outcome.CLOSED

    def hover(self, pos: tuple[int, int]) -> None:
        tile = self.renderer.tile_at(*pos)
        if tile is None or tile == self.hovered:
            return
        if self.clicking and self.editor is not None:
            self.editor.paint(*tile)
        if self.editor is not None and self.hovered is not None:
            self.renderer.draw_tile(*self.hovered)
        self.hovered = tile
        if self.editor is not None:
            self.renderer.blit(self.renderer.surface_for_char(self.editor.selected), *tile)

    def tick(self) -> None:
        self.game.current_frame += 1
        if (
            self.editor is None
            and self.game.current_frame - self.game.frame_of_release > ANIMATION_DELAY
        ):
            self.renderer.draw_player(self.game.keycode, False)

    def finish(self) -> None:
        message = self.game.finish_message()
        prt("%s%s\033[0m\n", _FINISH_COLORS.get(message, "\033[1;34m"), message)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on the map named by the first argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    path = args[0] if args else ""
    try:
        info = check_map(path)
    except MapError as exc:
        _print_error(exc.code)
        return 0
    rng = random.Random()
    game = Game(info, rng)
    pygame.init()
    try:
        screen = pygame.display.set_mode((info.width * TILE_SIZE, info.height * TILE_SIZE))
        pygame.display.set_caption("So long")
        try:
            textures = TextureSet.load()
        except (OSError, XpmError):
            _print_error(ErrorCode.MEMORY)
            return 0
        renderer = Renderer(game, textures, screen, rng)
        renderer.draw_map()
        _Session(game, renderer).run()
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())