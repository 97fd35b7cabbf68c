# sotiles

A small tile-based puzzle game. You walk a character around a rectangular
map, pick up every collectible and then reach the exit, while avoiding
danger tiles. A built-in editor lets you paint tiles with the mouse, save
the map and create new blank maps.

## Installing

```
pip install .
```

The game window uses `pygame`. For running the tests:

```
pip install .[test]
pytest
```

## Playing

```
sotiles maps/test.ber
```

The argument is a map file whose name ends in `.ber`.

### Textures

The package does not ship any images. The game reads its textures as XPM
files from a `textures/xpm/` tree in the current working directory:

- `textures/xpm/tile/tile001.xpm` (wall), `tile016.xpm` (danger),
  `tile143.xpm`–`tile146.xpm` (closed exit) and `tile135.xpm`–`tile138.xpm`
  (open exit);
- `textures/xpm/floor/floor227.xpm`–`floor231.xpm` (floor variants);
- `textures/xpm/food/food1.xpm`–`food64.xpm` (collectible variants);
- `textures/xpm/walk/walk01.xpm`–`walk12.xpm` (player: standing, then
  right step, then left step, each facing down, up, left, right).

If the base textures cannot be read, the game prints an error and stops.

### Map format

A map is plain text, one row per line, every row the same length:

| Char | Meaning      |
|------|--------------|
| `1`  | wall         |
| `0`  | floor        |
| `C`  | collectible  |
| `E`  | exit         |
| `P`  | player start |
| `D`  | danger       |

A map is accepted only when:

- it is at least 3×3 and rectangular;
- its first and last rows are all walls and every row starts and ends with a wall;
- it holds only the characters above;
- there is exactly one player, exactly one exit and at least one collectible;
- every collectible and the exit can be reached from the player without
  crossing walls or danger tiles.

When a map is rejected the game prints `Error` and the reason, then stops.

### Controls

| Key                      | Action                         |
|--------------------------|--------------------------------|
| `w` `a` `s` `d` / arrows | move                           |
| `r`                      | restart the map                |
| `q` / `Esc`              | quit                           |
| `e`                      | open the editor (on release)   |
| `h`                      | clear the window (on release)  |

The move counter is shown in the top-left corner. Walking into a wall does
not count as a move. Collecting the last item changes the exit's look;
stepping on the exit then wins the game. Stepping on a danger tile loses it.
On leaving, the game prints `You win!`, `You lose!` or `Program closed!`.

### Editor

Press `e` while playing to open the editor. Movement keys are then ignored,
and:

- `0` ground, `1` wall, `c` collectible, `e` exit, `p` player, `d` danger
  choose the tile to paint (keypad `0` and `1` work too);
- hovering shows the chosen tile; clicking or dragging paints it;
- `s` asks on the terminal for a file name and saves the map (enter `m` to
  save to `map.ber`);
- `n` asks on the terminal for a width and height (width 5–60, height 5–31)
  and a file name, writes a new blank map there and closes the game.

Edited maps are saved as they are, without being checked.

## Using the library

The pieces of the game can be used without a window:

```python
from sotiles.mapcheck import check_map, MapError
from sotiles.game import Game, Outcome

try:
    info = check_map("maps/test.ber")
except MapError as err:
    print(err, err.code)
else:
    game = Game(info, rng=None)
    outcome = game.key_press("d")
    if outcome is not Outcome.PLAYING:
        print(game.finish_message())
```

- `sotiles.mapcheck` — `check_map`, `read_map`, `check_walls`,
  `count_elements`, `find_player`, `flood_fill`, `MapInfo`, `MapError`
  and `ErrorCode`.
- `sotiles.game` — `Game` (`key_press`, `move`, `restart`, `tile`,
  `finish_message`, `exit_texture`) and `Outcome`.
- `sotiles.editor` — `Editor` (`select`, `paint`), `selectable_char`,
  `validate_size`, `create_blank_map` and `save_map`.
- `sotiles.xpm` — `load_xpm` and `parse_xpm` read XPM images into
  `XpmImage` objects; `strip_comments`, `extract_strings` and
  `split_words` are the steps they use.
- `sotiles.colors` — `lookup_color` resolves X11 colour names and
  `#rrggbb` values.
- `sotiles.text` — `format_message` and `prt` for `%i`/`%s`/`%c`
  messages, `strspn`, `line_length` and `read_lines`.
- `sotiles.app` — `TextureSet`, `Renderer` and `main`, the window and
  event loop behind the `sotiles` command.