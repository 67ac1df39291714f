# pushbox

A push-box (Sokoban-style) puzzle game. Walk the warehouse keeper around the
board and push every box onto a target square.

## Installing

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Playing

```
pushbox
```

This opens a 900×900 window titled "Push Box Game" with the main menu:

- **Start Game**: begin at level 1.
- **Select Level**: pick one of levels 1 to 5.
- **Instructions**: a summary of the controls.
- **Exit Game**: quit.

Use the up and down arrows or the mouse to choose, and Enter or a left click to
confirm. Closing the window quits at any time.

Options:

| Option         | Default | Meaning                      |
|----------------|---------|------------------------------|
| `--maps DIR`   | `maps`  | directory of level files     |
| `--res DIR`    | `res`   | directory of PNG images      |

### Controls in a level

| Key                  | Action                       |
|----------------------|------------------------------|
| W / Up arrow         | Move up                      |
| S / Down arrow       | Move down                    |
| A / Left arrow       | Move left                    |
| D / Right arrow      | Move right                   |
| R                    | Reset the current level      |
| V                    | Undo the last move           |
| Esc                  | Return to the main menu      |

A left click also moves the player one square toward the clicked point, along
whichever axis is farther from the centre of the player's square (a tie counts
as vertical).

Resetting a level restores its starting layout but keeps the current score.
Undo steps back one move at a time; the first move of a level cannot be undone.

### Scoring

Each level starts with 1000 points. Every move costs 10 points. A box pushed
onto a target earns 10 points back. When the score drops below zero the game is
over; Enter, Esc or a click returns to the main menu. When every box sits on a
target the level is complete: Enter, Space or a click goes on to the next level
(after level 5, back to the main menu), and Esc returns to the main menu.

## Levels

Levels are read from `level1.map`, `level2.map` and so on in the maps
directory (`maps/` in the working directory unless `--maps` says otherwise).
If a level file cannot be opened, the three built-in levels are written there
as `level1.map` to `level3.map`. Levels 4 and 5 have no built-in layout; to
play them, provide `level4.map` and `level5.map` yourself.

A level file is plain text, one row per line, with these characters:

| Char | Meaning               |
|------|-----------------------|
| `#`  | wall                  |
| `@`  | player                |
| `+`  | player on a target    |
| `$`  | box                   |
| `*`  | box on a target       |
| `.`  | target                |
| ` `  | floor                 |

Rows longer than 29 characters are cut to 29, and only the first 20 rows are
read. Shorter rows are padded with floor.

## Images

Tiles and player sprites are read from PNG files in the images directory
(`res/` in the working directory unless `--res` says otherwise): `wall.png`,
`box.png`, `goal.png`, `floor.png`, `player_front.png`, `player_back.png`,
`player_left.png`, `player_right.png`, `player_front_walk1.png`,
`player_front_walk2.png`, `player_back_walk1.png`, `player_back_walk2.png`,
`player_left_walk.png`, `player_right_walk.png`, and also `player.png`,
`box_on_goal.png` and `player_on_goal.png`. A missing image is replaced by an
empty one, so that part of the board is simply not drawn. No images ship with
the package.

## Using the pieces

The game rules can be used without a window:

```python
from pushbox.anim import PlayerAnim
from pushbox.game import Direction, Game
from pushbox.levels import LevelStore

game = Game(LevelStore("maps"), PlayerAnim())
game.load_level(1)
moved = game.move_player(Direction.UP)   # True if the player moved
print("\n".join(game.render_rows()))
print(game.steps, game.score, game.status)
```

- `pushbox.levels.LevelStore` finds, writes and reads level files
  (`load_map`, `create_map_files`, `available_levels`, `level_path`);
  `LevelLoadError` is raised when a level cannot be loaded.
- `pushbox.game.Game` holds the board and applies the rules (`load_level`,
  `move_player`, `handle_input`, `undo_move`, `reset_level`, `check_win`,
  `check_fail`, `render_rows`).
- `pushbox.anim.PlayerAnim` tracks the player's facing direction and walk frame.
- `pushbox.render` chooses sprites (`player_sprite_name`, `cell_layers`),
  blends images with per-pixel alpha (`alpha_blend`), loads images (`Assets`)
  and draws the board (`draw_board`).
- `pushbox.ui` holds the screens (`App`, `MainMenu`, `LevelSelect`) and the
  `main` function behind the `pushbox` command.