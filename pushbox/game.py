"""Board state and rules of the box-pushing game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pushbox.anim import PlayerAnim, PlayerDir
from pushbox.levels import MAX_LEVELS, LevelLoadError, LevelStore

WALL = "#"
PLAYER = "@"
BOX = "$"
TARGET = "."
FLOOR = " "
BOX_TARGET = "*"
PLAYER_TARGET = "+"

MAX_STEP = 100
INITIAL_SCORE = 1000
STEP_PENALTY = 10
TARGET_BONUS = 10

VK_ESCAPE = 0x1B
VK_LEFT = 0x25
VK_UP = 0x26
VK_RIGHT = 0x27
VK_DOWN = 0x28


class Direction(Enum):
    """A move direction on the board."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @property
    def delta(self) -> tuple[int, int]:
        """The (dx, dy) step for this direction."""
        return _DELTAS[self]


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


class Status(Enum):
    """Which screen the game is in."""

    MENU = 0
    PLAYING = 1
    WON = 2
    SELECT = 3
    FAILED = 4


@dataclass
class Position:
    x: int = 0
    y: int = 0


_MOVE_KEYS = {
    Direction.UP: frozenset({ord("W"), ord("w"), 72, VK_UP}),
    Direction.DOWN: frozenset({ord("S"), ord("s"), 80, VK_DOWN}),
    Direction.LEFT: frozenset({ord("A"), ord("a"), 75, VK_LEFT}),
    Direction.RIGHT: frozenset({ord("D"), ord("d"), 77, VK_RIGHT}),
}
_RESET_KEYS = frozenset({ord("R"), ord("r")})
_UNDO_KEYS = frozenset({ord("V"), ord("v")})


class Game:
    """The current level, the player and the score."""

    def __init__(self, store: LevelStore, anim: PlayerAnim | None = None) -> None:
        self.store = store
        self.anim = anim if anim is not None else PlayerAnim()
        self.grid: list[list[str]] = []
        self.original: list[list[str]] = []
        self._history: list[list[str]] = []
        self.height = 0
        self.width = 0
        self.player = Position()
        self.steps = 0
        self.score = 0
        self.box_count = 0
        self.box_on_target = 0
        self.current_level = 1
        self.status = Status.MENU

    def _snapshot(self) -> list[str]:
        return ["".join(row) for row in self.grid]

    def _locate_player(self) -> None:
        for y, row in enumerate(self.grid):
            for x, cell in enumerate(row):
                if cell in (PLAYER, PLAYER_TARGET):
                    self.player = Position(x, y)

    def load_level(self, level: int) -> None:
        """Load a level and start playing it; raise LevelLoadError on failure."""
        if not 1 <= level <= MAX_LEVELS:
            raise LevelLoadError(f"level {level} is out of range 1..{MAX_LEVELS}")
        rows = self.store.load_map(level)

        self.width = max((len(row) for row in rows), default=0)
        self.height = len(rows)
        self.grid = [list(row.ljust(self.width, FLOOR)) for row in rows]
        self.original = [list(row) for row in self.grid]
        self._history = [self._snapshot()]

        self.steps = 0
        self.score = INITIAL_SCORE
        self.box_count = sum(
            cell in (BOX, BOX_TARGET) for row in self.grid for cell in row
        )
        self.box_on_target = 0
        self.current_level = level
        self.status = Status.PLAYING
        self._locate_player()

    def reset_level(self) -> None:
        """Restore the level's starting layout; the score is kept."""
        self.grid = [list(row) for row in self.original]
        self.steps = 0
        self.box_on_target = 0
        self._locate_player()

    def undo_move(self) -> None:
        """Step the board back one move; the first move cannot be undone."""
        if self.steps > 1:
            self.steps -= 1
            self.grid = [list(row) for row in self._history[self.steps]]
            self._locate_player()

    def handle_input(self, key: int | str) -> None:
        """React to a key code (or one-character string) while playing."""
        if self.status is not Status.PLAYING:
            return
        code = ord(key) if isinstance(key, str) else key

        direction = next((d for d, keys in _MOVE_KEYS.items() if code in keys), None)
        if direction is not None:
            self.move_player(direction)
        elif code in _RESET_KEYS:
            self.reset_level()
        elif code == VK_ESCAPE:
            self.status = Status.MENU
        elif code in _UNDO_KEYS:
            self.undo_move()

        if self.check_win():
            self.status = Status.WON
        if self.check_fail():
            self.status = Status.FAILED

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def move_player(self, direction: Direction | int) -> bool:
        """Move the player one cell, pushing a box if there is one; return success."""
        try:
            direction = Direction(direction)
        except ValueError:
            return False
        dx, dy = direction.delta
        new_x, new_y = self.player.x + dx, self.player.y + dy
        if not self._inside(new_x, new_y):
            return False

        new_cell = self.grid[new_y][new_x]
        if new_cell == WALL:
            return False
        if new_cell in (BOX, BOX_TARGET):
            box_x, box_y = new_x + dx, new_y + dy
            if not self._inside(box_x, box_y):
                return False
            beyond = self.grid[box_y][box_x]
            if beyond in (WALL, BOX, BOX_TARGET):
                return False
            if beyond == TARGET:
                self.grid[box_y][box_x] = BOX_TARGET
                self.box_on_target += 1
                self.score += TARGET_BONUS
            else:
                self.grid[box_y][box_x] = BOX
            if new_cell == BOX_TARGET:
                self.grid[new_y][new_x] = TARGET
                self.box_on_target -= 1
            else:
                self.grid[new_y][new_x] = FLOOR

        self.score -= STEP_PENALTY
        old = self.grid[self.player.y]
        old[self.player.x] = TARGET if old[self.player.x] == PLAYER_TARGET else FLOOR
        target_row = self.grid[new_y]
        target_row[new_x] = PLAYER_TARGET if target_row[new_x] == TARGET else PLAYER
        self.player = Position(new_x, new_y)

        self.steps += 1
        del self._history[self.steps:]
        self._history.append(self._snapshot())

        self.anim.update(PlayerDir[direction.name], True)
        self.anim.next_frame()
        return True

    def check_win(self) -> bool:
        """True when every box stands on a target."""
        return self.box_on_target == self.box_count

    def check_fail(self) -> bool:
        """True when the score has dropped below zero."""
        return self.score < 0

    def render_rows(self) -> list[str]:
        """The current board as one string per row."""
        return self._snapshot()