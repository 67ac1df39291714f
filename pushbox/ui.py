"""Screens of the game: main menu, board, result screens, level choice, help."""

from __future__ import annotations

import argparse
from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass
from typing import Any, Optional

import pygame

from pushbox.anim import PlayerAnim
from pushbox.game import Direction, Game, Position, Status
from pushbox.levels import MAX_LEVELS, LevelLoadError, LevelStore
from pushbox.render import CELL_SIZE, OFFSET_X, OFFSET_Y, Assets, draw_board

WINDOW_SIZE = (900, 900)
WINDOW_TITLE = "Push Box Game"

MENU_ITEMS: tuple[str, ...] = ("Start Game", "Select Level", "Instructions", "Exit Game")

BLACK = (0, 0, 0)
RED = (255, 0, 0)
GREY = (100, 100, 100)

NextScreen = Optional[Callable[[], Any]]

_KEY_CODES = {
    pygame.K_UP: 72,
    pygame.K_DOWN: 80,
    pygame.K_LEFT: 75,
    pygame.K_RIGHT: 77,
    pygame.K_ESCAPE: 27,
    pygame.K_RETURN: ord("\r"),
    pygame.K_SPACE: ord(" "),
}

_DIRECTION_KEYS = {
    Direction.UP: "w",
    Direction.DOWN: "s",
    Direction.LEFT: "a",
    Direction.RIGHT: "d",
}

_LEFT_BUTTON = 1


def translate_key(key: int) -> int:
    """Turn a pygame key into the key code the game's input handler expects."""
    return _KEY_CODES.get(key, key)


def click_direction(player: Position, x: int, y: int) -> Direction:
    """Direction of a mouse click relative to the centre of the player's cell.

    The larger of the horizontal and vertical distances wins; ties count as vertical.
    """
    centre_x = OFFSET_X + player.x * CELL_SIZE + CELL_SIZE // 2
    centre_y = OFFSET_Y + player.y * CELL_SIZE + CELL_SIZE // 2
    dx, dy = x - centre_x, y - centre_y
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


@dataclass
class MainMenu:
    """Selection state of the main menu."""

    selected: int = 0
    items: tuple[str, ...] = MENU_ITEMS

    def select_previous(self) -> None:
        """Move the selection up, wrapping to the last item."""
        self.selected = (self.selected - 1) % len(self.items)

    def select_next(self) -> None:
        """Move the selection down, wrapping to the first item."""
        self.selected = (self.selected + 1) % len(self.items)

    @staticmethod
    def item_y(index: int) -> int:
        return 200 + index * 60

    def item_at(self, x: int, y: int) -> int | None:
        """Index of the menu item under a point, or None."""
        if not 260 <= x <= 660:
            return None
        return next(
            (
                index
                for index in range(len(self.items))
                if self.item_y(index) - 25 <= y <= self.item_y(index) + 25
            ),
            None,
        )


@dataclass
class LevelSelect:
    """Selection state of the level choice screen."""

    selected: int = 1

    def select_previous(self) -> None:
        """Select the previous level, stopping at the first."""
        if self.selected > 1:
            self.selected -= 1

    def select_next(self) -> None:
        """Select the next level, stopping at the last."""
        if self.selected < MAX_LEVELS:
            self.selected += 1

    @staticmethod
    def item_y(level: int) -> int:
        return 180 + (level - 1) * 50

    def level_at(self, x: int, y: int) -> int | None:
        """Level number whose label is under a point, or None."""
        if not 360 <= x <= 500:
            return None
        return next(
            (
                level
                for level in range(1, MAX_LEVELS + 1)
                if self.item_y(level) - 15 <= y <= self.item_y(level) + 15
            ),
            None,
        )

    def is_back_button(self, x: int, y: int) -> bool:
        """True when a point lies on the return hint."""
        return 260 <= x <= 520 and 490 <= y <= 520


class App:
    """Runs the screens one after another until the player quits.

    Every ``show_*`` method runs its screen and returns the screen to show
    next, or None to leave the program.
    """

    def __init__(self, screen: pygame.Surface, store: LevelStore, assets: Assets) -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        self.screen = screen
        self.store = store
        self.assets = assets
        self.anim = PlayerAnim()
        self.game = Game(store, self.anim)
        self.menu = MainMenu()
        self.level_select = LevelSelect()
        self._fonts: dict[int, pygame.font.Font] = {}

    # -- drawing helpers -------------------------------------------------

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def _text(self, text: str, pos: tuple[int, int], size: int, color: tuple[int, int, int]) -> None:
        self.screen.blit(self._font(size).render(text, True, color), pos)

    def _present(self, delay_ms: int) -> None:
        if self.screen is pygame.display.get_surface():
            pygame.display.flip()
        pygame.time.wait(delay_ms)

    def _draw_menu_item(self, x: int, y: int, text: str, selected: bool) -> None:
        if selected:
            self._text(f"> {text} <", (x - 20, y), 28, RED)
        else:
            self._text(text, (x, y), 28, BLACK)

    def _load(self, level: int) -> bool:
        with suppress(LevelLoadError):
            self.game.load_level(level)
            return True
        return False

    # -- screens -----------------------------------------------------------

    def run(self) -> None:
        """Show the main menu and follow the screens until one returns None."""
        screen: NextScreen = self.show_main_menu
        while screen is not None:
            screen = screen()

    def show_main_menu(self) -> NextScreen:
        self.menu = MainMenu()
        while True:
            self.screen.fill((220, 220, 220))
            self._text("PUSH BOX GAME", (300, 100), 40, (0, 0, 180))
            for index, item in enumerate(self.menu.items):
                self._draw_menu_item(360, MainMenu.item_y(index), item, index == self.menu.selected)
            self._text("Up/Down to select, Enter to confirm", (300, 500), 20, GREY)
            self._present(0)

            event = pygame.event.poll()
            if event.type == pygame.QUIT:
                return None
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_UP:
                    self.menu.select_previous()
                elif event.key == pygame.K_DOWN:
                    self.menu.select_next()
                elif event.key == pygame.K_RETURN:
                    return self.execute_menu_action(self.menu.selected)
            elif event.type == pygame.MOUSEMOTION:
                index = self.menu.item_at(*event.pos)
                if index is not None:
                    self.menu.selected = index
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == _LEFT_BUTTON:
                index = self.menu.item_at(*event.pos)
                if index is not None:
                    self.menu.selected = index
                    return self.execute_menu_action(index)
            pygame.time.wait(20)

    def execute_menu_action(self, index: int) -> NextScreen:
        """Carry out a main-menu item; the game ends if level 1 cannot be loaded."""
        if index == 0:
            return self.show_game if self._load(1) else None
        if index == 1:
            self.game.status = Status.SELECT
            return self.show_level_select
        if index == 2:
            return self.show_instructions
        if index == 3:
            return None
        raise ValueError(f"no menu item {index}")

    def show_game(self) -> NextScreen:
        game = self.game
        while game.status is Status.PLAYING:
            self.screen.fill((240, 240, 240))
            info = f"Level {game.current_level}  Steps: {game.steps}  Score: {game.score}"
            self._text(info, (OFFSET_X, 20), 24, BLACK)
            self._text("Controls: WASD/Arrows-Move R-Reset ESC-Menu", (OFFSET_X, 40), 24, BLACK)
            draw_board(self.screen, game, self.assets, self.anim)
            if self.screen is pygame.display.get_surface():
                pygame.display.flip()

            event = pygame.event.poll()
            if event.type == pygame.QUIT:
                return None
            if event.type == pygame.KEYDOWN:
                game.handle_input(translate_key(event.key))
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == _LEFT_BUTTON:
                direction = click_direction(game.player, *event.pos)
                game.handle_input(_DIRECTION_KEYS[direction])

            if game.status is not Status.PLAYING:
                break
            pygame.time.wait(30)

        if game.status is Status.WON:
            return self.show_win_screen
        if game.status is Status.MENU:
            self.reset_to_menu()
            return self.show_main_menu
        if game.status is Status.FAILED:
            return self.show_fail_screen
        return None

    def _next_level_or_menu(self) -> NextScreen:
        if self.game.current_level < MAX_LEVELS:
            self._load(self.game.current_level + 1)
            return self.show_game
        self.reset_to_menu()
        return self.show_main_menu

    def show_win_screen(self) -> NextScreen:
        game = self.game
        while game.status is Status.WON:
            self.screen.fill((240, 240, 200))
            self._text("Level Complete!", (300, 150), 40, (0, 180, 0))
            self._text(f"Total Steps: {game.steps}  Total Score: {game.score}", (310, 240), 28, BLACK)
            if game.current_level < MAX_LEVELS:
                self._text("Press Enter/Space for next level", (260, 320), 24, BLACK)
            else:
                self._text("All levels complete!", (280, 320), 24, BLACK)
                self._text("Press Enter to return to menu", (290, 360), 24, BLACK)
            if self.screen is pygame.display.get_surface():
                pygame.display.flip()

            event = pygame.event.poll()
            if event.type == pygame.QUIT:
                return None
            if event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_RETURN, pygame.K_SPACE):
                    return self._next_level_or_menu()
                if event.key == pygame.K_ESCAPE:
                    self.reset_to_menu()
                    return self.show_main_menu
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == _LEFT_BUTTON:
                return self._next_level_or_menu()
            pygame.time.wait(50)
        return None

    def show_fail_screen(self) -> NextScreen:
        game = self.game
        while game.status is Status.FAILED:
            self.screen.fill((240, 200, 200))
            self._text("Game Over!", (300, 150), 40, (180, 0, 0))
            self._text(f"Total Steps: {game.steps}  Total Score: {game.score}", (310, 240), 28, BLACK)
            self._text("Press Enter to return to main menu", (260, 320), 24, BLACK)
            if self.screen is pygame.display.get_surface():
                pygame.display.flip()

            event = pygame.event.poll()
            if event.type == pygame.QUIT:
                return None
            back = (
                event.type == pygame.KEYDOWN and event.key in (pygame.K_RETURN, pygame.K_ESCAPE)
            ) or (event.type == pygame.MOUSEBUTTONDOWN and event.button == _LEFT_BUTTON)
            if back:
                self.reset_to_menu()
                return self.show_main_menu
            pygame.time.wait(50)
        return None

    def _start_selected(self) -> NextScreen:
        self._load(self.level_select.selected)
        return self.show_game

    def show_level_select(self) -> NextScreen:
        self.level_select = LevelSelect()
        choice = self.level_select
        while self.game.status is Status.SELECT:
            self.screen.fill((220, 240, 240))
            self._text("Select Level", (330, 100), 36, (0, 0, 150))
            for level in range(1, MAX_LEVELS + 1):
                y = LevelSelect.item_y(level)
                if level == choice.selected:
                    self._text(">", (360, y), 28, RED)
                    self._text(f"Level {level}", (380, y), 28, RED)
                    self._text("<", (490, y), 28, RED)
                else:
                    self._text(f"Level {level}", (380, y), 28, BLACK)
            self._text("Up/Down to select, Enter to confirm, ESC to return", (260, 500), 20, GREY)
            if self.screen is pygame.display.get_surface():
                pygame.display.flip()

            event = pygame.event.poll()
            if event.type == pygame.QUIT:
                return None
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_UP:
                    choice.select_previous()
                elif event.key == pygame.K_DOWN:
                    choice.select_next()
                elif event.key == pygame.K_RETURN:
                    return self._start_selected()
                elif event.key == pygame.K_ESCAPE:
                    self.reset_to_menu()
                    return self.show_main_menu
            elif event.type == pygame.MOUSEMOTION:
                level = choice.level_at(*event.pos)
                if level is not None:
                    choice.selected = level
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == _LEFT_BUTTON:
                level = choice.level_at(*event.pos)
                if level is not None:
                    choice.selected = level
                    return self._start_selected()
                if choice.is_back_button(*event.pos):
                    self.reset_to_menu()
                    return self.show_main_menu
            pygame.time.wait(25)
        return None

    def show_instructions(self) -> NextScreen:
        lines = (
            ("Game Objective:", 1.0),
            ("Push all boxes to the target positions", 1.5),
            ("Controls:", 1.0),
            ("Up/W: Move up", 1.0),
            ("Down/S: Move down", 1.0),
            ("Left/A: Move left", 1.0),
            ("Right/D: Move right", 1.0),
            ("R: Reset current level", 1.0),
            ("ESC: Return to main menu", 1.5),
        )
        line_height = 36
        while True:
            self.screen.fill((240, 240, 240))
            self._text("Instructions", (330, 80), 36, (0, 100, 150))
            y = 150
            for text, spacing in lines:
                self._text(text, (200, y), 24, BLACK)
                y += int(line_height * spacing)
            self._text("Press ESC to return to main menu", (330, 500), 20, GREY)
            if self.screen is pygame.display.get_surface():
                pygame.display.flip()

            event = pygame.event.poll()
            if event.type == pygame.QUIT:
                return None
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.reset_to_menu()
                return self.show_main_menu
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == _LEFT_BUTTON:
                x, y = event.pos
                if 230 <= x <= 630 and 490 <= y <= 530:
                    self.reset_to_menu()
                    return self.show_main_menu
            pygame.time.wait(50)

    def reset_to_menu(self) -> None:
        """Put the game back in the menu state with the first item selected."""
        self.game.status = Status.MENU
        self.screen.fill((220, 220, 220))
        self.menu = MainMenu()


def main(argv: list[str] | None = None) -> int:
    """Open the game window and run the game."""
    parser = argparse.ArgumentParser(prog="pushbox", description=WINDOW_TITLE)
    parser.add_argument("--maps", default="maps", help="directory of level files")
    parser.add_argument("--res", default="res", help="directory of images")
    args = parser.parse_args(argv)

    pygame.init()
    try:
        screen = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption(WINDOW_TITLE)
        screen.fill((240, 240, 240))
        app = App(screen, LevelStore(args.maps), Assets.load(args.res))
        app.run()
    finally:
        pygame.quit()
    return 0