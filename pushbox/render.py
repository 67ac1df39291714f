"""Drawing the board: sprite choice, layering and alpha blending."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pygame

from pushbox.anim import PlayerAnim, PlayerDir
from pushbox.game import (
    BOX,
    BOX_TARGET,
    PLAYER,
    PLAYER_TARGET,
    TARGET,
    WALL,
    Game,
)

CELL_SIZE = 64
GOAL_SIZE = 32
OFFSET_X = 50
OFFSET_Y = 80

IMAGE_NAMES: tuple[str, ...] = (
    "wall",
    "box",
    "player",
    "goal",
    "box_on_goal",
    "player_on_goal",
    "floor",
    "player_front",
    "player_back",
    "player_left",
    "player_right",
    "player_front_walk1",
    "player_front_walk2",
    "player_back_walk1",
    "player_back_walk2",
    "player_left_walk",
    "player_right_walk",
)

_VERTICAL_SPRITES = {
    PlayerDir.UP: ("player_back", "player_back_walk1", "player_back_walk2"),
    PlayerDir.DOWN: ("player_front", "player_front_walk1", "player_front_walk2"),
}
_SIDE_SPRITES = {
    PlayerDir.LEFT: ("player_left", "player_left_walk"),
    PlayerDir.RIGHT: ("player_right", "player_right_walk"),
}


def alpha_blend(dst: pygame.Surface, src: pygame.Surface, x: int, y: int) -> None:
    """Blend ``src`` onto ``dst`` at (x, y) using the source's per-pixel alpha.

    Fully transparent source pixels leave the destination untouched; the part
    of the source outside the destination is clipped away.
    """
    src_w, src_h = src.get_size()
    dst_w, dst_h = dst.get_size()
    left, top = max(x, 0), max(y, 0)
    right, bottom = min(x + src_w, dst_w), min(y + src_h, dst_h)
    if left >= right or top >= bottom:
        return

    dst.lock()
    src.lock()
    try:
        for dy in range(top, bottom):
            for dx in range(left, right):
                sc = src.get_at((dx - x, dy - y))
                if sc.a == 0:
                    continue
                dc = dst.get_at((dx, dy))
                alpha = sc.a / 255.0
                keep = 1.0 - alpha
                r = int(sc.r * alpha + dc.r * keep)
                g = int(sc.g * alpha + dc.g * keep)
                b = int(sc.b * alpha + dc.b * keep)
                dst.set_at((dx, dy), (r, g, b, dc.a))
    finally:
        src.unlock()
        dst.unlock()


def player_sprite_name(anim: PlayerAnim) -> str:
    """Name of the sprite that shows the player in its current animation state."""
    if anim.direction in _VERTICAL_SPRITES:
        standing, walk1, walk2 = _VERTICAL_SPRITES[anim.direction]
        if anim.walk_frame == 0:
            return standing
        return walk1 if anim.walk_frame == 1 else walk2
    standing, walking = _SIDE_SPRITES[anim.direction]
    return standing if anim.walk_frame == 0 else walking


def cell_layers(cell: str) -> tuple[str, ...]:
    """Layers drawn for a map cell, bottom first.

    ``"player"`` stands for whichever player sprite the animation selects.
    """
    layers = ["floor"]
    if cell in (TARGET, BOX_TARGET, PLAYER_TARGET):
        layers.append("goal")
    if cell == WALL:
        layers.append("wall")
    elif cell in (BOX, BOX_TARGET):
        layers.append("box")
    if cell in (PLAYER, PLAYER_TARGET):
        layers.append("player")
    return tuple(layers)


def _empty_image() -> pygame.Surface:
    return pygame.Surface((0, 0), pygame.SRCALPHA)


@dataclass
class Assets:
    """The game's images, by name."""

    images: dict[str, pygame.Surface] = field(default_factory=dict)

    @classmethod
    def load(cls, res_dir: str | Path = "res") -> Assets:
        """Load every ``<name>.png`` from a directory; missing files become empty images."""
        res_path = Path(res_dir)
        images: dict[str, pygame.Surface] = {}
        for name in IMAGE_NAMES:
            try:
                images[name] = pygame.image.load(str(res_path / f"{name}.png"))
            except (OSError, pygame.error):
                images[name] = _empty_image()
        return cls(images)

    def image(self, name: str) -> pygame.Surface:
        """The image with the given name; KeyError if there is none."""
        return self.images[name]


def _centered(offset: int, size: int) -> int:
    # Truncating division, so sprites wider than a cell stay centred the same way.
    return offset + int((CELL_SIZE - size) / 2)


def draw_board(
    surface: pygame.Surface, game: Game, assets: Assets, anim: PlayerAnim
) -> None:
    """Draw the game's map onto the surface, cell by cell."""
    for y, row in enumerate(game.grid):
        for x, cell in enumerate(row):
            px = OFFSET_X + x * CELL_SIZE
            py = OFFSET_Y + y * CELL_SIZE
            for layer in cell_layers(cell):
                if layer in ("floor", "wall"):
                    surface.blit(assets.image(layer), (px, py))
                elif layer == "goal":
                    offset = (CELL_SIZE - GOAL_SIZE) // 2
                    alpha_blend(surface, assets.image("goal"), px + offset, py + offset)
                elif layer == "box":
                    alpha_blend(surface, assets.image("box"), px, py)
                else:
                    sprite = assets.image(player_sprite_name(anim))
                    width, height = sprite.get_size()
                    alpha_blend(
                        surface,
                        sprite,
                        _centered(px, width),
                        py + CELL_SIZE - height,
                    )