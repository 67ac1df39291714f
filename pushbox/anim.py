"""Walking animation state of the player sprite."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

WALK_FRAMES = 3
STANDING_FRAME = 0


class PlayerDir(Enum):
    """Direction the player sprite faces."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


@dataclass
class PlayerAnim:
    """Facing direction and walk frame of the player.

    Frame 0 is the standing pose; frames 1 and 2 are the walking poses.
    """

    direction: PlayerDir = PlayerDir.DOWN
    walk_frame: int = STANDING_FRAME
    moving: bool = False

    def reset(self) -> None:
        """Face down and stand still."""
        self.direction = PlayerDir.DOWN
        self.walk_frame = STANDING_FRAME
        self.moving = False

    def update(self, direction: PlayerDir, moving: bool) -> None:
        """Set the facing direction and whether the player is walking."""
        self.direction = direction
        self.moving = moving
        if not moving:
            self.walk_frame = STANDING_FRAME

    def next_frame(self) -> None:
        """Advance to the next walking frame, skipping the standing pose."""
        if self.moving:
            self.walk_frame = (self.walk_frame + 1) % WALK_FRAMES
            if self.walk_frame == STANDING_FRAME:
                self.walk_frame = 1