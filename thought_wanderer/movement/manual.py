"""
Manual movement controller - arrow key steering
"""

from dataclasses import dataclass

from ..entities.character import Canvas, Character
from .direction import direction_from_signs


@dataclass(frozen=True)
class Controls:
    """
    Resolved input for one tick.

    up/down/left/right are HELD states; toggle_mode is an EDGE (true only
    on the tick the toggle key went down).
    """
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    toggle_mode: bool = False


class ManualController:
    """Moves the character from held keys, clamped to the canvas."""

    def __init__(self, canvas: Canvas):
        self.canvas = canvas

    def update(self, character: Character, controls: Controls):
        speed = character.speed
        dx, dy = 0.0, 0.0

        # Opposing keys cancel out
        if controls.up:
            dy -= speed
        if controls.down:
            dy += speed
        if controls.left:
            dx -= speed
        if controls.right:
            dx += speed

        character.is_moving = dx != 0 or dy != 0
        if character.is_moving:
            character.direction = direction_from_signs(dx, dy)

        character.x, character.y = self.canvas.clamp(
            character.x + dx, character.y + dy,
            character.half_width, character.half_height
        )
