"""
Walk spritesheet using PIL

=============================================================================
SPRITESHEET LAYOUT
=============================================================================

The wanderer uses an 8x8 walk sheet: one ROW per facing direction and one
COLUMN per walk frame.

    +------+------+------+-----+------+
    | R f0 | R f1 | R f2 | ... | R f7 |   <- Row 0: Right
    +------+------+------+-----+------+
    | U f0 | U f1 | U f2 | ... | U f7 |   <- Row 1: Up
    +------+------+------+-----+------+
    |                ...               |
    +------+------+------+-----+------+
    | L f0 | L f1 | L f2 | ... | L f7 |   <- Row 7: Left
    +------+------+------+-----+------+

The row order is NOT the usual Down-Left-Right-Up: it is whatever order the
artist drew the sheet in, and the Direction enum below mirrors it so that
`direction.value` is directly the row index.

Column 3 doubles as the idle pose (see config.IDLE_FRAME).

=============================================================================
"""

from enum import IntEnum
from pathlib import Path
from typing import Dict, List, Tuple

from PIL import Image

from ..errors import SpriteSheetError


class Direction(IntEnum):
    """
    Character facing direction.

    Values match the spritesheet row order, so `frames[direction]` and
    `direction * frame_height` both work without a lookup table.

    Screen coordinates: +Y is DOWN, so a vector at +45 degrees (atan2 with
    positive dy) points DOWN_RIGHT.
    """
    RIGHT = 0
    UP = 1
    UP_RIGHT = 2
    UP_LEFT = 3
    DOWN = 4
    DOWN_RIGHT = 5
    DOWN_LEFT = 6
    LEFT = 7


class SpriteSheet:
    """
    Pre-cut walk frames from an 8-direction spritesheet.

    The frames are cut once at load time; `get_frame()` is a plain list
    lookup so the render loop never crops images.
    """

    ROWS = len(Direction)

    def __init__(self, path: str, frame_width: int, frame_height: int,
                 frame_count: int):
        """
        Load and cut a walk spritesheet.

        Parameters:
        -----------
        path : str
            Path to the spritesheet image
        frame_width, frame_height : int
            Size of one cell in pixels
        frame_count : int
            Number of walk frames (columns) per direction

        Raises SpriteSheetError if the file is missing, unreadable, or
        smaller than `frame_count x 8` cells.
        """
        self.path = Path(path)
        self.frame_width = frame_width
        self.frame_height = frame_height
        self.frame_count = frame_count

        try:
            # RGBA keeps the transparent background of the walk cycle
            self.image = Image.open(self.path).convert('RGBA')
        except (OSError, ValueError) as e:
            raise SpriteSheetError(f"Cannot load spritesheet '{path}': {e}") from e

        needed = (frame_width * frame_count, frame_height * self.ROWS)
        if self.image.width < needed[0] or self.image.height < needed[1]:
            raise SpriteSheetError(
                f"Spritesheet '{self.path.name}' is {self.image.width}x{self.image.height}, "
                f"expected at least {needed[0]}x{needed[1]}"
            )

        self.frames: Dict[Direction, List[Image.Image]] = {}
        self._cut_frames()

    def _cut_frames(self):
        """Crop every (direction, frame) cell out of the sheet."""
        for direction in Direction:
            row = direction.value
            self.frames[direction] = [
                self.image.crop(self.cell_box(row, col))
                for col in range(self.frame_count)
            ]

    def cell_box(self, row: int, col: int) -> Tuple[int, int, int, int]:
        """PIL crop box (left, top, right, bottom) of one cell."""
        x = col * self.frame_width
        y = row * self.frame_height
        return (x, y, x + self.frame_width, y + self.frame_height)

    def get_frame(self, direction: Direction, frame_index: int) -> Image.Image:
        """Frame image for a direction and walk frame."""
        return self.frames[direction][frame_index]
