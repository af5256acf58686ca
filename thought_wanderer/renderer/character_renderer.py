"""
Character drawing (pygame)

=============================================================================
LAZY SURFACE CACHE
=============================================================================

The spritesheet is cut into PIL images at load time, but pygame surfaces
can only be created once a display exists. Each (direction, frame) surface
is therefore converted on first use and cached:

    key = (direction, frame)
    if key not in cache:
        cache[key] = pil_to_surface(sheet.get_frame(direction, frame))

At most 8 x 8 = 64 conversions ever happen; after that drawing is a dict
lookup plus a blit.

=============================================================================
PLACEHOLDER
=============================================================================

Without a spritesheet the character is drawn as a circle with a short line
pointing where it faces, so the app still runs from a bare checkout.

=============================================================================
"""

import math
from typing import Dict, Optional, Tuple

import pygame

from ..entities.character import RenderState
from ..entities.sprite import Direction, SpriteSheet

PLACEHOLDER_FILL = (90, 110, 160)
PLACEHOLDER_OUTLINE = (20, 20, 30)

# Unit vector of each facing, screen coordinates (+Y down)
_FACING = {
    Direction.RIGHT: (1.0, 0.0),
    Direction.UP: (0.0, -1.0),
    Direction.UP_RIGHT: (math.sqrt(0.5), -math.sqrt(0.5)),
    Direction.UP_LEFT: (-math.sqrt(0.5), -math.sqrt(0.5)),
    Direction.DOWN: (0.0, 1.0),
    Direction.DOWN_RIGHT: (math.sqrt(0.5), math.sqrt(0.5)),
    Direction.DOWN_LEFT: (-math.sqrt(0.5), math.sqrt(0.5)),
    Direction.LEFT: (-1.0, 0.0),
}


def pil_to_surface(image) -> pygame.Surface:
    """Convert an RGBA PIL image into a pygame surface."""
    return pygame.image.frombytes(image.tobytes(), image.size, 'RGBA')


class CharacterRenderer:
    """Blits the current walk frame centered on the character."""

    def __init__(self, sheet: Optional[SpriteSheet], width: int, height: int):
        self.sheet = sheet
        self.width = width
        self.height = height
        self._surface_cache: Dict[Tuple[Direction, int], pygame.Surface] = {}

    def get_surface(self, direction: Direction, frame: int) -> pygame.Surface:
        key = (direction, frame)
        surface = self._surface_cache.get(key)
        if surface is None:
            surface = pil_to_surface(self.sheet.get_frame(direction, frame))
            self._surface_cache[key] = surface
        return surface

    def draw(self, surface: pygame.Surface, state: RenderState):
        if self.sheet is None:
            self._draw_placeholder(surface, state)
            return

        frame = self.get_surface(state.direction, state.animation_frame)
        surface.blit(frame, (int(state.x - self.width / 2),
                             int(state.y - self.height / 2)))

    def _draw_placeholder(self, surface: pygame.Surface, state: RenderState):
        radius = min(self.width, self.height) // 4
        center = (int(state.x), int(state.y))
        pygame.draw.circle(surface, PLACEHOLDER_FILL, center, radius)
        pygame.draw.circle(surface, PLACEHOLDER_OUTLINE, center, radius, 2)

        fx, fy = _FACING[state.direction]
        tip = (int(state.x + fx * radius * 1.5), int(state.y + fy * radius * 1.5))
        pygame.draw.line(surface, PLACEHOLDER_OUTLINE, center, tip, 3)
