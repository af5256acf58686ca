"""
Entity state for the wanderer
"""

from .sprite import Direction, SpriteSheet
from .character import Canvas, Character, MovementMode, RenderState

__all__ = [
    "Direction",
    "SpriteSheet",
    "Canvas",
    "Character",
    "MovementMode",
    "RenderState",
]
