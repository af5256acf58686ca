"""
Thought Wanderer - an autonomous character that walks and thinks out loud

Requisites:
    pip install pygame pillow httpx pyttsx3
"""

from .clock import FrameClock
from .config import WandererConfig
from .entities import Canvas, Character, Direction, MovementMode, SpriteSheet
from .movement import AutonomousPlanner, Controls, ManualController, quantize_direction
from .scheduler import TickScheduler, WandererContext
from .speech import SpeechQueue, ThoughtThrottle, split_sentences

__version__ = "1.0.0"
__all__ = [
    "FrameClock",
    "WandererConfig",
    "Canvas",
    "Character",
    "Direction",
    "MovementMode",
    "SpriteSheet",
    "AutonomousPlanner",
    "Controls",
    "ManualController",
    "quantize_direction",
    "TickScheduler",
    "WandererContext",
    "SpeechQueue",
    "ThoughtThrottle",
    "split_sentences",
]
