"""
Movement strategies: random wandering and keyboard steering
"""

from .direction import quantize_direction, direction_from_signs
from .planner import AutonomousPlanner
from .manual import Controls, ManualController

__all__ = [
    "quantize_direction",
    "direction_from_signs",
    "AutonomousPlanner",
    "Controls",
    "ManualController",
]
