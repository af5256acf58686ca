"""
Autonomous movement planner - random waypoint wandering

=============================================================================
ALGORITHM
=============================================================================

Every tick:

1. REFRESH: If there is no waypoint, or the current one is older than its
   timeout, pick a new random point inside the canvas and draw a new
   timeout in [3000, 6000) ms.
2. ARRIVED?: If the waypoint is closer than the arrival radius, stand
   still. The waypoint is KEPT until it times out, so the character idles
   for a random while before setting off again.
3. STEER: Otherwise step `speed` pixels straight toward it and face the
   direction of travel.

Re-rolling on a timer (not only on arrival) gives wandering that sometimes
changes its mind halfway, and a waypoint that can never be reached exactly
cannot freeze the character forever.

=============================================================================
"""

import logging
import math
import random

from .. import config
from ..entities.character import Canvas, Character
from .direction import quantize_direction

logger = logging.getLogger(__name__)


class AutonomousPlanner:
    """
    Steers the character toward random waypoints.

    The random source and the clock are injected so tests can replay an
    exact path: pass `random.Random(seed)` and a FrameClock.
    """

    def __init__(self, canvas: Canvas, clock, rng: random.Random = None,
                 arrival_radius: float = config.ARRIVAL_RADIUS,
                 timeout_min: float = config.WAYPOINT_TIMEOUT_MIN,
                 timeout_max: float = config.WAYPOINT_TIMEOUT_MAX):
        self.canvas = canvas
        self.clock = clock
        self.rng = rng or random.Random()
        self.arrival_radius = arrival_radius
        self.timeout_min = timeout_min
        self.timeout_max = timeout_max

    def _draw_timeout(self) -> float:
        # random() is in [0, 1) so the upper bound stays exclusive
        return self.timeout_min + self.rng.random() * (self.timeout_max - self.timeout_min)

    def _needs_new_waypoint(self, character: Character, now: float) -> bool:
        if character.waypoint is None:
            return True
        return now - character.waypoint_chosen_at > character.waypoint_timeout

    def pick_waypoint(self, character: Character, now: float):
        """Choose a fresh random target inside the canvas interior."""
        min_x, max_x, min_y, max_y = self.canvas.bounds(
            character.half_width, character.half_height
        )
        x = min_x + self.rng.random() * (max_x - min_x)
        y = min_y + self.rng.random() * (max_y - min_y)
        character.set_waypoint(x, y, now, self._draw_timeout())
        logger.debug("New waypoint (%.0f, %.0f) for %.0f ms", x, y, character.waypoint_timeout)

    def update(self, character: Character):
        """Run one planning + steering step."""
        now = self.clock.now()

        if self._needs_new_waypoint(character, now):
            self.pick_waypoint(character, now)

        target_x, target_y = character.waypoint
        dx = target_x - character.x
        dy = target_y - character.y
        distance = math.hypot(dx, dy)

        if distance < self.arrival_radius or distance == 0:
            character.is_moving = False
            return

        character.is_moving = True
        character.x += (dx / distance) * character.speed
        character.y += (dy / distance) * character.speed
        # A step longer than the arrival radius can overshoot a target near the edge
        character.clamp_to(self.canvas)
        character.direction = quantize_direction(dx, dy)
