"""
Character entity - the wanderer

=============================================================================
CHARACTER STATE OVERVIEW
=============================================================================

There is exactly one Character per session. It is plain state plus a few
small mutators; all decisions about WHERE to go live in the movement
strategies (movement/planner.py and movement/manual.py), and all decisions
about WHAT to say live in the speech package.

Who writes what:

    Field                 Written by
    -------------------   ------------------------------------------
    x, y, direction       active movement strategy
    is_moving             active movement strategy (every tick)
    animation_frame       update_animation() (scheduler, every tick)
    movement_mode         toggle_mode() / set_mode() (input edge)
    waypoint*             autonomous planner, cleared on mode change
    current_utterance     speech drain step

=============================================================================
COORDINATES
=============================================================================

(x, y) is the CENTER of the sprite, in canvas pixels, +Y down. The sprite
must stay fully visible, so the legal range on each axis is:

    [half_sprite, canvas_size - half_sprite]

Canvas.clamp() enforces that range.

=============================================================================
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .. import config
from .sprite import Direction


class MovementMode(Enum):
    """
    Who steers the character.

    AUTONOMOUS: random waypoints (the default, "wandering")
    MANUAL:     held arrow keys
    """
    AUTONOMOUS = "autonomous"
    MANUAL = "manual"


@dataclass
class Canvas:
    """Drawable area the character lives in (pixels)."""

    width: float
    height: float

    def bounds(self, half_width: float, half_height: float) -> Tuple[float, float, float, float]:
        """
        Legal center range for a sprite of the given half size.

        Returns (min_x, max_x, min_y, max_y). On a canvas smaller than the
        sprite the range collapses to the canvas center.
        """
        min_x, max_x = half_width, self.width - half_width
        min_y, max_y = half_height, self.height - half_height
        if max_x < min_x:
            min_x = max_x = self.width / 2
        if max_y < min_y:
            min_y = max_y = self.height / 2
        return min_x, max_x, min_y, max_y

    def clamp(self, x: float, y: float,
              half_width: float, half_height: float) -> Tuple[float, float]:
        """Clamp a sprite center into the canvas (hard wall, no bounce)."""
        min_x, max_x, min_y, max_y = self.bounds(half_width, half_height)
        return (max(min_x, min(max_x, x)),
                max(min_y, min(max_y, y)))


@dataclass(frozen=True)
class RenderState:
    """Read-only snapshot handed to the renderer once per frame."""

    x: float
    y: float
    direction: Direction
    animation_frame: int
    current_utterance: Optional[str]


class Character:
    """
    The wandering, thinking character.

    ==========================================================================
    ANIMATION TIMING
    ==========================================================================

    The walk cycle advances at a fixed WALL-CLOCK cadence (frame_speed ms),
    not once per tick, so it looks the same at 30 or 144 FPS:

        moving and now - last_frame_time >= frame_speed
            -> animation_frame = (animation_frame + 1) % frame_count
        not moving
            -> animation_frame = idle_frame

    ==========================================================================
    """

    def __init__(self, x: float, y: float,
                 speed: float = config.CHARACTER_SPEED,
                 width: int = config.SPRITE_WIDTH,
                 height: int = config.SPRITE_HEIGHT,
                 frame_count: int = config.FRAME_COUNT,
                 frame_speed: float = config.FRAME_SPEED,
                 idle_frame: int = config.IDLE_FRAME,
                 direction: Direction = Direction.RIGHT,
                 movement_mode: MovementMode = MovementMode.AUTONOMOUS):
        # -----------------------------------------------------------------
        # POSITION AND MOVEMENT
        # -----------------------------------------------------------------
        self.x = float(x)
        self.y = float(y)
        self.speed = speed
        self.direction = direction
        self.is_moving = False
        self.movement_mode = movement_mode

        # -----------------------------------------------------------------
        # SPRITE FOOTPRINT
        # -----------------------------------------------------------------
        self.width = width
        self.height = height

        # -----------------------------------------------------------------
        # ANIMATION
        # -----------------------------------------------------------------
        self.frame_count = frame_count
        self.frame_speed = frame_speed
        self.idle_frame = idle_frame
        self.animation_frame = idle_frame
        self.last_frame_time = 0.0

        # -----------------------------------------------------------------
        # AUTONOMOUS WAYPOINT (None while in MANUAL mode)
        # -----------------------------------------------------------------
        self.waypoint: Optional[Tuple[float, float]] = None
        self.waypoint_chosen_at = 0.0
        self.waypoint_timeout = 0.0

        # -----------------------------------------------------------------
        # SPEECH
        # -----------------------------------------------------------------
        # Sentence being spoken right now (drives the speech bubble)
        self.current_utterance: Optional[str] = None

    @classmethod
    def centered_on(cls, canvas: Canvas, **kwargs) -> 'Character':
        """Create a character standing in the middle of the canvas."""
        return cls(canvas.width / 2, canvas.height / 2, **kwargs)

    # =========================================================================
    # FOOTPRINT
    # =========================================================================

    @property
    def half_width(self) -> float:
        return self.width / 2

    @property
    def half_height(self) -> float:
        return self.height / 2

    def clamp_to(self, canvas: Canvas):
        """Pull the character back inside the canvas (after a resize)."""
        self.x, self.y = canvas.clamp(self.x, self.y, self.half_width, self.half_height)

    # =========================================================================
    # MOVEMENT MODE
    # =========================================================================

    def set_mode(self, mode: MovementMode):
        """
        Switch movement mode.

        Any mode change discards the pending waypoint, so switching back to
        AUTONOMOUS starts from a fresh random target.
        """
        if mode != self.movement_mode:
            self.movement_mode = mode
            self.clear_waypoint()

    def toggle_mode(self) -> MovementMode:
        """Flip between AUTONOMOUS and MANUAL. Returns the new mode."""
        if self.movement_mode == MovementMode.AUTONOMOUS:
            self.set_mode(MovementMode.MANUAL)
        else:
            self.set_mode(MovementMode.AUTONOMOUS)
        return self.movement_mode

    # =========================================================================
    # WAYPOINT
    # =========================================================================

    def set_waypoint(self, x: float, y: float, now: float, timeout: float):
        self.waypoint = (x, y)
        self.waypoint_chosen_at = now
        self.waypoint_timeout = timeout

    def clear_waypoint(self):
        self.waypoint = None
        self.waypoint_chosen_at = 0.0
        self.waypoint_timeout = 0.0

    # =========================================================================
    # ANIMATION
    # =========================================================================

    def update_animation(self, now: float):
        """Advance the walk cycle while moving, show the idle pose otherwise."""
        if not self.is_moving:
            self.animation_frame = self.idle_frame
            return

        if now - self.last_frame_time >= self.frame_speed:
            self.animation_frame = (self.animation_frame + 1) % self.frame_count
            self.last_frame_time = now

    # =========================================================================
    # RENDERING SUPPORT
    # =========================================================================

    def render_state(self) -> RenderState:
        return RenderState(
            x=self.x,
            y=self.y,
            direction=self.direction,
            animation_frame=self.animation_frame,
            current_utterance=self.current_utterance,
        )
