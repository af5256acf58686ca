"""
Configuration - constants and tunables

=============================================================================
UNITS
=============================================================================

- Distances are in PIXELS (canvas coordinates, +Y goes down)
- Durations are in MILLISECONDS (the frame clock counts milliseconds)
- Movement speed is in PIXELS PER TICK (one tick = one display frame)

=============================================================================
ENVIRONMENT
=============================================================================

Every WandererConfig field can be set from a WANDERER_<FIELD> environment
variable (WANDERER_SERVER_URL, WANDERER_VOICE, WANDERER_LANGUAGE, ...).
Command line flags are applied on top with with_overrides().

=============================================================================
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# SPRITESHEET LAYOUT
# =============================================================================

SPRITE_WIDTH = 138
SPRITE_HEIGHT = 138
FRAME_COUNT = 8      # Walk frames per direction (columns)
FRAME_SPEED = 100    # ms between two walk frames
IDLE_FRAME = 3       # Column shown while standing still

# =============================================================================
# MOVEMENT
# =============================================================================

CHARACTER_SPEED = 3.0          # px per tick
ARRIVAL_RADIUS = 5.0           # px, "close enough" to a waypoint
WAYPOINT_TIMEOUT_MIN = 3000.0  # ms
WAYPOINT_TIMEOUT_MAX = 6000.0  # ms (exclusive)

# =============================================================================
# THOUGHTS AND SPEECH
# =============================================================================

THOUGHT_INTERVAL = 8000.0      # ms between two accepted thoughts
STATUS_CHECK_INTERVAL = 5000.0 # ms between service status checks
REQUEST_TIMEOUT = 30.0         # seconds, HTTP timeout for /think

DEFAULT_SERVER_URL = "http://localhost:3000"
DEFAULT_VOICE = "Thomas"
DEFAULT_LANGUAGE = "fr"
SPEECH_RATE = 0.9              # Fraction of the engine's default rate

# =============================================================================
# WINDOW
# =============================================================================

DEFAULT_CANVAS_WIDTH = 1280
DEFAULT_CANVAS_HEIGHT = 720
DEFAULT_FPS = 60
DEFAULT_SPRITESHEET = "Spritesheet Walk.png"


class WandererConfig(BaseSettings):
    """Tunables for one wanderer session."""

    model_config = SettingsConfigDict(env_prefix="WANDERER_", frozen=True)

    server_url: str = DEFAULT_SERVER_URL
    spritesheet: Optional[str] = DEFAULT_SPRITESHEET
    canvas_width: int = DEFAULT_CANVAS_WIDTH
    canvas_height: int = DEFAULT_CANVAS_HEIGHT
    fps: int = DEFAULT_FPS

    sprite_width: int = SPRITE_WIDTH
    sprite_height: int = SPRITE_HEIGHT
    frame_count: int = FRAME_COUNT
    frame_speed: float = FRAME_SPEED
    idle_frame: int = IDLE_FRAME

    speed: float = CHARACTER_SPEED
    arrival_radius: float = ARRIVAL_RADIUS
    waypoint_timeout_min: float = WAYPOINT_TIMEOUT_MIN
    waypoint_timeout_max: float = WAYPOINT_TIMEOUT_MAX

    thought_interval: float = THOUGHT_INTERVAL
    status_check_interval: float = STATUS_CHECK_INTERVAL
    request_timeout: float = REQUEST_TIMEOUT

    voice: str = DEFAULT_VOICE
    language: str = DEFAULT_LANGUAGE
    speech_rate: float = SPEECH_RATE
    mute: bool = False
    start_manual: bool = False

    def with_overrides(self, **changes) -> "WandererConfig":
        """Copy with the non-None values of `changes` applied."""
        return self.model_copy(update={k: v for k, v in changes.items() if v is not None})
