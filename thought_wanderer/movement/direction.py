"""
Direction quantizer - motion vector to one of 8 facings

=============================================================================
ANGLE BUCKETING
=============================================================================

atan2(dy, dx) gives the heading in degrees, -180..180. Each facing owns a
45 degree sector CENTERED on its compass point, so sector edges sit at odd
multiples of 22.5 degrees:

          -90 UP
    -135 UP_LEFT    -45 UP_RIGHT
    180 LEFT     +     0 RIGHT
    135 DOWN_LEFT    45 DOWN_RIGHT
           90 DOWN

Shifting the angle by +22.5 and flooring by 45 turns "which sector" into an
integer 0..7 counted clockwise from RIGHT (on screen, +Y is down).

Lower edges are inclusive: exactly 22.5 degrees is DOWN_RIGHT, exactly
-22.5 is RIGHT, and both 180 and -180 are LEFT.

=============================================================================
"""

import math

from ..entities.sprite import Direction

# Sector index (clockwise from RIGHT) -> facing
_SECTORS = (
    Direction.RIGHT,
    Direction.DOWN_RIGHT,
    Direction.DOWN,
    Direction.DOWN_LEFT,
    Direction.LEFT,
    Direction.UP_LEFT,
    Direction.UP,
    Direction.UP_RIGHT,
)

# (sign dx, sign dy) -> facing, diagonals checked first
_SIGN_TABLE = (
    ((1, -1), Direction.UP_RIGHT),
    ((-1, -1), Direction.UP_LEFT),
    ((1, 1), Direction.DOWN_RIGHT),
    ((-1, 1), Direction.DOWN_LEFT),
    ((1, 0), Direction.RIGHT),
    ((-1, 0), Direction.LEFT),
    ((0, -1), Direction.UP),
    ((0, 1), Direction.DOWN),
)


def quantize_direction(dx: float, dy: float) -> Direction:
    """
    Map a non-zero motion vector to the nearest of the 8 facings.

    Raises ValueError for the zero vector (it has no heading).
    """
    if dx == 0 and dy == 0:
        raise ValueError("Cannot quantize a zero motion vector")

    degrees = math.degrees(math.atan2(dy, dx))
    sector = int(math.floor((degrees + 22.5) / 45.0)) % len(_SECTORS)
    return _SECTORS[sector]


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def direction_from_signs(dx: float, dy: float) -> Direction:
    """
    Facing for axis-aligned key input, looked up by the signs of (dx, dy).

    Only the sign matters, so this always agrees with quantize_direction()
    for the 8 possible key combinations. Raises ValueError for (0, 0).
    """
    signs = (_sign(dx), _sign(dy))
    for key, direction in _SIGN_TABLE:
        if signs == key:
            return direction
    raise ValueError("Cannot pick a facing for zero input")
