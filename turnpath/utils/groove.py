"""Groove insert expansion."""
import logging
import math
from typing import List, Optional, Tuple

from ..models import GrooveInsert
from .gcode_format import round_coordinate

logger = logging.getLogger(__name__)

# (start, end, wall angle) with diameter-valued X
GrooveLine = Tuple[Tuple[float, float], Tuple[float, float], float]


def _wall_angle(angle: Optional[float]) -> float:
    return angle if angle else 90.0


def _wall_shift(depth: float, angle: float) -> float:
    """Z travel of a wall of the given angle over the groove depth."""
    if angle == 90.0:
        return 0.0
    return depth * math.tan(math.radians(90.0 - angle))


def expand_groove(x: float, z: float, groove: GrooveInsert) -> Optional[List[GrooveLine]]:
    """
    Expand a groove cut in at (x, z) into entry wall, floor and exit wall.

    The groove runs toward -Z over its width and inward by its depth.
    Sloped walls lean into the groove, narrowing the floor.

    Args:
        x: Diameter at the groove start
        z: Z at the groove start
        groove: Groove dimensions

    Returns:
        Three (start, end, angle) lines ending at (x, z - width), or None
        when the width or depth is not positive
    """
    if groove.width <= 0 or groove.depth <= 0:
        logger.debug("Groove at X%s Z%s ignored: non-positive size", x, z)
        return None

    left = _wall_angle(groove.left_angle)
    right = _wall_angle(groove.right_angle)
    floor_x = round_coordinate(x - groove.depth * 2)
    floor_left_z = round_coordinate(z - _wall_shift(groove.depth, left))
    floor_right_z = round_coordinate(z - groove.width + _wall_shift(groove.depth, right))
    exit_z = round_coordinate(z - groove.width)

    return [
        ((x, z), (floor_x, floor_left_z), left),
        ((floor_x, floor_left_z), (floor_x, floor_right_z), 0.0),
        ((floor_x, floor_right_z), (x, exit_z), right),
    ]
