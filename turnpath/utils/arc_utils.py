"""Arc direction and offset calculation utilities."""
from typing import Tuple

from ..models import TOOL_POST_REAR, CUT_TOWARD_PLUS_Z
from .gcode_format import round_coordinate


def is_clockwise(is_left_turn: bool, tool_post: str, cutting_direction: str) -> bool:
    """
    Decide whether an arc is programmed clockwise.

    The turn sense is read in the drawing view (Z right, X up). A rear tool
    post and cutting toward +Z each mirror the programmed view once.

    Args:
        is_left_turn: Arc turns left in the drawing view
        tool_post: 'front' or 'rear'
        cutting_direction: '-z' or '+z'

    Returns:
        True for a clockwise (G02) arc
    """
    return is_left_turn ^ (tool_post == TOOL_POST_REAR) ^ (cutting_direction == CUT_TOWARD_PLUS_Z)


def classify_arc_direction(is_left_turn: bool, tool_post: str, cutting_direction: str) -> str:
    """
    Determine arc code for a resolved corner.

    Returns:
        "G02" for clockwise, "G03" for counter-clockwise
    """
    if is_clockwise(is_left_turn, tool_post, cutting_direction):
        return "G02"
    return "G03"


def calculate_ik_offsets(
    start: Tuple[float, float],
    center: Tuple[float, float]
) -> Tuple[float, float]:
    """
    Calculate I, K offsets for arc commands.

    I is radius-valued: the X difference is halved because both points
    carry diameter X.

    Args:
        start: Arc start (diameter X, Z)
        center: Arc center (diameter X, Z)

    Returns:
        Tuple of (I, K) offsets
    """
    i = (center[0] - start[0]) / 2.0
    k = center[1] - start[1]
    return (round_coordinate(i), round_coordinate(k))
