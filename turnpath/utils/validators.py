"""Profile, tool and machine validation utilities."""
from typing import List, Optional, Sequence

from ..models import (
    CORNER_TYPES,
    MachineSettings,
    Point,
    Tool,
    TOOL_HANDS,
    TOOL_POST_FRONT,
    TOOL_POST_REAR,
    TOOL_TYPES,
    CUT_TOWARD_MINUS_Z,
    CUT_TOWARD_PLUS_Z,
)
from .nose_compensation import is_valid_tip_number


def validate_points(points: Sequence[Point], max_points: Optional[int] = None) -> List[str]:
    """
    Validate profile points and their corner and groove data.

    Args:
        points: Profile vertices
        max_points: Optional upper limit on the number of points

    Returns:
        List of error messages (empty if all valid)
    """
    errors = []
    if len(points) < 2:
        errors.append("A profile needs at least 2 points")
    if max_points is not None and len(points) > max_points:
        errors.append(f"Profile has {len(points)} points, limit is {max_points}")

    for number, point in enumerate(points, start=1):
        if point.x < 0:
            errors.append(f"Point {number}: diameter X {point.x} is negative")

        corner = point.corner
        if corner.corner_type not in CORNER_TYPES:
            errors.append(f"Point {number}: unknown corner type '{corner.corner_type}'")
        if corner.size < 0:
            errors.append(f"Point {number}: corner size {corner.size} is negative")
        if corner.second_arc is not None:
            if not corner.is_radius:
                errors.append(f"Point {number}: a second arc needs a radius corner")
            if not corner.second_arc.is_radius:
                errors.append(f"Point {number}: second arc must be a concave or convex radius")
            elif corner.second_arc.size <= 0:
                errors.append(f"Point {number}: second arc size must be positive")

        groove = point.groove
        if groove is not None:
            if groove.width <= 0:
                errors.append(f"Point {number}: groove width must be positive")
            if groove.depth <= 0:
                errors.append(f"Point {number}: groove depth must be positive")
            elif groove.depth * 2 > point.x:
                errors.append(f"Point {number}: groove depth {groove.depth} passes the axis")
            for side, angle in (('left', groove.left_angle), ('right', groove.right_angle)):
                if angle is not None and not 0 < angle <= 90:
                    errors.append(f"Point {number}: groove {side} wall angle {angle} outside (0, 90]")

    return errors


def validate_tool(tool: Tool) -> List[str]:
    """
    Validate a tool library entry.

    Returns:
        List of error messages (empty if valid)
    """
    errors = []
    label = tool.id or '?'
    if tool.machining_type not in TOOL_TYPES:
        errors.append(f"Tool {label}: unknown type '{tool.machining_type}'")
    if tool.nose_radius is None or tool.nose_radius < 0:
        errors.append(f"Tool {label}: nose radius must be zero or positive")
    if not is_valid_tip_number(tool.tip_number):
        errors.append(f"Tool {label}: tip number {tool.tip_number} outside 0-9")
    if tool.hand not in TOOL_HANDS:
        errors.append(f"Tool {label}: unknown hand '{tool.hand}'")
    return errors


def validate_machine(machine: MachineSettings, tools: Sequence[Tool]) -> List[str]:
    """
    Validate machine settings against the tool library.

    Returns:
        List of error messages (empty if valid)
    """
    errors = []
    if machine.tool_post not in (TOOL_POST_FRONT, TOOL_POST_REAR):
        errors.append(f"Unknown tool post '{machine.tool_post}'")
    if machine.cutting_direction not in (CUT_TOWARD_MINUS_Z, CUT_TOWARD_PLUS_Z):
        errors.append(f"Unknown cutting direction '{machine.cutting_direction}'")
    if machine.compensation_enabled:
        if not any(tool.id == machine.active_tool_id for tool in tools):
            errors.append(f"Active tool '{machine.active_tool_id}' is not in the tool library")
    return errors


def validate_profile(
    points: Sequence[Point],
    machine: MachineSettings,
    tools: Sequence[Tool],
    max_points: Optional[int] = None
) -> List[str]:
    """Run every validator over a profile document."""
    errors = validate_points(points, max_points)
    for tool in tools:
        errors.extend(validate_tool(tool))
    errors.extend(validate_machine(machine, tools))
    return errors
